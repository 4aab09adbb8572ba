"""
Typed request and response models.

Modules
-------
payload     Fitted-model payloads (linear, ensemble) and validation datasets.
result      Interpretation and simulation envelopes.
"""

"""
model_insight.interpretation — Turn fitted-model payloads into prose and metrics.

Modules:
  detector   — Model type detection and payload parsing.
  importance — Sum- and max-based importance normalization.
  linear     — Linear / GLM regression interpreter.
  ensemble   — Random forest interpreter.
  service    — ``interpret_model`` façade and batch helper.
"""

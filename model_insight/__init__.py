"""
model_insight: interpretation and what-if simulation for fitted models.

Subpackages
-----------
models          Pydantic payload and result models.
evaluation      Regression quality metrics.
interpretation  Model type detection, interpreters and the interpret façade.
simulation      Scenario simulation and the non-negative target rule.
reporting       Number formatting and ASCII terminal reports.
utils           Logging setup.
"""

__version__ = "0.1.0"

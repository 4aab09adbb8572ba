"""
What-if scenario simulation on linear models.

Modules
-------
rules       Names of outcomes that cannot be negative.
scenario    Contributions, estimate, narrative and recommendations.
"""

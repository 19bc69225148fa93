"""
EMERGE error-pattern analytics.

Cross-group error-pattern analysis for reading and math intervention data.
"""

__version__ = "0.1.0"

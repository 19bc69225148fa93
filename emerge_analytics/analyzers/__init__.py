"""
Analyzers package for the error-pattern analytics system.

The PatternAnalyzer composes the single-purpose analyzer modules in this
package into the full report and the dashboard summary.
"""

from .pattern_analyzer import PatternAnalyzer

__all__ = ["PatternAnalyzer"]

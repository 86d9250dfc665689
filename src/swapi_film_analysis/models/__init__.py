"""
Summaries fitted on the flat table:
- per-group counts and means
- a single-predictor linear trend
"""

from . import aggregate, linear_trend  # noqa: F401

__all__ = ["aggregate", "linear_trend"]

"""
Record flattening and derived columns for the film analysis.
"""

from . import flatten, people  # noqa: F401

__all__ = ["flatten", "people"]

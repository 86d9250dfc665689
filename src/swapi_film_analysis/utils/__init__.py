"""
Paths, logging setup and the table / plot helpers.
"""

__all__ = []

# Always make the light modules available (no heavy deps here)
from . import paths, logging_setup  # noqa: F401
__all__ += ["paths", "logging_setup"]

from . import plotting  # noqa: F401
__all__.append("plotting")

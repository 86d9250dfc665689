"""
API clients and wrappers (the SWAPI client) used to fetch film data.
"""

from .swapi_client import SWAPIClient  # noqa: F401

__all__ = ["SWAPIClient"]

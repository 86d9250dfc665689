"""
swapi_film_analysis

Package containing code for the Star Wars film analysis:
- data fetching (SWAPI)
- record flattening and derived columns
- aggregation and a single-predictor linear trend
- table rendering, plots and the end-to-end pipeline
"""

# Do NOT import subpackages at the top level here.
# This avoids eager imports and circular import issues.

__all__ = ["api", "features", "models", "utils", "deployment", "errors"]

__version__ = "0.1.0"

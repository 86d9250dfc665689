"""
Exceptions raised while flattening records and fitting trends.

All of them are ValueErrors so callers that already guard against bad input
with ``except ValueError`` keep working.
"""

from __future__ import annotations

from typing import Any, Optional


class FilmAnalysisError(ValueError):
    """Base class for every error raised by this package."""


class MissingFieldError(FilmAnalysisError):
    def __init__(self, index: int, field: str, detail: Optional[str] = None):
        self.index = index
        self.field = field
        msg = f"Record {index} is missing field '{field}'"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class OutOfRangeError(FilmAnalysisError):
    def __init__(self, value: Any, index: Optional[int] = None):
        self.value = value
        self.index = index
        where = f" in record {index}" if index is not None else ""
        super().__init__(f"Episode {value!r}{where} is outside the known range [1, inf)")


class InsufficientDataError(FilmAnalysisError):
    def __init__(self, n: int, required: int = 2):
        self.n = n
        self.required = required
        super().__init__(
            f"Need at least {required} rows with both fields defined, got {n}."
        )


class DegenerateInputError(FilmAnalysisError):
    """Predictor has zero variance, so the slope is undefined."""

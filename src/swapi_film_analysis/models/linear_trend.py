from __future__ import annotations

from typing import Any, NamedTuple, Sequence

import numpy as np
from sklearn.metrics import r2_score

from swapi_film_analysis.errors import DegenerateInputError, InsufficientDataError
from swapi_film_analysis.models.aggregate import is_defined, row_value


class LinearTrend(NamedTuple):
    intercept: float
    slope: float
    r_squared: float = float("nan")
    n: int = 0

    def predict(self, x):
        return self.intercept + self.slope * np.asarray(x, dtype=float)


def fit_linear_trend(table: Sequence[Any], predictor_field: str, response_field: str) -> LinearTrend:
    """
    Ordinary least squares of `response_field` on `predictor_field`.

    Closed form for one predictor:
        slope     = sum((x - x_mean) * (y - y_mean)) / sum((x - x_mean) ** 2)
        intercept = y_mean - slope * x_mean

    Rows where either field is undefined are skipped.
    """
    xs, ys = [], []
    for i, row in enumerate(table):
        x = row_value(row, predictor_field, i)
        y = row_value(row, response_field, i)
        if is_defined(x) and is_defined(y):
            xs.append(float(x))
            ys.append(float(y))

    if len(xs) < 2:
        raise InsufficientDataError(len(xs))

    x = np.asarray(xs)
    y = np.asarray(ys)
    # compare raw values; x - x.mean() can leave rounding noise for constants like 0.1
    if np.ptp(x) == 0:
        raise DegenerateInputError(
            f"Predictor '{predictor_field}' has zero variance across {len(xs)} rows."
        )
    if np.ptp(y) == 0:
        # flat response: the line is y itself and fits exactly
        return LinearTrend(intercept=float(y[0]), slope=0.0, r_squared=1.0, n=len(xs))

    dx = x - x.mean()
    sxx = float(np.sum(dx * dx))
    slope = float(np.sum(dx * (y - y.mean())) / sxx)
    intercept = float(y.mean() - slope * x.mean())
    r2 = float(r2_score(y, intercept + slope * x))
    return LinearTrend(intercept=intercept, slope=slope, r_squared=r2, n=len(xs))

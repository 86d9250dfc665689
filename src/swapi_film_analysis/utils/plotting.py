from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import pandas as pd

from swapi_film_analysis.features.flatten import FlatRow, to_frame
from swapi_film_analysis.models.linear_trend import LinearTrend, fit_linear_trend
from swapi_film_analysis.utils.paths import RESULTS_DIR

logger = logging.getLogger(__name__)


def _as_frame(table) -> pd.DataFrame:
    if isinstance(table, pd.DataFrame):
        return table
    rows = list(table)
    if rows and isinstance(rows[0], FlatRow):
        return to_frame(rows)
    return pd.DataFrame(rows)


def render_table(table, columns: Optional[Sequence[str]] = None) -> str:
    """Plain-text rendering, one line per row, in table order."""
    df = _as_frame(table)
    if columns is not None:
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise KeyError(f"Columns not in table: {missing}")
        df = df[list(columns)]
    return df.to_string(index=False, na_rep="undefined")


def _get_ax(ax, figsize=(10, 4)):
    if ax is None:
        _, ax = plt.subplots(figsize=figsize)
    return ax


def plot_bar(frame: pd.DataFrame, x: str, y: str, color: Optional[str] = None, ax=None, title: str = ""):
    """Bar chart of `y` per `x`, bars coloured by the categorical `color` column."""
    ax = _get_ax(ax)
    if color is None:
        ax.bar(frame[x].astype(str), frame[y])
    else:
        for key, grp in frame.groupby(color, observed=True, sort=True):
            ax.bar(grp[x].astype(str), grp[y], label=str(key))
        ax.legend(title=color)
    ax.set_xlabel(x); ax.set_ylabel(y)
    if title:
        ax.set_title(title)
    ax.tick_params(axis="x", labelrotation=45)
    return ax


def plot_scatter_with_trend(
    frame: pd.DataFrame,
    x: str,
    y: str,
    color: Optional[str] = None,
    trend: Optional[LinearTrend] = None,
    ax=None,
    title: str = "",
):
    """Scatter of `y` against `x` with the fitted OLS line drawn over it."""
    ax = _get_ax(ax, figsize=(7, 5))
    if color is None:
        ax.scatter(frame[x], frame[y])
    else:
        for key, grp in frame.groupby(color, observed=True, sort=True):
            ax.scatter(grp[x], grp[y], label=str(key))

    if trend is None:
        trend = fit_linear_trend(frame[[x, y]].to_dict("records"), x, y)
    xs = pd.Series([frame[x].min(), frame[x].max()], dtype=float)
    ax.plot(xs, trend.predict(xs), linestyle="--", color="black",
            label=f"y = {trend.intercept:.2f} + {trend.slope:.2f}x")
    ax.legend(title=color)

    ax.set_xlabel(x); ax.set_ylabel(y)
    if title:
        ax.set_title(title)
    return ax


def save_figure(fig, name: str, folder: Path = RESULTS_DIR) -> Path:
    folder = Path(folder)
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / f"{name}.png"
    fig.savefig(path, bbox_inches="tight")
    logger.info("Saved figure to %s", path)
    return path

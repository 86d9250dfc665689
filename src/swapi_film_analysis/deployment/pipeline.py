"""
End-to-end film analysis.

This file:
- Fetches the film records from SWAPI.
- Flattens them into the analysis table (ship totals, hyperdrive ratio, trilogy).
- Aggregates the hyperdrive ratio per trilogy.
- Fits the linear trend between two table columns.
- Optionally summarises characters per species.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional

import pandas as pd

from swapi_film_analysis.api.swapi_client import SWAPIClient
from swapi_film_analysis.features.flatten import FlatRow, flatten, to_frame
from swapi_film_analysis.features.people import flatten_people
from swapi_film_analysis.models.aggregate import GroupStat, aggregate_by, aggregate_frame
from swapi_film_analysis.models.linear_trend import LinearTrend, fit_linear_trend

logger = logging.getLogger(__name__)


@dataclass
class FilmAnalysis:
    table: List[FlatRow]
    frame: pd.DataFrame
    by_trilogy: Dict[Hashable, GroupStat]
    trend: LinearTrend


# -------------------------------------------------------------------
# 1. Films: flatten, aggregate, fit
# -------------------------------------------------------------------

def run_film_analysis(
    client: Optional[SWAPIClient] = None,
    *,
    predictor: str = "planet_count",
    response: str = "ship_total",
) -> FilmAnalysis:
    """
    Main entry point for notebooks / jobs.

    Any flatten or fit error propagates; nothing is retried here.
    """
    if client is None:
        client = SWAPIClient.from_env()

    records = client.films()
    table = flatten(records)
    frame = to_frame(table).sort_values("episode", kind="stable").reset_index(drop=True)

    by_trilogy = aggregate_by(table, "trilogy", "hyperdrive_ratio")
    trend = fit_linear_trend(table, predictor, response)
    logger.info(
        "Fitted %s ~ %s on %d films: intercept=%.3f slope=%.3f r2=%.3f",
        response, predictor, trend.n, trend.intercept, trend.slope, trend.r_squared,
    )
    return FilmAnalysis(table=table, frame=frame, by_trilogy=by_trilogy, trend=trend)


# -------------------------------------------------------------------
# 2. Characters per species
# -------------------------------------------------------------------

def run_species_summary(
    client: Optional[SWAPIClient] = None,
    value_field: str = "height",
) -> pd.DataFrame:
    """Species with more than one character, with their mean `value_field`."""
    if client is None:
        client = SWAPIClient.from_env()

    species_names = SWAPIClient.names_by_url(client.species())
    rows = flatten_people(client.people(), species_names)
    stats = aggregate_by(rows, "species", value_field, exclude_singletons=True)
    logger.info("%d species with more than one character", len(stats))
    return aggregate_frame(stats, key_name="species")


if __name__ == "__main__":
    from swapi_film_analysis.utils.logging_setup import setup_logging
    from swapi_film_analysis.utils.plotting import render_table

    setup_logging()
    result = run_film_analysis()
    print(render_table(result.frame, ["episode", "title", "trilogy", "ship_total", "hyperdrive_ratio"]))
    print(aggregate_frame(result.by_trilogy, key_name="trilogy"))

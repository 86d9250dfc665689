"""
Flattening of SWAPI film records into a flat analysis table.

Each raw film record is a nested mapping; `flatten` turns a sequence of them
into one `FlatRow` per record, in input order, with the derived columns:

- ship_total       starship_count + vehicle_count
- hyperdrive_ratio share of ship_total that are starships, in percent
                   (None when the film has no ships at all)
- trilogy          "Prequels" / "Originals" / "Sequels" from the episode number

`to_frame` gives the pandas view used by the plotting and rendering helpers.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import asdict, dataclass, fields
from typing import Any, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from swapi_film_analysis.errors import MissingFieldError, OutOfRangeError

logger = logging.getLogger(__name__)

TRILOGY_BREAKS = (1, 4, 7)
TRILOGY_LABELS = ("Prequels", "Originals", "Sequels")

RawRecord = Mapping[str, Any]


@dataclass(frozen=True)
class FlatRow:
    title: str
    episode: int
    starship_count: int
    vehicle_count: int
    planet_count: int
    ship_total: int
    hyperdrive_ratio: Optional[float]
    trilogy: str
    character_count: int = 0
    release_date: Optional[str] = None


FLAT_COLUMNS = [f.name for f in fields(FlatRow)]


def trilogy_for_episode(episode: Any) -> str:
    """
    Map an episode number onto its trilogy.

    Half-open intervals [1,4), [4,7), [7,inf). Anything below 1 and anything
    that is not an integer raises OutOfRangeError.
    """
    # bool is an int subclass; True is not an episode
    if isinstance(episode, bool) or not isinstance(episode, (int, np.integer)):
        raise OutOfRangeError(episode)
    pos = bisect_right(TRILOGY_BREAKS, int(episode))
    if pos == 0:
        raise OutOfRangeError(episode)
    return TRILOGY_LABELS[pos - 1]


def hyperdrive_ratio(starship_count: int, ship_total: int) -> Optional[float]:
    if ship_total == 0:
        return None
    return starship_count / ship_total * 100


def _require(record: RawRecord, index: int, name: str) -> Any:
    try:
        return record[name]
    except (KeyError, TypeError):
        raise MissingFieldError(index, name) from None


def _count(record: RawRecord, index: int, name: str) -> int:
    value = _require(record, index, name)
    if not isinstance(value, (list, tuple)):
        raise MissingFieldError(index, name, f"expected a list, got {type(value).__name__}")
    return len(value)


def flatten_record(record: RawRecord, index: int = 0) -> FlatRow:
    title = _require(record, index, "title")
    episode = _require(record, index, "episode_id")

    starships = _count(record, index, "starships")
    vehicles = _count(record, index, "vehicles")
    planets = _count(record, index, "planets")
    ship_total = starships + vehicles

    try:
        trilogy = trilogy_for_episode(episode)
    except OutOfRangeError:
        raise OutOfRangeError(episode, index) from None

    extras = record if isinstance(record, Mapping) else {}
    characters = extras.get("characters")

    return FlatRow(
        title=title,
        episode=int(episode),
        starship_count=starships,
        vehicle_count=vehicles,
        planet_count=planets,
        ship_total=ship_total,
        hyperdrive_ratio=hyperdrive_ratio(starships, ship_total),
        trilogy=trilogy,
        character_count=len(characters) if isinstance(characters, (list, tuple)) else 0,
        release_date=extras.get("release_date") or None,
    )


def flatten(records: Sequence[RawRecord]) -> List[FlatRow]:
    """
    One FlatRow per record, same order. The first malformed record aborts the
    whole call, so a returned table always has len(records) rows.
    """
    table = [flatten_record(rec, i) for i, rec in enumerate(records)]
    logger.debug("Flattened %d film records", len(table))
    return table


def to_frame(table: Sequence[FlatRow]) -> pd.DataFrame:
    """
    DataFrame view of a flat table.

    The undefined hyperdrive ratio becomes NaN here and only here; trilogy is
    an ordered categorical so groupbys and plots keep the film order.
    """
    df = pd.DataFrame([asdict(r) for r in table], columns=FLAT_COLUMNS)
    df["hyperdrive_ratio"] = pd.to_numeric(df["hyperdrive_ratio"], errors="coerce").astype("float64")
    df["trilogy"] = pd.Categorical(df["trilogy"], categories=list(TRILOGY_LABELS), ordered=True)
    return df

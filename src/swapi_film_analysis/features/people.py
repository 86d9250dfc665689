"""
Character records flattened for species-level summaries.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from swapi_film_analysis.errors import MissingFieldError

# SWAPI leaves "species" empty for humans
DEFAULT_SPECIES = "Human"
_MISSING_MEASURES = {"", "unknown", "n/a", "none"}


@dataclass(frozen=True)
class PersonRow:
    name: str
    species: str
    height: Optional[float]
    mass: Optional[float]
    film_count: int = 0


PERSON_COLUMNS = [f.name for f in fields(PersonRow)]


def parse_measure(value: Any) -> Optional[float]:
    """SWAPI numbers arrive as strings like "172" or "1,358"; "unknown" means None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value).strip().lower()
    if s in _MISSING_MEASURES:
        return None
    try:
        return float(s.replace(",", ""))
    except ValueError:
        return None


def _species_name(urls: Any, species_names: Mapping[str, str]) -> str:
    if not urls:
        return DEFAULT_SPECIES
    first = urls[0]
    return species_names.get(first) or first


def flatten_people(
    records: Sequence[Mapping[str, Any]],
    species_names: Optional[Dict[str, str]] = None,
) -> List[PersonRow]:
    species_names = species_names or {}
    rows = []
    for i, rec in enumerate(records):
        if "name" not in rec:
            raise MissingFieldError(i, "name")
        films = rec.get("films") or []
        rows.append(
            PersonRow(
                name=rec["name"],
                species=_species_name(rec.get("species"), species_names),
                height=parse_measure(rec.get("height")),
                mass=parse_measure(rec.get("mass")),
                film_count=len(films),
            )
        )
    return rows


def people_frame(rows: Sequence[PersonRow]) -> pd.DataFrame:
    df = pd.DataFrame([asdict(r) for r in rows], columns=PERSON_COLUMNS)
    for col in ("height", "mass"):
        df[col] = pd.to_numeric(df[col], errors="coerce").astype("float64")
    return df

from __future__ import annotations

import math
from dataclasses import is_dataclass
from typing import Any, Dict, Hashable, Mapping, NamedTuple, Optional, Sequence

import numpy as np
import pandas as pd

from swapi_film_analysis.errors import MissingFieldError


class GroupStat(NamedTuple):
    count: int
    mean: Optional[float]


def row_value(row: Any, field: str, index: int) -> Any:
    """Read `field` from a dataclass row or a plain mapping."""
    if isinstance(row, Mapping):
        if field not in row:
            raise MissingFieldError(index, field)
        return row[field]
    if is_dataclass(row) and hasattr(row, field):
        return getattr(row, field)
    raise MissingFieldError(index, field)


def is_defined(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (float, np.floating)) and math.isnan(value):
        return False
    return True


def aggregate_by(
    table: Sequence[Any],
    key_field: str,
    value_field: str,
    *,
    exclude_singletons: bool = False,
) -> Dict[Hashable, GroupStat]:
    """
    Group rows by `key_field`: row count plus the mean of `value_field`.

    Rows whose value is undefined (None / NaN) still count towards the group
    but are left out of the mean; a group with no defined value has mean None.
    `exclude_singletons` drops groups with a single member.
    """
    counts: Dict[Hashable, int] = {}
    values: Dict[Hashable, list] = {}
    for i, row in enumerate(table):
        key = row_value(row, key_field, i)
        value = row_value(row, value_field, i)
        counts[key] = counts.get(key, 0) + 1
        bucket = values.setdefault(key, [])
        if is_defined(value):
            bucket.append(float(value))

    out = {}
    for key, n in counts.items():
        if exclude_singletons and n <= 1:
            continue
        vals = values[key]
        out[key] = GroupStat(count=n, mean=float(np.mean(vals)) if vals else None)
    return out


def aggregate_frame(stats: Dict[Hashable, GroupStat], key_name: str = "key") -> pd.DataFrame:
    """Report view of `aggregate_by`, largest groups first."""
    df = pd.DataFrame(
        [(k, s.count, s.mean) for k, s in stats.items()],
        columns=[key_name, "count", "mean"],
    )
    df["mean"] = pd.to_numeric(df["mean"], errors="coerce").astype("float64")
    return df.sort_values("count", ascending=False, kind="stable").reset_index(drop=True)

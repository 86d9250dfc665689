import math

import pandas as pd
import pytest

from swapi_film_analysis.errors import MissingFieldError, OutOfRangeError
from swapi_film_analysis.features.flatten import (
    FlatRow,
    flatten,
    hyperdrive_ratio,
    to_frame,
    trilogy_for_episode,
)


def test_flatten_keeps_length_and_order(films):
    table = flatten(films)
    assert len(table) == len(films)
    assert [r.title for r in table] == [f["title"] for f in films]
    assert all(isinstance(r, FlatRow) for r in table)


def test_counts_and_ship_total(films):
    for row in flatten(films):
        assert row.ship_total == row.starship_count + row.vehicle_count
    first = flatten(films)[0]
    assert (first.starship_count, first.vehicle_count, first.planet_count) == (8, 4, 3)
    assert first.release_date == "1977-05-25"


def test_ratio_bounds_when_ships_present(films):
    for row in flatten(films):
        assert row.ship_total > 0
        assert 0 <= row.hyperdrive_ratio <= 100
    assert flatten(films)[0].hyperdrive_ratio == pytest.approx(8 / 12 * 100)


def test_ratio_undefined_without_ships(make_film):
    row = flatten([make_film("Holiday Special", 4)])[0]
    assert row.ship_total == 0
    assert row.hyperdrive_ratio is None
    assert hyperdrive_ratio(0, 0) is None
    assert hyperdrive_ratio(3, 3) == 100


@pytest.mark.parametrize(
    "episode, label",
    [(1, "Prequels"), (3, "Prequels"), (4, "Originals"), (6, "Originals"), (7, "Sequels"), (9, "Sequels")],
)
def test_trilogy_breakpoints(episode, label):
    assert trilogy_for_episode(episode) == label


@pytest.mark.parametrize("episode", [0, -1, 2.5, "4", True])
def test_trilogy_rejects_out_of_range(episode):
    with pytest.raises(OutOfRangeError):
        trilogy_for_episode(episode)


def test_missing_episode_id_reports_index_zero(make_film):
    rec = make_film("Untitled", 1)
    del rec["episode_id"]
    with pytest.raises(MissingFieldError) as exc:
        flatten([rec])
    assert exc.value.index == 0
    assert exc.value.field == "episode_id"


def test_missing_field_aborts_whole_flatten(films):
    del films[2]["vehicles"]
    with pytest.raises(MissingFieldError) as exc:
        flatten(films)
    assert exc.value.index == 2
    assert exc.value.field == "vehicles"


def test_non_list_field_is_rejected(make_film):
    rec = make_film("Broken", 4)
    rec["planets"] = None
    with pytest.raises(MissingFieldError):
        flatten([rec])


def test_out_of_range_episode_carries_index(films, make_film):
    films.append(make_film("Episode Zero", 0))
    with pytest.raises(OutOfRangeError) as exc:
        flatten(films)
    assert exc.value.index == len(films) - 1


def test_flatten_empty():
    assert flatten([]) == []
    assert to_frame([]).empty


def test_to_frame_columns_and_undefined_ratio(films, make_film):
    films.append(make_film("Holiday Special", 7))
    df = to_frame(flatten(films))
    assert len(df) == len(films)
    assert df["hyperdrive_ratio"].dtype == "float64"
    assert math.isnan(df["hyperdrive_ratio"].iloc[-1])
    assert isinstance(df["trilogy"].dtype, pd.CategoricalDtype)
    assert list(df["trilogy"].cat.categories) == ["Prequels", "Originals", "Sequels"]

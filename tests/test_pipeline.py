from unittest.mock import Mock

import pytest

from swapi_film_analysis.deployment.pipeline import run_film_analysis, run_species_summary
from swapi_film_analysis.errors import MissingFieldError


def test_run_film_analysis(films):
    client = Mock()
    client.films.return_value = films
    result = run_film_analysis(client)

    assert len(result.table) == len(films)
    assert list(result.frame["episode"]) == [1, 2, 3, 4, 5, 6]
    assert set(result.by_trilogy) == {"Prequels", "Originals"}
    assert result.by_trilogy["Prequels"].count == 3
    assert result.trend.n == len(films)


def test_run_film_analysis_propagates_bad_record(films):
    del films[0]["title"]
    client = Mock()
    client.films.return_value = films
    with pytest.raises(MissingFieldError):
        run_film_analysis(client)


def test_run_species_summary():
    droid = "https://swapi.dev/api/species/2/"
    client = Mock()
    client.species.return_value = [{"url": droid, "name": "Droid"}]
    client.people.return_value = [
        {"name": "C-3PO", "height": "167", "species": [droid]},
        {"name": "R2-D2", "height": "96", "species": [droid]},
        {"name": "Yoda", "height": "66", "species": ["https://swapi.dev/api/species/6/"]},
    ]
    df = run_species_summary(client)
    assert list(df["species"]) == ["Droid"]
    assert df.iloc[0]["mean"] == pytest.approx(131.5)

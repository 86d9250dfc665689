import matplotlib

matplotlib.use("Agg")

import pytest


def _film(title, episode_id, starships=0, vehicles=0, planets=0, **extra):
    rec = {
        "title": title,
        "episode_id": episode_id,
        "starships": [f"https://swapi.dev/api/starships/{i}/" for i in range(starships)],
        "vehicles": [f"https://swapi.dev/api/vehicles/{i}/" for i in range(vehicles)],
        "planets": [f"https://swapi.dev/api/planets/{i}/" for i in range(planets)],
    }
    rec.update(extra)
    return rec


@pytest.fixture
def films():
    return [
        _film("A New Hope", 4, starships=8, vehicles=4, planets=3, release_date="1977-05-25"),
        _film("The Empire Strikes Back", 5, starships=9, vehicles=6, planets=4),
        _film("Return of the Jedi", 6, starships=12, vehicles=8, planets=5),
        _film("The Phantom Menace", 1, starships=5, vehicles=7, planets=3),
        _film("Attack of the Clones", 2, starships=5, vehicles=11, planets=5),
        _film("Revenge of the Sith", 3, starships=12, vehicles=13, planets=13),
    ]


@pytest.fixture
def make_film():
    """Factory for a raw film record with N placeholder ship/planet URLs."""
    return _film

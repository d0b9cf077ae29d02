import os
import random
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from capquiz.domain.models import Country

CONTINENTS = ["Africa", "Asia", "Europe", "North America", "Oceania", "South America"]


def make_country(code, *, capital="Capital", cities=("Capital", "Town A", "Town B"), continent="Europe", name=None):
    return Country(
        code=code,
        name=name or f"Country {code}",
        continent=continent,
        capital=capital,
        cities=tuple(cities),
    )


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def countries():
    out = []
    for i in range(24):
        capital = f"Capital {i}"
        # every third country has a bigger city than its capital
        if i % 3 == 0:
            cities = (f"Big City {i}", f"Town {i}a", capital, f"Town {i}b")
        else:
            cities = (capital, f"Town {i}a", f"Town {i}b")
        out.append(
            make_country(
                f"C{i:02d}",
                capital=capital,
                cities=cities,
                continent=CONTINENTS[i % len(CONTINENTS)],
            )
        )
    return out

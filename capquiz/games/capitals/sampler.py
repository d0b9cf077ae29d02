from __future__ import annotations

import random
from typing import Sequence, TypeVar

from capquiz.domain.errors import ConfigurationError
from capquiz.domain.models import Country

T = TypeVar("T")


def fisher_yates(items: Sequence[T], rng: random.Random) -> list[T]:
    """
    Return a uniformly shuffled copy of items (swap-based, one linear pass).
    """
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randrange(i + 1)
        out[i], out[j] = out[j], out[i]
    return out


def sample_round(countries: Sequence[Country], n: int, rng: random.Random) -> list[Country]:
    """
    Pick n distinct countries, every subset/order equally likely.
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise ConfigurationError(f"Round size must be an integer, got {n!r}")
    if n <= 0:
        raise ConfigurationError(f"Round size must be positive, got {n}")
    if n > len(countries):
        raise ConfigurationError(
            f"Round size {n} exceeds the {len(countries)} available countries"
        )
    return fisher_yates(countries, rng)[:n]

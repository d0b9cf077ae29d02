from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Sequence

from capquiz.domain.errors import DataError
from capquiz.domain.models import KNOWN_CONTINENTS, Country

logger = logging.getLogger(__name__)

DEFAULT_DATASET_PATH = Path("capquiz/assets/countries.json")


def _require_text(value: Any, *, field: str, where: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise DataError(f"{where}: missing or blank '{field}'")
    return value.strip()


def validate_country(country: Country, *, continents: frozenset[str] = KNOWN_CONTINENTS) -> None:
    """
    Raise DataError if a record can't produce a question.
    """
    where = f"country {country.code or country.name or '?'}"
    _require_text(country.code, field="code", where=where)
    _require_text(country.name, field="name", where=where)
    _require_text(country.capital, field="capital", where=where)
    continent = _require_text(country.continent, field="continent", where=where)
    if continent not in continents:
        raise DataError(f"{where}: unknown continent {continent!r}")
    if not country.cities:
        raise DataError(f"{where}: cities list is empty")
    for city in country.cities:
        _require_text(city, field="cities[]", where=where)


def validate_countries(
    countries: Sequence[Country],
    *,
    continents: frozenset[str] = KNOWN_CONTINENTS,
) -> None:
    """
    Validate a whole collection up front (also rejects duplicate codes).
    """
    seen: set[str] = set()
    for country in countries:
        if not isinstance(country, Country):
            raise DataError(f"Not a Country record: {country!r}")
        validate_country(country, continents=continents)
        code = country.code.upper()
        if code in seen:
            raise DataError(f"Duplicate country code: {country.code}")
        seen.add(code)


def parse_country(row: Any, *, index: int = 0) -> Country:
    if not isinstance(row, dict):
        raise DataError(f"row {index}: expected an object, got {type(row).__name__}")

    where = f"row {index}"
    cities_raw = row.get("cities")
    if not isinstance(cities_raw, list):
        raise DataError(f"{where}: 'cities' must be a list")

    country = Country(
        code=_require_text(row.get("code"), field="code", where=where),
        name=_require_text(row.get("name"), field="name", where=where),
        continent=_require_text(row.get("continent"), field="continent", where=where),
        capital=_require_text(row.get("capital"), field="capital", where=where),
        cities=tuple(_require_text(c, field="cities[]", where=where) for c in cities_raw),
    )
    validate_country(country)
    return country


class CountryBank:
    """
    Read-only view over the country dataset.

    Expected JSON format:
      [
        {"code": "AU", "name": "Australia", "continent": "Oceania",
         "capital": "Canberra", "cities": ["Sydney", "Melbourne", "Canberra"]},
        ...
      ]
    """

    def __init__(self, countries: Iterable[Country]) -> None:
        items = list(countries)
        validate_countries(items)
        self._countries: tuple[Country, ...] = tuple(items)
        self._by_code: dict[str, Country] = {c.code.upper(): c for c in self._countries}

    @staticmethod
    def parse_items(raw: Any) -> list[Country]:
        if not isinstance(raw, list):
            raise DataError("Country dataset must be a JSON list")
        return [parse_country(row, index=i) for i, row in enumerate(raw)]

    @classmethod
    def load_from_assets(cls, path: Path = DEFAULT_DATASET_PATH) -> "CountryBank":
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.warning("CountryBank: file not found: %s (using fallback dataset)", path)
            return cls(_FALLBACK)
        except json.JSONDecodeError as e:
            raise DataError(f"CountryBank: invalid JSON in {path}: {e}") from e

        bank = cls(cls.parse_items(raw))
        logger.info("CountryBank loaded: countries=%s continents=%s", bank.count(), len(bank.continents()))
        return bank

    def all(self) -> tuple[Country, ...]:
        return self._countries

    def count(self) -> int:
        return len(self._countries)

    def continents(self) -> list[str]:
        return sorted({c.continent for c in self._countries})

    def get(self, code: str) -> Country | None:
        return self._by_code.get((code or "").strip().upper())


# Minimal set so the bot remains usable even if the JSON isn't present.
_FALLBACK: tuple[Country, ...] = (
    Country("FR", "France", "Europe", "Paris", ("Paris", "Lyon", "Marseille", "Toulouse", "Nice")),
    Country("AU", "Australia", "Oceania", "Canberra", ("Sydney", "Melbourne", "Canberra", "Brisbane", "Perth")),
    Country("BR", "Brazil", "South America", "Brasília", ("São Paulo", "Rio de Janeiro", "Salvador", "Brasília")),
    Country("CA", "Canada", "North America", "Ottawa", ("Toronto", "Montreal", "Vancouver", "Calgary", "Ottawa")),
    Country("JP", "Japan", "Asia", "Tokyo", ("Tokyo", "Osaka", "Yokohama", "Nagoya", "Sapporo")),
    Country("NG", "Nigeria", "Africa", "Abuja", ("Lagos", "Kano", "Ibadan", "Abuja", "Port Harcourt")),
)

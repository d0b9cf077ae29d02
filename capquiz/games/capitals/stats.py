from __future__ import annotations

from typing import Iterable

from capquiz.domain.errors import StateError
from capquiz.domain.models import ContinentReport, ContinentStat


def percent(correct: int, total: int) -> int:
    """
    round(100 * correct / total) with halves rounded up, in integer math.
    """
    if total <= 0:
        return 0
    return (200 * correct + total) // (2 * total)


class StatsTracker:
    """
    Per-continent attempt/correct counters for one round.

    Attempts are counted when a question is generated, corrects when it is
    answered right, so correct <= total holds at every point of the round.
    """

    def __init__(self, stats: dict[str, ContinentStat] | None = None) -> None:
        self._stats: dict[str, ContinentStat] = stats if stats is not None else {}

    @classmethod
    def for_continents(cls, continents: Iterable[str]) -> "StatsTracker":
        return cls({c: ContinentStat() for c in continents})

    @property
    def stats(self) -> dict[str, ContinentStat]:
        return self._stats

    def record_attempt(self, continent: str) -> None:
        stat = self._stats.setdefault(continent, ContinentStat())
        stat.total += 1

    def record_correct(self, continent: str) -> None:
        stat = self._stats.get(continent)
        if stat is None or stat.correct >= stat.total:
            raise StateError(f"No pending attempt to score for continent {continent!r}")
        stat.correct += 1

    def total_attempts(self) -> int:
        return sum(s.total for s in self._stats.values())

    def total_correct(self) -> int:
        return sum(s.correct for s in self._stats.values())

    def report(self) -> tuple[ContinentReport, ...]:
        """
        Continents that were actually asked, sorted by name.
        """
        rows: list[ContinentReport] = []
        for continent in sorted(self._stats):
            stat = self._stats[continent]
            if stat.total <= 0:
                continue
            rows.append(
                ContinentReport(
                    continent=continent,
                    correct=stat.correct,
                    total=stat.total,
                    percentage=percent(stat.correct, stat.total),
                )
            )
        return tuple(rows)

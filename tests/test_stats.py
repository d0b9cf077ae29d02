import pytest

from capquiz.domain.errors import StateError
from capquiz.domain.models import ContinentReport
from capquiz.games.capitals.stats import StatsTracker, percent


@pytest.mark.parametrize(
    "correct,total,expected",
    [(0, 5, 0), (5, 5, 100), (1, 3, 33), (2, 3, 67), (1, 2, 50), (1, 8, 13), (0, 0, 0)],
)
def test_percent_rounds_half_up(correct, total, expected):
    assert percent(correct, total) == expected


def test_for_continents_starts_at_zero():
    tracker = StatsTracker.for_continents(["Asia", "Europe", "Asia"])

    assert set(tracker.stats) == {"Asia", "Europe"}
    assert all(s.total == 0 and s.correct == 0 for s in tracker.stats.values())


def test_correct_requires_a_pending_attempt():
    tracker = StatsTracker.for_continents(["Asia"])

    with pytest.raises(StateError):
        tracker.record_correct("Asia")

    tracker.record_attempt("Asia")
    tracker.record_correct("Asia")
    with pytest.raises(StateError):
        tracker.record_correct("Asia")

    assert tracker.stats["Asia"].correct == 1
    assert tracker.stats["Asia"].total == 1


def test_correct_for_unknown_continent_fails():
    with pytest.raises(StateError):
        StatsTracker().record_correct("Atlantis")


def test_report_skips_unasked_continents_and_sorts():
    tracker = StatsTracker.for_continents(["Oceania", "Europe", "Africa"])
    for _ in range(3):
        tracker.record_attempt("Oceania")
    tracker.record_correct("Oceania")
    tracker.record_attempt("Africa")
    tracker.record_correct("Africa")

    assert tracker.report() == (
        ContinentReport(continent="Africa", correct=1, total=1, percentage=100),
        ContinentReport(continent="Oceania", correct=1, total=3, percentage=33),
    )

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from capquiz.games.capitals.messages import MessageTier


KNOWN_CONTINENTS: frozenset[str] = frozenset(
    {
        "Africa",
        "Antarctica",
        "Asia",
        "Europe",
        "North America",
        "Oceania",
        "South America",
    }
)

DEFAULT_ROUND_SIZE = 20


@dataclass(frozen=True)
class Country:
    """
    One country record from the dataset.

    cities[0] is the "most notable" city. The capital may or may not be
    listed in cities.
    """
    code: str
    name: str
    continent: str
    capital: str
    cities: tuple[str, ...]


@dataclass
class ContinentStat:
    correct: int = 0
    total: int = 0


@dataclass(frozen=True)
class Question:
    country: Country
    correct_answer: str
    options: tuple[str, ...]


@dataclass(frozen=True)
class AnswerOutcome:
    correct: bool
    correct_answer: str
    selected: str


@dataclass(frozen=True)
class ContinentReport:
    continent: str
    correct: int
    total: int
    percentage: int


@dataclass(frozen=True)
class FinalReport:
    percentage: int
    score: int
    total: int
    per_continent: tuple[ContinentReport, ...]
    message_tier: "MessageTier"


@dataclass(frozen=True)
class AdvanceResult:
    done: bool
    next_question: Question | None = None
    final_report: FinalReport | None = None


class RoundPhase(str, Enum):
    IDLE = "idle"
    PENDING = "pending"    # question shown, waiting for an answer
    ANSWERED = "answered"  # waiting for advance()
    ENDED = "ended"


@dataclass
class RoundState:
    size: int
    remaining_pool: list[Country]
    stats: dict[str, ContinentStat]
    score: int = 0
    asked: int = 0
    current_question: Question | None = None
    answered: bool = False
    last_outcome: AnswerOutcome | None = None
    final_result: AdvanceResult | None = None

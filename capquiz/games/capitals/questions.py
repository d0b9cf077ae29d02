from __future__ import annotations

import logging
import random

from capquiz.domain.models import Country, Question
from capquiz.games.capitals.sampler import fisher_yates
from capquiz.games.capitals.stats import StatsTracker
from capquiz.services.country_bank import validate_country

logger = logging.getLogger(__name__)

MAX_DISTRACTORS = 5  # capital + 5 = 6 buttons at most


class QuestionGenerator:
    """
    Builds one multiple-choice capital question for a country.

    Distractors are cities of the same country. The most notable city
    (cities[0]) is always offered when it is not the capital, so a round
    never degrades into "capital vs. obscure towns".
    """

    def __init__(self, rng: random.Random | None = None, *, max_distractors: int = MAX_DISTRACTORS) -> None:
        self._rng = rng or random.Random()
        self._max_distractors = max_distractors

    def pick_distractors(self, country: Country) -> list[str]:
        validate_country(country)

        capital = country.capital
        notable = country.cities[0]

        # dict.fromkeys keeps first occurrence order and drops repeats
        pool = [c for c in dict.fromkeys(country.cities) if c != capital]

        distractors: list[str] = []
        if notable != capital:
            distractors.append(notable)

        rest = [c for c in pool if c not in distractors]
        slots = max(0, self._max_distractors - len(distractors))
        distractors.extend(fisher_yates(rest, self._rng)[:slots])
        return distractors

    def generate(self, country: Country, stats: StatsTracker) -> Question:
        distractors = self.pick_distractors(country)
        options = fisher_yates([country.capital, *distractors], self._rng)

        stats.record_attempt(country.continent)

        if len(options) == 1:
            logger.debug("Single-option question for %s (no distractor cities)", country.code)

        return Question(
            country=country,
            correct_answer=country.capital,
            options=tuple(options),
        )

from __future__ import annotations

import logging
import random
from typing import Sequence

from capquiz.domain.errors import StateError
from capquiz.domain.models import (
    DEFAULT_ROUND_SIZE,
    AdvanceResult,
    AnswerOutcome,
    Country,
    FinalReport,
    Question,
    RoundPhase,
    RoundState,
)
from capquiz.games.capitals.messages import MessageTier
from capquiz.games.capitals.questions import QuestionGenerator
from capquiz.games.capitals.sampler import sample_round
from capquiz.games.capitals.stats import StatsTracker, percent
from capquiz.services.country_bank import validate_countries

logger = logging.getLogger(__name__)


class RoundController:
    """
    Capital quiz round — one player, exactly N questions.

    Flow:
      - start(countries, n) samples N countries and shows the first question
      - submit_answer(city) scores the current question once
      - advance() shows the next question, or ends the round with a report

    The controller is synchronous; the UI decides when to call advance()
    (e.g. after a short feedback delay).
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._generator = QuestionGenerator(self._rng)
        self._state: RoundState | None = None
        self._stats: StatsTracker | None = None

    # -------------------------
    # Read-only view
    # -------------------------

    @property
    def phase(self) -> RoundPhase:
        st = self._state
        if st is None:
            return RoundPhase.IDLE
        if st.final_result is not None:
            return RoundPhase.ENDED
        return RoundPhase.ANSWERED if st.answered else RoundPhase.PENDING

    @property
    def score(self) -> int:
        return self._state.score if self._state else 0

    @property
    def final_report(self) -> FinalReport | None:
        if self._state and self._state.final_result:
            return self._state.final_result.final_report
        return None

    @property
    def stats(self) -> StatsTracker | None:
        return self._stats

    def progress(self) -> tuple[int, int]:
        """
        (answered questions, round size)
        """
        st = self._state
        if st is None:
            return 0, 0
        done = st.asked if st.answered or st.final_result else st.asked - 1
        return max(0, done), st.size

    def current_question(self) -> Question | None:
        return self._state.current_question if self._state else None

    # -------------------------
    # Stimuli
    # -------------------------

    def start(self, countries: Sequence[Country], n: int = DEFAULT_ROUND_SIZE) -> Question:
        """
        Begin a fresh round. Any previous round is discarded.

        Validation happens before anything is replaced, so a
        ConfigurationError/DataError leaves the controller untouched.
        """
        validate_countries(countries)
        picked = sample_round(countries, n, self._rng)

        stats = StatsTracker.for_continents(c.continent for c in picked)
        state = RoundState(size=n, remaining_pool=picked, stats=stats.stats)

        self._state = state
        self._stats = stats
        question = self._next_question()

        logger.info(
            "Round started: size=%s continents=%s",
            n,
            ",".join(sorted(state.stats)),
        )
        return question

    def submit_answer(self, selected: str) -> AnswerOutcome:
        st = self._state
        if st is None:
            raise StateError("No round in progress")

        if st.answered or st.final_result is not None:
            # duplicate click; the first answer already scored
            logger.debug("Ignoring duplicate answer %r", selected)
            return st.last_outcome  # type: ignore[return-value]

        q = st.current_question

        correct = selected == q.correct_answer
        if correct:
            st.score += 1
            self._stats.record_correct(q.country.continent)

        st.answered = True
        st.last_outcome = AnswerOutcome(correct=correct, correct_answer=q.correct_answer, selected=selected)
        logger.debug(
            "Answer %s/%s for %s: %r (%s)",
            st.asked,
            st.size,
            q.country.code,
            selected,
            "correct" if correct else f"expected {q.correct_answer!r}",
        )
        return st.last_outcome

    def advance(self) -> AdvanceResult:
        st = self._state
        if st is None:
            raise StateError("No round in progress")
        if st.final_result is not None:
            return st.final_result
        if not st.answered:
            raise StateError("advance() called before the current question was answered")

        if st.remaining_pool:
            return AdvanceResult(done=False, next_question=self._next_question())

        st.current_question = None
        st.final_result = AdvanceResult(done=True, final_report=self._build_report())
        report = st.final_result.final_report
        logger.info(
            "Round ended: score=%s/%s (%s%%) tier=%s",
            self._stats.total_correct(),
            self._stats.total_attempts(),
            report.percentage if report else "?",
            report.message_tier.name if report else "?",
        )
        return st.final_result

    # -------------------------
    # Internals
    # -------------------------

    def _next_question(self) -> Question:
        st = self._state

        country = st.remaining_pool.pop(0)
        question = self._generator.generate(country, self._stats)
        st.current_question = question
        st.answered = False
        st.asked += 1
        return question

    def _build_report(self) -> FinalReport:
        st = self._state

        pct = percent(st.score, st.size)
        return FinalReport(
            percentage=pct,
            score=st.score,
            total=st.size,
            per_continent=self._stats.report(),
            message_tier=MessageTier.for_percentage(pct),
        )

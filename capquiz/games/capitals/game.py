from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Callable

import discord

from capquiz.assets.asset_links import AssetLinks
from capquiz.domain.errors import ConfigurationError
from capquiz.domain.models import AnswerOutcome, FinalReport, Question, RoundPhase
from capquiz.games.capitals.round import RoundController
from capquiz.services.country_bank import CountryBank

logger = logging.getLogger(__name__)

PANEL_TIMEOUT_SECONDS = 900
MAX_LABEL = 80  # Discord button label limit


# -------------------------
# Pure rendering helpers
# -------------------------

def option_styles(options: tuple[str, ...], outcome: AnswerOutcome | None) -> list[discord.ButtonStyle]:
    """
    Button colours for a question.

    Before answering every option is neutral. Afterwards the right city is
    green and a wrong pick is red, whatever the player chose.
    """
    if outcome is None:
        return [discord.ButtonStyle.primary for _ in options]

    styles: list[discord.ButtonStyle] = []
    for city in options:
        if city == outcome.correct_answer:
            styles.append(discord.ButtonStyle.success)
        elif city == outcome.selected:
            styles.append(discord.ButtonStyle.danger)
        else:
            styles.append(discord.ButtonStyle.secondary)
    return styles


def build_question_embed(
    question: Question,
    *,
    player_id: int,
    score: int,
    answered: int,
    size: int,
    outcome: AnswerOutcome | None = None,
) -> discord.Embed:
    if outcome is None:
        status_line = "Pick the **capital city** below."
    elif outcome.correct:
        status_line = f"✅ Correct! **{outcome.correct_answer}** is the capital."
    else:
        status_line = f"❌ Wrong — the capital is **{outcome.correct_answer}**."

    embed = discord.Embed(
        title="🏳️ Capitals — Guess the capital",
        description=(
            f"**Country:** {question.country.name}\n\n"
            f"**Score:** **{score}**   •   **Progress:** {answered}/{size}\n\n"
            f"{status_line}"
        ),
    )
    embed.set_image(url=AssetLinks.flag_url(question.country.code))
    embed.set_footer(text=f"Player: {player_id}")
    return embed


def build_final_embed(report: FinalReport, *, player_id: int) -> discord.Embed:
    lines = [
        f"{r.continent}: **{r.percentage}%** ({r.correct}/{r.total})"
        for r in report.per_continent
    ]
    embed = discord.Embed(
        title=f"🏁 Capitals — {report.percentage}%",
        description=(
            f"Round over for <@{player_id}>.\n\n"
            f"**{report.message_tier.message}**\n"
            f"**Score:** {report.score}/{report.total}\n\n"
            "**By continent**\n"
            + ("\n".join(lines) if lines else "—")
            + "\n\nPress **Play again** to start a new round."
        ),
    )
    embed.set_thumbnail(url=AssetLinks.QUIZ_ICON)
    return embed


# -------------------------
# Views
# -------------------------

class _OptionButton(discord.ui.Button):
    def __init__(self, *, game: "CapitalsQuizGame", key: tuple[int, int], city: str, style: discord.ButtonStyle, disabled: bool) -> None:
        super().__init__(label=city[:MAX_LABEL], style=style, disabled=disabled)
        self._game = game
        self._key = key
        self._city = city

    async def callback(self, interaction: discord.Interaction) -> None:
        await self._game.handle_option(interaction, key=self._key, selected=self._city, view=self.view)


class _QuestionView(discord.ui.View):
    def __init__(
        self,
        *,
        game: "CapitalsQuizGame",
        key: tuple[int, int],
        question: Question,
        outcome: AnswerOutcome | None = None,
    ) -> None:
        super().__init__(timeout=PANEL_TIMEOUT_SECONDS)
        self._game = game
        self._key = key
        styles = option_styles(question.options, outcome)
        for city, style in zip(question.options, styles):
            self.add_item(
                _OptionButton(game=game, key=key, city=city, style=style, disabled=outcome is not None)
            )

    async def on_timeout(self) -> None:
        await self._game.expire(key=self._key, view=self)


class _PlayAgainView(discord.ui.View):
    def __init__(self, *, game: "CapitalsQuizGame", player_id: int) -> None:
        super().__init__(timeout=PANEL_TIMEOUT_SECONDS)
        self._game = game
        self._player_id = player_id

    @discord.ui.button(label="Play again", style=discord.ButtonStyle.success, emoji="🔁")
    async def play_again(self, interaction: discord.Interaction, button: discord.ui.Button) -> None:  # type: ignore[override]
        if interaction.user.id != self._player_id:
            await interaction.response.send_message(
                "This button is for the player who finished this round.",
                ephemeral=True,
            )
            return

        if not isinstance(interaction.channel, (discord.TextChannel, discord.Thread)):
            await interaction.response.send_message("Use this in a server channel.", ephemeral=True)
            return

        await interaction.response.defer(ephemeral=True)
        await self._game.start_for_user(channel=interaction.channel, user=interaction.user)
        await interaction.followup.send("✅ New round posted!", ephemeral=True)


# -------------------------
# Game
# -------------------------

@dataclass
class _Session:
    controller: RoundController
    message: discord.Message | None = None
    view: discord.ui.View | None = None


class CapitalsQuizGame:
    """
    Capitals — flag + multiple choice, one private round per player.

    Flow:
      - /capitals start posts your panel (flag, country, option buttons)
      - Click a city: the panel shows right/wrong and locks the buttons
      - After a short delay the next flag appears
      - After N flags a final report with per-continent accuracy is posted

    A panel left untouched for PANEL_TIMEOUT_SECONDS is dropped.
    """

    def __init__(
        self,
        *,
        bank: CountryBank,
        round_size: int,
        advance_delay: float,
        allowed_channel_ids: frozenset[int] | set[int],
        rng_factory: Callable[[], random.Random] | None = None,
    ) -> None:
        if round_size > bank.count():
            raise ConfigurationError(
                f"Round size {round_size} exceeds the {bank.count()} countries in the dataset"
            )

        self._bank = bank
        self._round_size = round_size
        self._advance_delay = advance_delay
        self._allowed_channel_ids = allowed_channel_ids
        self._rng_factory = rng_factory or random.Random

        self._sessions: dict[tuple[int, int], _Session] = {}
        self._locks: dict[tuple[int, int], asyncio.Lock] = {}

    # -------------------------
    # Locks / lookup
    # -------------------------

    def _lock_for(self, key: tuple[int, int]) -> asyncio.Lock:
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    def _forget(self, key: tuple[int, int]) -> None:
        # only called once the session is gone; a held lock stays for its waiters
        lock = self._locks.get(key)
        if key not in self._sessions and lock is not None and not lock.locked():
            self._locks.pop(key, None)

    def is_allowed_channel(self, channel_id: int) -> bool:
        return not self._allowed_channel_ids or channel_id in self._allowed_channel_ids

    def has_session(self, channel_id: int, player_id: int) -> bool:
        return (channel_id, player_id) in self._sessions

    # -------------------------
    # Public API for slash commands
    # -------------------------

    async def start_for_user(self, *, channel: discord.abc.Messageable, user: discord.abc.User) -> None:
        channel_id = getattr(channel, "id", None)
        if channel_id is None:
            raise ValueError("Channel has no id")
        if not self.is_allowed_channel(int(channel_id)):
            raise ValueError("This channel is not set up for the capitals quiz.")

        key = (int(channel_id), int(user.id))
        async with self._lock_for(key):
            controller = RoundController(self._rng_factory())
            question = controller.start(self._bank.all(), self._round_size)

            previous = self._sessions.get(key)
            sess = _Session(controller=controller)
            self._sessions[key] = sess

            answered, size = controller.progress()
            embed = build_question_embed(
                question,
                player_id=user.id,
                score=controller.score,
                answered=answered,
                size=size,
            )
            sess.view = _QuestionView(game=self, key=key, question=question)
            sess.message = await channel.send(content=f"<@{user.id}>", embed=embed, view=sess.view)

        if previous is not None:
            await self._strip_buttons(previous)
        logger.info("Capitals round started for player=%s channel=%s", user.id, channel_id)

    async def stop_for_user(self, *, channel_id: int, player_id: int) -> bool:
        key = (int(channel_id), int(player_id))
        async with self._lock_for(key):
            sess = self._sessions.pop(key, None)
        self._forget(key)
        if sess is None:
            return False

        await self._strip_buttons(sess)
        return True

    async def expire(self, *, key: tuple[int, int], view: discord.ui.View) -> None:
        """
        Drop a round whose live panel timed out. Older panels of the same
        round time out too and are ignored.
        """
        async with self._lock_for(key):
            sess = self._sessions.get(key)
            if sess is None or sess.view is not view:
                return
            self._sessions.pop(key, None)
        self._forget(key)

        logger.info("Capitals round expired for player=%s channel=%s", key[1], key[0])
        await self._strip_buttons(sess)

    @staticmethod
    async def _strip_buttons(sess: _Session) -> None:
        if sess.message is None:
            return
        try:
            await sess.message.edit(view=None)
        except (discord.NotFound, discord.Forbidden, discord.HTTPException):
            logger.debug("Could not strip buttons from closed panel")

    # -------------------------
    # Button handling
    # -------------------------

    async def handle_option(
        self,
        interaction: discord.Interaction,
        *,
        key: tuple[int, int],
        selected: str,
        view: discord.ui.View | None,
    ) -> None:
        _, player_id = key
        if interaction.user.id != player_id:
            await interaction.response.send_message("This panel belongs to another player.", ephemeral=True)
            return

        async with self._lock_for(key):
            sess = self._sessions.get(key)
            # panels of a stopped or expired round stay clickable in Discord
            if sess is None:
                await interaction.response.send_message("This round is no longer active.", ephemeral=True)
                return

            controller = sess.controller
            question = controller.current_question()
            if controller.phase is not RoundPhase.PENDING or question is None:
                # double click while the feedback is showing
                await interaction.response.defer()
                return

            if view is not None and view is not sess.view:
                await interaction.response.send_message("This panel is from an older round.", ephemeral=True)
                return

            outcome = controller.submit_answer(selected)
            answered, size = controller.progress()
            embed = build_question_embed(
                question,
                player_id=player_id,
                score=controller.score,
                answered=answered,
                size=size,
                outcome=outcome,
            )
            sess.view = _QuestionView(game=self, key=key, question=question, outcome=outcome)
            try:
                await interaction.response.edit_message(embed=embed, view=sess.view)
            except (discord.NotFound, discord.Forbidden, discord.HTTPException):
                # the answer is already scored; the next panel edit still moves the round on
                logger.warning("Could not show feedback for player=%s", player_id)

        await asyncio.sleep(self._advance_delay)
        await self._advance(key=key, controller=controller)

    async def _advance(self, *, key: tuple[int, int], controller: RoundController) -> None:
        channel_id, player_id = key
        async with self._lock_for(key):
            sess = self._sessions.get(key)
            # stopped or restarted while the feedback was showing
            if sess is None or sess.controller is not controller:
                return
            if controller.phase is not RoundPhase.ANSWERED:
                return

            result = controller.advance()
            if result.done and result.final_report is not None:
                self._sessions.pop(key, None)
                embed = build_final_embed(result.final_report, player_id=player_id)
                view: discord.ui.View = _PlayAgainView(game=self, player_id=player_id)
                logger.info(
                    "Capitals round finished for player=%s channel=%s: %s%%",
                    player_id,
                    channel_id,
                    result.final_report.percentage,
                )
            else:
                question = controller.current_question()
                answered, size = controller.progress()
                embed = build_question_embed(
                    question,
                    player_id=player_id,
                    score=controller.score,
                    answered=answered,
                    size=size,
                )
                view = _QuestionView(game=self, key=key, question=question)
                sess.view = view

            if sess.message is not None:
                try:
                    await sess.message.edit(embed=embed, view=view)
                except (discord.NotFound, discord.Forbidden, discord.HTTPException):
                    logger.warning("Capitals panel vanished for player=%s; dropping round", player_id)
                    self._sessions.pop(key, None)
        self._forget(key)

from __future__ import annotations

import logging
from typing import Any

import discord

logger = logging.getLogger(__name__)


async def setup(bot: discord.Client) -> None:
    # The quiz is driven by buttons and slash commands only; no on_message.

    @bot.event
    async def on_error(event_method: str, /, *args: Any, **kwargs: Any) -> None:
        logger.exception("Unhandled exception in Discord event: %s", event_method)

    logger.info("Discord events registered (on_error)")

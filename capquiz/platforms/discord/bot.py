from __future__ import annotations

import logging
from typing import Any

import discord

from capquiz.config.settings import Settings
from capquiz.platforms.discord.commands import setup as setup_commands
from capquiz.platforms.discord.events import setup as setup_events

logger = logging.getLogger(__name__)


class CapitalQuizDiscordBot(discord.Client):
    """
    Slash commands + button panels; no message content intent.

    With DISCORD_GUILD_ID set, commands are copied to that guild so they
    show up immediately instead of after the global propagation delay.
    """

    def __init__(self, *, settings: Settings, services: dict[str, Any]) -> None:
        super().__init__(intents=discord.Intents.default())

        self.settings = settings
        self.services = services
        self.tree = discord.app_commands.CommandTree(self)

    async def setup_hook(self) -> None:
        await setup_commands(self)
        await setup_events(self)
        await self._sync_commands()

    async def _sync_commands(self) -> None:
        names = sorted(c.name for c in self.tree.get_commands())
        logger.info("Registering /%s", " /".join(names) if names else "(nothing)")

        guild_id = self.settings.discord_guild_id
        guild = discord.Object(id=guild_id) if guild_id else None
        if guild is not None:
            self.tree.copy_global_to(guild=guild)

        try:
            synced = await self.tree.sync(guild=guild)
        except discord.HTTPException:
            logger.exception("Command sync failed")
            return
        logger.info("Synced %s app commands (%s)", len(synced), f"guild {guild_id}" if guild else "global")

    async def on_ready(self) -> None:
        bank = self.services.get("country_bank")
        logger.info(
            "Capitals bot ready as %s (id=%s), %s countries loaded",
            self.user,
            self.user.id if self.user else "?",
            bank.count() if bank else 0,
        )


def build_discord_bot(*, settings: Settings, services: dict[str, Any]) -> CapitalQuizDiscordBot:
    return CapitalQuizDiscordBot(settings=settings, services=services)

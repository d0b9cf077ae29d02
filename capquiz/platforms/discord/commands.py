from __future__ import annotations

import logging
from typing import Any

import discord
from discord import app_commands

from capquiz.platforms.discord.capitals_commands import CapitalsCommands

logger = logging.getLogger(__name__)


# =====================
# CORE COMMANDS
# =====================
class CoreCommands(app_commands.Group):
    def __init__(self, bot: discord.Client, services: dict[str, Any]) -> None:
        super().__init__(name="core", description="Core bot commands")
        self.bot = bot
        self.services = services

    @app_commands.command(name="ping", description="Check if the bot is alive")
    async def ping(self, interaction: discord.Interaction) -> None:
        await interaction.response.send_message("🏓 Pong!", ephemeral=True)

    @app_commands.command(name="dataset", description="Show how many countries the quiz knows")
    async def dataset(self, interaction: discord.Interaction) -> None:
        bank = self.services.get("country_bank")
        if bank is None:
            await interaction.response.send_message("Country dataset not available.", ephemeral=True)
            return

        await interaction.response.send_message(
            f"🌍 **{bank.count()}** countries across: {', '.join(bank.continents())}",
            ephemeral=True,
        )


# =====================
# SETUP
# =====================
async def setup(bot: discord.Client) -> None:
    services: dict[str, Any] = getattr(bot, "services", {})

    existing = {c.name for c in bot.tree.get_commands()}

    if "core" not in existing:
        bot.tree.add_command(CoreCommands(bot, services))

    # Capitals (/capitals ...)
    if "capitals" not in existing:
        capitals = services.get("capitals")
        if capitals:
            bot.tree.add_command(CapitalsCommands(capitals))
        else:
            logger.warning("capitals game not found; /capitals commands not registered")

    logger.info(
        "Discord commands registered: %s",
        " | ".join(c.name for c in bot.tree.get_commands()) or "(none)",
    )

from __future__ import annotations

import logging

import discord
from discord import app_commands

from capquiz.assets.asset_links import AssetLinks
from capquiz.domain.errors import CapitalQuizError
from capquiz.games.capitals.game import CapitalsQuizGame

logger = logging.getLogger(__name__)


class CapitalsCommands(app_commands.Group):
    """
    Slash commands group:

      /capitals start
      /capitals stop
      /capitals help

    Integration:
      - add to bot.tree: bot.tree.add_command(CapitalsCommands(game))
    """

    def __init__(self, game: CapitalsQuizGame) -> None:
        super().__init__(name="capitals", description="Flag & capital city quiz")
        self._game = game

    @app_commands.command(name="start", description="Start a capitals round (creates your personal panel)")
    async def start(self, interaction: discord.Interaction) -> None:
        if not isinstance(interaction.channel, (discord.TextChannel, discord.Thread)):
            await interaction.response.send_message("Use this in a server text channel.", ephemeral=True)
            return

        await interaction.response.defer(ephemeral=True)
        restarting = self._game.has_session(int(interaction.channel_id or 0), interaction.user.id)
        try:
            await self._game.start_for_user(channel=interaction.channel, user=interaction.user)
        except (ValueError, CapitalQuizError) as e:
            logger.warning("Capitals start refused for %s: %s", interaction.user.id, e)
            await interaction.followup.send(f"⚠️ {e}", ephemeral=True)
            return

        if restarting:
            await interaction.followup.send("🔁 Your previous round was dropped; a new panel is in the channel.", ephemeral=True)
            return
        await interaction.followup.send("🏳️ Capitals started! Check the channel for your panel.", ephemeral=True)

    @app_commands.command(name="stop", description="Stop your current capitals round")
    async def stop(self, interaction: discord.Interaction) -> None:
        await interaction.response.defer(ephemeral=True)

        stopped = await self._game.stop_for_user(
            channel_id=int(interaction.channel_id or 0),
            player_id=interaction.user.id,
        )
        if not stopped:
            await interaction.followup.send("You have no active round in this channel.", ephemeral=True)
            return
        await interaction.followup.send("🛑 Capitals stopped (your round was cleared).", ephemeral=True)

    @app_commands.command(name="help", description="Show the capitals quiz rules")
    async def help(self, interaction: discord.Interaction) -> None:
        embed = discord.Embed(
            title="🏳️ Capitals — Help",
            description=(
                "**How it works**\n"
                "• Start with `/capitals start`\n"
                "• You’ll get a panel with a flag and the country name\n"
                "• Click the capital city among up to 6 options\n"
                "• The other options are real cities of the same country\n"
                "• Next flag appears automatically\n\n"
                "At the end you get your score and accuracy per continent."
            ),
        )
        embed.set_thumbnail(url=AssetLinks.QUIZ_ICON)
        await interaction.response.send_message(embed=embed, ephemeral=True)

from __future__ import annotations

import asyncio

from capquiz.config.settings import Settings
from capquiz.logging.setup import setup_logging

from capquiz.services.country_bank import CountryBank
from capquiz.games.capitals.game import CapitalsQuizGame

from capquiz.platforms.discord.bot import build_discord_bot


async def main() -> None:
    settings = Settings.load()
    setup_logging(settings)

    # --- Dataset (loaded + validated once) ---
    country_bank = CountryBank.load_from_assets(settings.dataset_path)

    # --- Games: Capitals ---
    capitals = CapitalsQuizGame(
        bank=country_bank,
        round_size=settings.round_size,
        advance_delay=settings.advance_delay,
        allowed_channel_ids=settings.quiz_channel_ids,
    )

    # --- DI container ---
    services = {
        "country_bank": country_bank,
        "capitals": capitals,
    }

    # --- Discord bot ---
    discord_bot = build_discord_bot(settings=settings, services=services)

    async with discord_bot:
        await discord_bot.start(settings.discord_token)


if __name__ == "__main__":
    asyncio.run(main())

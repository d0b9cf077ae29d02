from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from capquiz.domain.errors import ConfigurationError
from capquiz.domain.models import DEFAULT_ROUND_SIZE


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def _id_set_env(name: str) -> frozenset[int]:
    raw = os.getenv(name, "")
    ids: set[int] = set()
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ids.add(int(part))
        except ValueError as e:
            raise ConfigurationError(f"{name} must be comma-separated ids, got {part!r}") from e
    return frozenset(ids)


@dataclass(frozen=True)
class Settings:
    """
    Global application settings loaded from environment variables.

    This class should remain dependency-free and side-effect free
    except for loading environment variables.
    """

    # Environment
    env: str
    log_level: str

    # Discord
    discord_token: str
    discord_guild_id: int | None

    # Quiz
    quiz_channel_ids: frozenset[int]
    round_size: int
    advance_delay: float
    dataset_path: Path

    @classmethod
    def load(cls) -> "Settings":
        """
        Load settings from environment variables.
        """

        # Load .env for local development (noop when vars are already set)
        load_dotenv()

        env = os.getenv("ENV", "development")
        log_level = os.getenv("LOG_LEVEL", "INFO")

        discord_token = os.getenv("DISCORD_TOKEN")
        if not discord_token:
            raise RuntimeError("DISCORD_TOKEN is required")

        discord_guild_id_raw = os.getenv("DISCORD_GUILD_ID")
        discord_guild_id = (
            _int_env("DISCORD_GUILD_ID", 0) if discord_guild_id_raw else None
        )

        round_size = _int_env("QUIZ_ROUND_SIZE", DEFAULT_ROUND_SIZE)
        if round_size <= 0:
            raise ConfigurationError(f"QUIZ_ROUND_SIZE must be positive, got {round_size}")

        advance_delay = _float_env("QUIZ_ADVANCE_DELAY", 1.0)
        if advance_delay < 0:
            raise ConfigurationError(f"QUIZ_ADVANCE_DELAY can't be negative, got {advance_delay}")

        dataset_path = Path(os.getenv("QUIZ_DATASET_PATH", "capquiz/assets/countries.json"))

        return cls(
            env=env,
            log_level=log_level,
            discord_token=discord_token,
            discord_guild_id=discord_guild_id,
            quiz_channel_ids=_id_set_env("QUIZ_CHANNEL_IDS"),
            round_size=round_size,
            advance_delay=advance_delay,
            dataset_path=dataset_path,
        )

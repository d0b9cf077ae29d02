from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from capquiz.config.settings import Settings

HANDLER_NAME = "capquiz.stdout"

# discord.py logs every gateway heartbeat and HTTP route at INFO/DEBUG
QUIET_LOGGERS: dict[str, int] = {
    "discord": logging.INFO,
    "discord.http": logging.WARNING,
    "discord.gateway": logging.WARNING,
    "asyncio": logging.WARNING,
}

PRODUCTION_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEVELOPMENT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def resolve_level(name: str | None) -> int:
    """
    "debug" -> logging.DEBUG. Unknown names fall back to INFO.
    """
    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def build_formatter(env: str) -> logging.Formatter:
    if env.strip().lower() in ("prod", "production"):
        return logging.Formatter(fmt=PRODUCTION_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    return logging.Formatter(fmt=DEVELOPMENT_FORMAT, datefmt="%H:%M:%S")


def setup_logging(settings: "Settings") -> None:
    """
    Configure application-wide logging on stdout.

    Safe to call more than once: the level is updated and the stdout
    handler is only installed the first time.
    """
    level = resolve_level(settings.log_level)
    root = logging.getLogger()
    root.setLevel(level)

    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(build_formatter(settings.env))
        root.addHandler(handler)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    if level == logging.INFO and (settings.log_level or "INFO").strip().upper() != "INFO":
        logging.getLogger(__name__).warning("Unknown LOG_LEVEL %r, using INFO", settings.log_level)

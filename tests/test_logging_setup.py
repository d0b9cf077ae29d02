import logging
from types import SimpleNamespace

import pytest

from capquiz.logging.setup import (
    DEVELOPMENT_FORMAT,
    HANDLER_NAME,
    PRODUCTION_FORMAT,
    build_formatter,
    resolve_level,
    setup_logging,
)


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for h in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(h)
    root.setLevel(level)


def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" WARNING ") == logging.WARNING
    assert resolve_level(None) == logging.INFO
    assert resolve_level("chatty") == logging.INFO


def test_formatter_depends_on_env():
    assert build_formatter("production")._fmt == PRODUCTION_FORMAT
    assert build_formatter("development")._fmt == DEVELOPMENT_FORMAT


def test_setup_installs_one_handler(root_logger):
    settings = SimpleNamespace(env="development", log_level="DEBUG")

    setup_logging(settings)
    setup_logging(SimpleNamespace(env="development", log_level="WARNING"))

    ours = [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]
    assert len(ours) == 1
    assert root_logger.level == logging.WARNING
    assert logging.getLogger("discord.http").level == logging.WARNING

from pathlib import Path

import pytest

from capquiz.config.settings import Settings
from capquiz.domain.errors import ConfigurationError

QUIZ_VARS = [
    "ENV",
    "LOG_LEVEL",
    "DISCORD_TOKEN",
    "DISCORD_GUILD_ID",
    "QUIZ_CHANNEL_IDS",
    "QUIZ_ROUND_SIZE",
    "QUIZ_ADVANCE_DELAY",
    "QUIZ_DATASET_PATH",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in QUIZ_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DISCORD_TOKEN", "test-token")


def test_defaults():
    s = Settings.load()

    assert s.env == "development"
    assert s.log_level == "INFO"
    assert s.discord_guild_id is None
    assert s.quiz_channel_ids == frozenset()
    assert s.round_size == 20
    assert s.advance_delay == 1.0
    assert s.dataset_path == Path("capquiz/assets/countries.json")


def test_overrides(monkeypatch):
    monkeypatch.setenv("DISCORD_GUILD_ID", "42")
    monkeypatch.setenv("QUIZ_CHANNEL_IDS", "1, 2,,3")
    monkeypatch.setenv("QUIZ_ROUND_SIZE", "10")
    monkeypatch.setenv("QUIZ_ADVANCE_DELAY", "0.5")

    s = Settings.load()

    assert s.discord_guild_id == 42
    assert s.quiz_channel_ids == frozenset({1, 2, 3})
    assert s.round_size == 10
    assert s.advance_delay == 0.5


def test_token_is_required(monkeypatch):
    monkeypatch.delenv("DISCORD_TOKEN")

    with pytest.raises(RuntimeError):
        Settings.load()


@pytest.mark.parametrize(
    "name,value",
    [
        ("QUIZ_ROUND_SIZE", "twenty"),
        ("QUIZ_ROUND_SIZE", "0"),
        ("QUIZ_ADVANCE_DELAY", "-1"),
        ("QUIZ_CHANNEL_IDS", "123,abc"),
    ],
)
def test_bad_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        Settings.load()

"""
Tests for configuration loading.
"""

import pytest

from rustbot.config.loader import load_config, require_token
from rustbot.config.schema import Config
from rustbot.errors import ConfigError


def test_defaults():
    config = Config(_env_file=None)

    assert config.token == ""
    assert config.playground.url == "https://play.rust-lang.org/execute"
    assert config.playground.channel == "stable"
    assert config.playground.edition == "2018"
    assert config.output.inline_limit == 2000
    assert config.output.attachment_limit == 8_000_000
    assert config.discord.allow_guilds == []


def test_token_from_environment(monkeypatch):
    monkeypatch.setenv("TOKEN", "abc.def.ghi")

    assert load_config().token == "abc.def.ghi"


def test_discord_token_alias(monkeypatch):
    monkeypatch.setenv("DISCORD_TOKEN", "from-alias")

    assert load_config().token == "from-alias"


def test_token_from_env_file(tmp_path):
    env_file = tmp_path / "bot.env"
    env_file.write_text("TOKEN=from-file\nUNRELATED=1\n")

    assert load_config(env_file).token == "from-file"


def test_dotenv_in_working_directory(tmp_path):
    (tmp_path / ".env").write_text("TOKEN=from-dotenv\n")

    assert load_config().token == "from-dotenv"


def test_nested_settings_from_environment(monkeypatch):
    monkeypatch.setenv("RUSTBOT_PLAYGROUND__EDITION", "2021")
    monkeypatch.setenv("RUSTBOT_OUTPUT__INLINE_LIMIT", "500")
    monkeypatch.setenv("RUSTBOT_DISCORD__ALLOW_GUILDS", '["1", "2"]')

    config = load_config()

    assert config.playground.edition == "2021"
    assert config.output.inline_limit == 500
    assert config.discord.allow_guilds == ["1", "2"]


def test_missing_env_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.env")


def test_require_token():
    assert require_token(Config(_env_file=None, token="t")) == "t"

    with pytest.raises(ConfigError, match="TOKEN"):
        require_token(Config(_env_file=None))


def test_masked_token():
    assert Config(_env_file=None, token="abcdefghijkl").masked_token == "abcd...ijkl"
    assert Config(_env_file=None, token="short").masked_token == "*****"
    assert Config(_env_file=None).masked_token == ""

"""
Unit tests for configuration loading.
"""

import pytest

from discord_bouncer.config.settings import BouncerConfigManager
from discord_bouncer.infrastructure.exceptions import ConfigurationError, TokenError


@pytest.fixture
def clean_env(monkeypatch):
    for key in (
        "DISCORD_BOT_TOKEN",
        "BOT_PREFIX",
        "LOG_LEVEL",
        "DATA_DIR",
        "ALERT_SOUND_PATH",
        "ALERT_TIMEOUT",
    ):
        # setenv first so keys later written by load_dotenv are removed on teardown
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def manager(tmp_path):
    return BouncerConfigManager(env_file_path=str(tmp_path / "missing.env"))


class TestBouncerConfigManager:
    @pytest.mark.unit
    def test_defaults(self, clean_env, manager):
        clean_env.setenv("DISCORD_BOT_TOKEN", "token")

        config = manager.get_config()

        assert config.bot_token == "token"
        assert config.command_prefix == "!"
        assert config.data_dir == "data"
        assert config.alert_sound_path is None
        assert config.alert_timeout == 10.0

    @pytest.mark.unit
    def test_missing_token(self, clean_env, manager):
        with pytest.raises(TokenError):
            manager.get_config()

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["soon", "0", "-3"])
    def test_invalid_alert_timeout(self, clean_env, manager, raw):
        clean_env.setenv("DISCORD_BOT_TOKEN", "token")
        clean_env.setenv("ALERT_TIMEOUT", raw)

        with pytest.raises(ConfigurationError):
            manager.get_config()

    @pytest.mark.unit
    def test_env_file_is_loaded(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "DISCORD_BOT_TOKEN=from-file\nBOT_PREFIX=?\nALERT_SOUND_PATH=sounds/ding.mp3\n",
            encoding="utf-8",
        )

        config = BouncerConfigManager(env_file_path=str(env_file)).get_config()

        assert config.bot_token == "from-file"
        assert config.command_prefix == "?"
        assert config.alert_sound_path == "sounds/ding.mp3"

"""
Configuration management for the Discord Bouncer bot.

This module provides a small configuration system backed by environment
variables, optionally loaded from a .env file.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from discord_bouncer.infrastructure.exceptions import ConfigurationError, TokenError

logger = logging.getLogger(__name__)


@dataclass
class BouncerConfig:
    """Configuration for the bouncer bot."""

    # Required configuration
    bot_token: str

    # Optional configuration with defaults
    command_prefix: str = "!"
    log_level: str = "INFO"
    data_dir: str = "data"

    # Audio alert played in the private room when a join request is posted
    alert_sound_path: Optional[str] = None
    alert_timeout: float = 10.0


class BouncerConfigManager:
    """Configuration manager reading the process environment."""

    def __init__(self, env_file_path: str = ".env"):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to environment file
        """
        self.env_file_path = env_file_path
        self._load_environment()

    def _load_environment(self):
        """Load environment variables from file."""
        if os.path.exists(self.env_file_path):
            load_dotenv(dotenv_path=self.env_file_path)
            logger.info(f"Loaded environment from {self.env_file_path}")
        else:
            logger.warning(f"Environment file {self.env_file_path} not found")

    def _get_required_env(self, key: str) -> str:
        """
        Get required environment variable.

        Raises:
            TokenError: If the environment variable is not set
        """
        value = os.getenv(key)
        if not value:
            raise TokenError(f"Required environment variable {key} is not set")
        return value

    def _get_optional_env(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get optional environment variable, falling back to default."""
        return os.getenv(key, default)

    def _get_alert_timeout(self) -> float:
        """Get the alert playback timeout in seconds."""
        raw = self._get_optional_env("ALERT_TIMEOUT", "10")
        try:
            timeout = float(raw)
        except ValueError:
            raise ConfigurationError(f"ALERT_TIMEOUT must be a number, got {raw!r}")
        if timeout <= 0:
            raise ConfigurationError("ALERT_TIMEOUT must be positive")
        return timeout

    def get_config(self) -> BouncerConfig:
        """
        Get the bot configuration.

        Returns:
            BouncerConfig: Bot configuration

        Raises:
            ConfigurationError: If required configuration is missing or invalid
        """
        try:
            config = BouncerConfig(
                bot_token=self._get_required_env("DISCORD_BOT_TOKEN"),
                command_prefix=self._get_optional_env("BOT_PREFIX", "!"),
                log_level=self._get_optional_env("LOG_LEVEL", "INFO"),
                data_dir=self._get_optional_env("DATA_DIR", "data"),
                alert_sound_path=self._get_optional_env("ALERT_SOUND_PATH") or None,
                alert_timeout=self._get_alert_timeout(),
            )

            logger.info("Configuration loaded successfully")
            return config

        except Exception as e:
            logger.error(f"Failed to load configuration: {e}", exc_info=True)
            raise


# Global configuration manager instance
config_manager = BouncerConfigManager()

"""
Logging setup for the Discord Bouncer bot.

The packaged logging.yaml is applied with dictConfig; the ENVIRONMENT variable
decides how chatty the bouncer's own loggers are:

- development (default): DEBUG
- staging / stage: INFO
- production / prod: WARNING

discord.py's voice and gateway loggers are always held at WARNING.
"""

import logging
import logging.config
import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from enum import Enum


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "logging.yaml"

NOISY_LOGGERS = [
    "discord.voice_state",
    "discord.voice_client",
    "discord.gateway",
    "discord.client",
    "discord.player",
]

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEBUG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Environment(Enum):
    """Deployment environment, read from ENVIRONMENT."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def from_name(cls, name: str) -> "Environment":
        aliases = {"prod": cls.PRODUCTION, "stage": cls.STAGING}
        name = name.strip().lower()
        if name in aliases:
            return aliases[name]
        try:
            return cls(name)
        except ValueError:
            return cls.DEVELOPMENT

    @property
    def log_level(self) -> str:
        return _ENVIRONMENT_LEVELS[self]


_ENVIRONMENT_LEVELS = {
    Environment.DEVELOPMENT: "DEBUG",
    Environment.STAGING: "INFO",
    Environment.PRODUCTION: "WARNING",
}


def quiet_discord_loggers() -> None:
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class LoggingManager:
    """Applies the YAML logging config for each component, adjusted for ENVIRONMENT."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self._config_cache: Optional[Dict[str, Any]] = None
        self.environment = Environment.from_name(os.getenv("ENVIRONMENT", "development"))

    def _load_yaml_config(self) -> Optional[Dict[str, Any]]:
        """Read logging.yaml, caching the parsed dict. None if it is missing or invalid."""
        if self._config_cache is None and self.config_path.exists():
            try:
                with open(self.config_path, "r") as f:
                    self._config_cache = yaml.safe_load(f)
            except (yaml.YAMLError, OSError) as e:
                logging.getLogger(__name__).warning(
                    f"Ignoring logging config {self.config_path}: {e}"
                )
        return self._config_cache

    def _get_environment_log_level(self) -> str:
        return self.environment.log_level

    def _apply_environment_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Return a copy of the config with the root and bouncer loggers set to the
        environment level. The discord loggers keep the level the YAML gives them.
        """
        level = self._get_environment_log_level()
        config = dict(config)

        if "root" in config:
            config["root"] = dict(config["root"], level=level)

        third_party = set(NOISY_LOGGERS) | {"discord"}
        config["loggers"] = {
            name: logger_config if name in third_party else dict(logger_config, level=level)
            for name, logger_config in config.get("loggers", {}).items()
        }
        return config

    def setup_logging(
        self,
        component_name: str,
        log_level: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> logging.Logger:
        """
        Configure logging and return the logger for a bouncer component.

        Args:
            component_name: Logger name, e.g. 'discord_bouncer.join_requests'
            log_level: Explicit level for this logger, overriding ENVIRONMENT
            log_file: Extra file handler, only used when logging.yaml is unavailable

        Returns:
            The component's logger
        """
        config = self._load_yaml_config()
        if not config:
            return self._setup_basic_logging(
                component_name, log_level or self._get_environment_log_level(), log_file
            )

        logging.config.dictConfig(self._apply_environment_overrides(config))
        logger = logging.getLogger(component_name)
        if log_level:
            logger.setLevel(log_level.upper())
        quiet_discord_loggers()
        return logger

    def _setup_basic_logging(
        self, component_name: str, log_level: str, log_file: Optional[str]
    ) -> logging.Logger:
        """Console (and optional file) handlers for when logging.yaml can't be used."""
        production = self.environment is Environment.PRODUCTION
        formatter = logging.Formatter(
            CONSOLE_FORMAT if production else DEBUG_FORMAT, datefmt=DATE_FORMAT
        )

        logger = logging.getLogger(component_name)
        logger.setLevel(log_level.upper())
        logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logger.level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_file:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.WARNING if production else logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        quiet_discord_loggers()
        return logger


_logging_manager = LoggingManager()


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    return _logging_manager.setup_logging(component_name, log_level, log_file)


def get_logger(component_name: str) -> logging.Logger:
    return logging.getLogger(component_name)

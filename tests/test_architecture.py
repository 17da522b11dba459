"""
Architecture tests for the Discord Bouncer.

Verifies that the package layout imports cleanly and that the ambient
infrastructure (logging, exceptions) behaves as the components expect.
"""

import logging

import pytest

from discord_bouncer.infrastructure.logging_manager import LoggingManager


class TestArchitectureImports:
    """Test that all modules can be imported correctly."""

    def test_main_package_import(self):
        import discord_bouncer

        assert hasattr(discord_bouncer, "__version__")
        assert hasattr(discord_bouncer, "__author__")

    def test_core_imports(self):
        from discord_bouncer.core import AccessPolicyStore, JoinRequestWorkflow, SessionRegistry
        from discord_bouncer.core.access_policy import AccessPolicyStore as AccessPolicyStoreClass
        from discord_bouncer.core.join_requests import JoinRequestWorkflow as WorkflowClass
        from discord_bouncer.core.session_registry import SessionRegistry as RegistryClass

        assert AccessPolicyStore == AccessPolicyStoreClass
        assert JoinRequestWorkflow == WorkflowClass
        assert SessionRegistry == RegistryClass

    def test_bot_imports(self):
        from discord_bouncer.bots.bot_core import BouncerBot, run
        from discord_bouncer.bots.commands import SetupCommands
        from discord_bouncer.bots.handlers import EventHandlers, VoiceEventHandlers

        assert callable(run)
        assert BouncerBot is not None
        assert SetupCommands is not None
        assert EventHandlers is not None
        assert VoiceEventHandlers is not None

    def test_exception_hierarchy(self):
        from discord_bouncer.infrastructure.exceptions import (
            BouncerError,
            ConfigurationError,
            MoveError,
            StorageError,
            TokenError,
        )

        assert issubclass(TokenError, ConfigurationError)
        assert issubclass(ConfigurationError, BouncerError)
        assert issubclass(StorageError, BouncerError)
        assert issubclass(MoveError, BouncerError)


class TestLoggingManager:
    """Environment driven log levels."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "environment, level",
        [
            ("development", "DEBUG"),
            ("staging", "INFO"),
            ("stage", "INFO"),
            ("production", "WARNING"),
            ("Prod", "WARNING"),
            ("qa", "DEBUG"),
        ],
    )
    def test_environment_levels(self, monkeypatch, environment, level):
        monkeypatch.setenv("ENVIRONMENT", environment)
        assert LoggingManager()._get_environment_log_level() == level

    @pytest.mark.unit
    def test_yaml_config_is_packaged(self):
        config = LoggingManager()._load_yaml_config()

        assert config is not None
        assert "discord_bouncer" in config["loggers"]

    @pytest.mark.unit
    def test_setup_logging_returns_named_logger(self):
        from discord_bouncer.infrastructure import setup_logging

        logger = setup_logging(component_name="discord_bouncer.test")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "discord_bouncer.test"

    @pytest.mark.unit
    def test_overrides_leave_discord_loggers_alone(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        manager = LoggingManager()

        config = manager._apply_environment_overrides(manager._load_yaml_config())

        assert config["root"]["level"] == "WARNING"
        assert config["loggers"]["discord_bouncer"]["level"] == "WARNING"
        assert config["loggers"]["discord"]["level"] == "INFO"
        assert manager._load_yaml_config()["loggers"]["discord_bouncer"]["level"] == "DEBUG"

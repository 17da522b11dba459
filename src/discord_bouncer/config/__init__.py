"""
Configuration management for the Discord Bouncer bot.

This package provides configuration loading from the environment
and default value management.
"""

from .settings import BouncerConfig, BouncerConfigManager, config_manager

__all__ = [
    "BouncerConfig",
    "BouncerConfigManager",
    "config_manager",
]

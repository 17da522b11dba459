"""
Infrastructure components for the Discord Bouncer bot.

This package contains infrastructure concerns including:
- Logging configuration with environment-based levels
- Custom exception definitions
"""

from .logging import setup_logging, get_logger
from .logging_manager import LoggingManager, Environment
from .exceptions import (
    BouncerError,
    ConfigurationError,
    TokenError,
    StorageError,
    MoveError,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "LoggingManager",
    "Environment",
    # Exceptions
    "BouncerError",
    "ConfigurationError",
    "TokenError",
    "StorageError",
    "MoveError",
]

"""
Centralized logging configuration for the Discord Bouncer bot.

This module provides consistent logging setup across all bot components
using YAML configuration with environment-based level controls.
"""

import logging
from typing import Optional

from .logging_manager import setup_logging as _setup_logging, get_logger as _get_logger


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging for a bot component using YAML configuration.

    Args:
        component_name: Name of the component (e.g., 'discord_bouncer.join_requests')
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). If None,
                  uses environment-appropriate level:
                  Development=DEBUG, Staging=INFO, Production=WARNING
        log_file: Optional log file path, honoured when no YAML config is present

    Returns:
        logging.Logger: Configured logger instance
    """
    return _setup_logging(component_name, log_level, log_file)


def get_logger(component_name: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        component_name: Name of the component

    Returns:
        logging.Logger: Logger instance
    """
    return _get_logger(component_name)

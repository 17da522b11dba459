"""
Custom exceptions for the Discord Bouncer bot.

This module defines the exceptions raised inside the bouncer,
providing clear error categorization and handling.
"""


class BouncerError(Exception):
    """Base exception for all bouncer related errors."""

    pass


class ConfigurationError(BouncerError):
    """Raised when there are configuration-related errors."""

    pass


class TokenError(ConfigurationError):
    """Raised when the bot token configuration is missing or invalid."""

    pass


class StorageError(BouncerError):
    """Raised when guild settings cannot be read or written."""

    pass


class MoveError(BouncerError):
    """Raised when a member cannot be moved into the private room."""

    def __init__(self, user_id: int, channel_id: int, reason: str):
        super().__init__(
            f"Could not move user {user_id} to channel {channel_id}: {reason}"
        )
        self.user_id = user_id
        self.channel_id = channel_id
        self.reason = reason

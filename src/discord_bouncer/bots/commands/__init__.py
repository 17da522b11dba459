"""
Command handlers for the bouncer bot.

- setup_commands: configuring the bouncer's rooms and toggling it
- base: Base class for command handlers
"""

from .base import BaseCommandHandler
from .setup_commands import SetupCommands

__all__ = ["BaseCommandHandler", "SetupCommands"]

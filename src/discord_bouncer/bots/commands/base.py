"""
Base command handler class for the bouncer's commands.

This module provides a base class that all command handlers can inherit from,
providing common functionality and utilities.
"""

import logging
from typing import Optional

import discord
from discord.ext import commands

from discord_bouncer.config.settings import BouncerConfig
from discord_bouncer.storage.guild_settings import GuildSettingsStore
from discord_bouncer.utils.embed_builder import EmbedBuilder


class BaseCommandHandler:
    """Base class for command handlers with common functionality."""

    def __init__(
        self,
        settings_store: GuildSettingsStore,
        logger: Optional[logging.Logger] = None,
        config: Optional[BouncerConfig] = None,
    ):
        """Initialize the base command handler."""
        self.settings_store = settings_store
        self.logger = logger or logging.getLogger(__name__)
        self.config = config

    @property
    def prefix(self) -> str:
        return self.config.command_prefix if self.config else "!"

    async def _reply(self, ctx: commands.Context, content: str) -> None:
        """Reply to the invoker only (ephemeral when invoked as a slash command)."""
        await ctx.send(content, ephemeral=True)

    async def _handle_command_error(
        self, ctx: commands.Context, error: Exception, command_name: str
    ) -> None:
        """Handle command errors with appropriate logging and user feedback."""
        self.logger.error(f"Error in {command_name} command: {error}", exc_info=True)
        embed = EmbedBuilder.error(
            "Something Went Wrong",
            f"An unexpected error occurred. Please try again or contact the bot administrator if the issue persists.\n\n**Error:** {str(error)}",
        )
        try:
            await ctx.send(embed=embed, ephemeral=True)
        except discord.NotFound:
            self.logger.warning(
                f"Could not send error message for {command_name} - channel may have been deleted"
            )
        except Exception as send_error:
            self.logger.warning(
                f"Could not send error message for {command_name}: {send_error}"
            )

"""
General event handlers for the bouncer bot.

Ready and command error handling, kept apart from the voice handlers.
"""

import logging
from typing import Any, Optional

import discord
from discord.ext import commands

from discord_bouncer.utils.embed_builder import EmbedBuilder


class EventHandlers:
    """Handles bot-level Discord events."""

    def __init__(self, bot: Any, logger: Optional[logging.Logger] = None):
        """Initialize event handlers."""
        self.bot_instance = bot  # This is the BouncerBot instance
        self.bot = bot.bot  # This is the actual Discord bot
        self.logger = logger or logging.getLogger(__name__)

    async def on_ready(self) -> None:
        """Bot ready event."""
        self.logger.info(f"Bouncer online: {self.bot.user}")

        try:
            synced = await self.bot.tree.sync()
            self.logger.info(f"Synced {len(synced)} application command(s)")
        except Exception as e:
            self.logger.error(f"Command sync failed: {e}", exc_info=True)

    async def on_command_error(self, ctx: commands.Context, error: Exception) -> None:
        """Command error handler."""
        if isinstance(error, commands.CommandNotFound):
            return
        try:
            if isinstance(error, commands.NoPrivateMessage):
                embed = EmbedBuilder.command_error("This command can only be used in a server.")
            elif isinstance(error, commands.CheckFailure):
                embed = EmbedBuilder.no_permission()
            elif isinstance(error, commands.UserInputError):
                embed = EmbedBuilder.command_error(str(error))
            else:
                embed = EmbedBuilder.command_error(str(error))
                self.logger.error(
                    f"Command error in {getattr(ctx, 'command', None)}: {error}"
                )
            await ctx.send(embed=embed, ephemeral=True)
        except discord.NotFound:
            self.logger.error(
                f"Command error in {getattr(ctx, 'command', None)}: {error} (channel was deleted)"
            )
        except Exception as send_error:
            self.logger.error(
                f"Command error in {getattr(ctx, 'command', None)}: {error}"
            )
            self.logger.error(f"Failed to send error message: {send_error}")

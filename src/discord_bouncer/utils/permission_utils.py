"""
Permission utilities for the Discord Bouncer bot.

This module provides the capability check used when configuring rooms and
when starting a session, and the command check for bouncer moderators.
"""

from typing import Iterable, Optional

import discord
from discord.ext import commands

from discord_bouncer.core.types import CapabilityCheck
from discord_bouncer.infrastructure.logging import get_logger

logger = get_logger(__name__)


class PermissionUtils:
    """Utilities for permission checking."""

    @staticmethod
    def is_moderator() -> callable:
        """Decorator: Check if user may moderate members (or is an administrator)."""

        def predicate(ctx: commands.Context) -> bool:
            if ctx.guild is None:
                raise commands.NoPrivateMessage()
            perms = ctx.author.guild_permissions
            return perms.administrator or perms.moderate_members

        return commands.check(predicate)

    @staticmethod
    async def resolve_channel(
        guild: discord.Guild, channel_id: int
    ) -> Optional[discord.abc.GuildChannel]:
        """Get a channel from cache, falling back to the API."""
        channel = guild.get_channel(channel_id)
        if channel is not None:
            return channel
        try:
            return await guild.fetch_channel(channel_id)
        except discord.NotFound:
            return None

    @staticmethod
    async def check_channel_capabilities(
        guild: discord.Guild,
        channel_id: int,
        capabilities: Iterable[str],
    ) -> CapabilityCheck:
        """
        Check that the bot holds every capability in a channel.

        Capabilities are discord.Permissions attribute names
        (e.g. "connect", "move_members").
        """
        try:
            channel = await PermissionUtils.resolve_channel(guild, channel_id)
            if channel is None:
                return CapabilityCheck.check_failed()

            permissions = channel.permissions_for(guild.me)
            missing = [
                capability
                for capability in capabilities
                if not getattr(permissions, capability)
            ]
            return CapabilityCheck(missing=missing)
        except Exception as e:
            logger.error(
                f"Error checking permissions in channel {channel_id} of guild {guild.id}: {e}",
                exc_info=True,
            )
            return CapabilityCheck.check_failed()

    @staticmethod
    def format_capabilities(capabilities: Iterable[str]) -> str:
        """Render permission attribute names for humans ("move_members" -> "Move Members")."""
        return ", ".join(c.replace("_", " ").title() for c in capabilities)

"""
Utility class for building Discord embeds consistently.

This module provides a centralized way to create the bouncer's embeds with
consistent styling and formatting.
"""

from typing import Optional

import discord


class EmbedBuilder:
    """Utility class for building Discord embeds with consistent styling."""

    @staticmethod
    def error(title: str, description: str, **kwargs) -> discord.Embed:
        """Create an error embed (red)."""
        return discord.Embed(
            title=title, description=description, color=discord.Color.red(), **kwargs
        )

    @staticmethod
    def join_request(member: discord.Member, private_room_id: int) -> discord.Embed:
        """Create the join request notification embed."""
        embed = discord.Embed(
            title="Join Request",
            description=f"<@{member.id}> wants to join the <#{private_room_id}> channel.",
            color=discord.Color.blurple(),
        )
        embed.set_thumbnail(url=member.display_avatar.url)
        embed.set_footer(text=f"Requested by {member.name}")
        return embed

    @staticmethod
    def session_started(waiting_room_id: int) -> discord.Embed:
        """Create the session start notice."""
        return discord.Embed(
            title="New session started",
            description=f"You will be notified of all people who join <#{waiting_room_id}> in this channel.",
            color=discord.Color.blurple(),
        )

    @staticmethod
    def session_ended() -> discord.Embed:
        """Create the session end notice."""
        return discord.Embed(
            title="Session Ended",
            description="All members have left the private voice channel. The session has ended.",
            color=discord.Color.red(),
            timestamp=discord.utils.utcnow(),
        )

    @staticmethod
    def no_permission() -> discord.Embed:
        """Create a no permission embed."""
        return discord.Embed(
            description="❌ You need the **Moderate Members** permission to configure the bouncer.",
            color=discord.Color.red(),
        )

    @staticmethod
    def command_error(error_message: str) -> discord.Embed:
        """Create a command error embed."""
        return discord.Embed(
            description=f"❌ Error: {error_message}",
            color=discord.Color.red(),
        )

    @staticmethod
    def bouncer_status(
        private_room_id: Optional[int],
        waiting_room_id: Optional[int],
        notice_channel_id: Optional[int],
        enabled: bool,
        prefix: str = "!",
    ) -> discord.Embed:
        """Create the bouncer status embed listing configured channels."""

        def describe(channel_id: Optional[int], command: str) -> str:
            if channel_id is not None:
                return f"<#{channel_id}>"
            return f"Set it using `{prefix}bouncer {command}`"

        embed = discord.Embed(
            title="Bouncer Status",
            description="Channels:",
            color=discord.Color.blurple(),
        )
        embed.add_field(
            name="Private voice channel",
            value=describe(private_room_id, "set_private"),
            inline=False,
        )
        embed.add_field(
            name="Waiting room voice channel",
            value=describe(waiting_room_id, "set_waiting"),
            inline=False,
        )
        embed.add_field(
            name="Text channel",
            value=describe(notice_channel_id, "set_notice"),
            inline=False,
        )
        embed.add_field(
            name="Status",
            value="✅ Enabled" if enabled else "❌ Disabled",
            inline=False,
        )
        return embed

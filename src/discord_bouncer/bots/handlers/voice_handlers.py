"""
Voice state event handlers for the bouncer.

Translates discord voice state updates into session lifecycle changes on the
private room and join request evaluations for waiting-room arrivals.
"""

import asyncio
import logging
from typing import Optional

import discord

from discord_bouncer.core.join_requests import JoinRequestWorkflow, count_occupants
from discord_bouncer.core.session_registry import SessionRegistry
from discord_bouncer.core.types import (
    NOTICE_CHANNEL_CAPABILITIES,
    VOICE_ROOM_CAPABILITIES,
    ArrivalOutcome,
    GuildChannels,
)
from discord_bouncer.storage.guild_settings import GuildSettingsStore
from discord_bouncer.utils.embed_builder import EmbedBuilder
from discord_bouncer.utils.permission_utils import PermissionUtils


class VoiceEventHandlers:
    """Handles voice state updates for the private and waiting rooms."""

    def __init__(
        self,
        settings_store: GuildSettingsStore,
        registry: SessionRegistry,
        workflow: JoinRequestWorkflow,
        logger: Optional[logging.Logger] = None,
    ):
        self.settings_store = settings_store
        self.registry = registry
        self.workflow = workflow
        self.logger = logger or logging.getLogger(__name__)

    async def on_voice_state_update(
        self,
        member: discord.Member,
        before: discord.VoiceState,
        after: discord.VoiceState,
    ) -> None:
        """Voice state update event handler."""
        if before.channel == after.channel:
            return

        guild = member.guild
        try:
            if before.channel is not None:
                await self._on_channel_left(guild, before.channel)
            if after.channel is not None:
                await self._on_channel_joined(member, after.channel)
        except Exception as e:
            self.logger.error(
                f"Error handling voice update of {member.id} in guild {guild.id}: {e}",
                exc_info=True,
            )

    async def _on_channel_left(
        self, guild: discord.Guild, channel: discord.VoiceChannel
    ) -> None:
        session = self.registry.get_session(guild.id)
        if session is not None:
            private_room_id = session.channels.private_room_id
        else:
            private_room_id = self.settings_store.get_private_room_id(guild.id)

        if channel.id == private_room_id:
            await self.on_private_room_occupancy(guild, channel)

    async def _on_channel_joined(
        self, member: discord.Member, channel: discord.VoiceChannel
    ) -> None:
        guild = member.guild
        if channel.id == self.settings_store.get_private_room_id(guild.id):
            await self.on_private_room_occupancy(guild, channel)

        session = self.registry.get_session(guild.id)
        if session is not None and channel.id == session.channels.waiting_room_id:
            await self.on_waiting_room_arrival(member)

    async def on_private_room_occupancy(
        self, guild: discord.Guild, channel: discord.VoiceChannel
    ) -> None:
        """React to someone joining or leaving the private room."""
        if count_occupants(channel) > 0:
            await self.start_session(guild, channel)
        else:
            await self.end_session(guild)

    async def on_waiting_room_arrival(self, member: discord.Member) -> ArrivalOutcome:
        """Run the join request workflow for a waiting-room arrival."""
        if member.bot:
            return ArrivalOutcome.IGNORED
        if not self.registry.has_session(member.guild.id):
            return ArrivalOutcome.NO_SESSION
        return await self.workflow.handle_arrival(member)

    async def start_session(
        self, guild: discord.Guild, private_room: discord.VoiceChannel
    ) -> bool:
        """Start a session if the guild is enabled, configured and permitted."""
        if self.registry.has_session(guild.id):
            return False
        if not self.settings_store.get_feature_enabled(guild.id):
            return False

        channels = self.settings_store.get_channels(guild.id)
        if channels is None:
            self.logger.debug(f"Bouncer enabled but not fully configured in guild {guild.id}")
            return False

        if not await self._has_required_capabilities(guild, channels):
            return False

        # Occupants may have left while permissions were being checked
        if count_occupants(private_room) == 0:
            return False

        if not self.registry.start_session(guild.id, channels):
            return False

        await self._post_notice(
            guild, channels.notice_channel_id, EmbedBuilder.session_started(channels.waiting_room_id)
        )
        return True

    async def end_session(self, guild: discord.Guild) -> bool:
        """Tear down the guild's session, expiring its pending join requests."""
        session = self.registry.get_session(guild.id)
        if session is None:
            return False

        notice_channel_id = session.channels.notice_channel_id
        self.registry.end_session(guild.id)
        await self.workflow.expire_pending(guild.id)
        await self._post_notice(guild, notice_channel_id, EmbedBuilder.session_ended())
        return True

    async def _has_required_capabilities(
        self, guild: discord.Guild, channels: GuildChannels
    ) -> bool:
        results = await asyncio.gather(
            PermissionUtils.check_channel_capabilities(
                guild, channels.private_room_id, VOICE_ROOM_CAPABILITIES
            ),
            PermissionUtils.check_channel_capabilities(
                guild, channels.waiting_room_id, VOICE_ROOM_CAPABILITIES
            ),
            PermissionUtils.check_channel_capabilities(
                guild, channels.notice_channel_id, NOTICE_CHANNEL_CAPABILITIES
            ),
        )
        if all(result.ok for result in results):
            return True

        self.logger.warning(
            f"Not starting session in guild {guild.id}: missing capabilities "
            f"{[r.missing if not r.failed else 'check failed' for r in results]}"
        )
        return False

    async def _post_notice(
        self, guild: discord.Guild, channel_id: int, embed: discord.Embed
    ) -> None:
        channel = guild.get_channel(channel_id)
        if channel is None:
            self.logger.warning(f"Notice channel {channel_id} not found in guild {guild.id}")
            return
        try:
            await channel.send(embed=embed)
        except discord.DiscordException as e:
            self.logger.error(f"Failed to post notice in guild {guild.id}: {e}")

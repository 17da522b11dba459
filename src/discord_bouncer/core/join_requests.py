"""
Join Request Workflow for the Discord Bouncer bot.

This module decides what happens when a member enters the waiting room of a
guild with an active session, and drives the optional moderator approval to
exactly one outcome.
"""

from typing import Dict, Optional

import discord

from discord_bouncer.infrastructure.exceptions import MoveError
from discord_bouncer.infrastructure.logging import setup_logging
from discord_bouncer.utils.embed_builder import EmbedBuilder
from discord_bouncer.utils.permission_utils import PermissionUtils
from .access_policy import AccessPolicyStore
from .join_request_view import JoinRequestView
from .session_registry import SessionRegistry
from .types import (
    REQUEST_TIMEOUT,
    ArrivalOutcome,
    Decision,
    GuildChannels,
    JoinRequest,
    JoinRequestStatus,
)

logger = setup_logging(component_name="discord_bouncer.join_requests")

ALREADY_HANDLED_MESSAGE = "This join request has already been handled."
MOVE_FAILED_MESSAGE = (
    "Error moving user to the private channel. If they haven't left the waiting room, "
    "check that I have permissions to connect to the channel and to move members."
)
DECISION_MESSAGES = {
    Decision.MOVE: "User moved to the private channel.",
    Decision.MOVE_REMEMBER: "User moved to the private channel and remembered for the current session.",
    Decision.IGNORE: "User ignored for the current session.",
}


def count_occupants(channel: discord.VoiceChannel) -> int:
    """Members in a voice channel, not counting this bot."""
    me = channel.guild.me
    return sum(1 for m in channel.members if me is None or m.id != me.id)


class JoinRequestWorkflow:
    """
    Evaluates waiting-room arrivals and resolves join requests.

    Everything between reading the policy store and setting a cooldown runs
    without awaiting, so interleaved arrivals of the same user cannot both
    raise a request.
    """

    def __init__(
        self,
        registry: SessionRegistry,
        policy: AccessPolicyStore,
        alert_player=None,
        request_timeout: float = REQUEST_TIMEOUT,
    ):
        self.registry = registry
        self.policy = policy
        self.alert_player = alert_player
        self.request_timeout = request_timeout
        # guild id -> request id -> view of a pending request
        self._pending: Dict[int, Dict[str, JoinRequestView]] = {}

    def evaluate_arrival(
        self, guild_id: int, user_id: int, private_room_occupancy: int
    ) -> ArrivalOutcome:
        """
        Decide the fate of an arrival. Sets the cooldown when a request is due.
        """
        if not self.registry.has_session(guild_id):
            return ArrivalOutcome.NO_SESSION
        if self.policy.is_ignored(guild_id, user_id):
            return ArrivalOutcome.IGNORED
        if private_room_occupancy == 0:
            return ArrivalOutcome.PRIVATE_ROOM_EMPTY
        if self.policy.is_remembered(guild_id, user_id):
            return ArrivalOutcome.ADMIT
        if not self.policy.try_set_cooldown(guild_id, user_id):
            return ArrivalOutcome.COOLDOWN
        return ArrivalOutcome.REQUEST

    async def handle_arrival(self, member: discord.Member) -> ArrivalOutcome:
        """Run the arrival pipeline for a member who entered the waiting room."""
        guild = member.guild
        session = self.registry.get_session(guild.id)
        if session is None:
            return ArrivalOutcome.NO_SESSION

        channels = session.channels
        private_room = guild.get_channel(channels.private_room_id)
        occupancy = count_occupants(private_room) if private_room is not None else 0

        outcome = self.evaluate_arrival(guild.id, member.id, occupancy)
        logger.debug(f"Arrival of {member.id} in guild {guild.id}: {outcome.value}")

        if outcome is ArrivalOutcome.ADMIT:
            try:
                await self.move_member(member, channels.private_room_id)
                logger.info(f"Remembered user {member.id} admitted in guild {guild.id}")
            except MoveError as e:
                logger.warning(str(e))
        elif outcome is ArrivalOutcome.REQUEST:
            await self.open_request(member, channels, private_room)

        return outcome

    async def open_request(
        self,
        member: discord.Member,
        channels: GuildChannels,
        private_room: Optional[discord.VoiceChannel] = None,
    ) -> Optional[JoinRequest]:
        """Post the join request notification and play the audio alert."""
        guild = member.guild
        notice_channel = await PermissionUtils.resolve_channel(guild, channels.notice_channel_id)
        if notice_channel is None:
            logger.warning(
                f"Notice channel {channels.notice_channel_id} not found in guild {guild.id}"
            )
            return None

        request = JoinRequest(
            guild_id=guild.id,
            user_id=member.id,
            private_room_id=channels.private_room_id,
        )
        view = JoinRequestView(self, request, member, timeout=self.request_timeout)
        self._pending.setdefault(guild.id, {})[request.request_id] = view

        try:
            view.message = await notice_channel.send(
                embed=EmbedBuilder.join_request(member, channels.private_room_id),
                view=view,
            )
        except Exception:
            self._forget(request)
            request.resolve(JoinRequestStatus.EXPIRED)
            view.stop()
            raise

        logger.info(f"Join request {request.request_id} opened for {member.id} in guild {guild.id}")

        # The session may have ended while the message was being sent
        if not request.is_pending:
            await self._disable_message(view)
            return request

        if self.alert_player is not None and private_room is not None:
            await self.alert_player.play_alert(private_room)
        return request

    async def resolve(
        self,
        view: JoinRequestView,
        interaction: discord.Interaction,
        decision: Decision,
    ) -> bool:
        """
        Apply a moderator decision. Only the first decision on a request counts.

        Returns:
            bool: True if this call resolved the request
        """
        request = view.request
        if not request.resolve(decision.status):
            try:
                await interaction.response.send_message(ALREADY_HANDLED_MESSAGE, ephemeral=True)
            except discord.DiscordException as e:
                logger.debug(f"Could not reply to late decision on {request.request_id}: {e}")
            return False

        self._forget(request)
        view.disable_controls()
        view.stop()
        try:
            await interaction.response.edit_message(view=view)
        except discord.DiscordException as e:
            logger.warning(f"Could not disable join request {request.request_id}: {e}")

        guild_id, user_id = request.guild_id, request.user_id
        content = DECISION_MESSAGES[decision]

        if decision is Decision.IGNORE:
            self.policy.ignore(guild_id, user_id)
        else:
            if decision is Decision.MOVE_REMEMBER:
                self.policy.remember(guild_id, user_id)
            self.policy.clear_cooldown(guild_id, user_id)
            try:
                await self.move_member(view.member, request.private_room_id)
            except MoveError as e:
                logger.warning(str(e))
                content = MOVE_FAILED_MESSAGE

        logger.info(
            f"Join request {request.request_id} resolved as {request.status.value} "
            f"by {interaction.user.id} in guild {guild_id}"
        )

        try:
            await interaction.followup.send(content, ephemeral=True)
        except discord.DiscordException as e:
            logger.warning(f"Could not reply to decision on {request.request_id}: {e}")
        return True

    async def expire(self, view: JoinRequestView) -> bool:
        """Expire a request whose decision window has elapsed."""
        if not view.request.resolve(JoinRequestStatus.EXPIRED):
            return False
        self._forget(view.request)
        logger.info(f"Join request {view.request.request_id} expired")
        await self._disable_message(view)
        return True

    async def expire_pending(self, guild_id: int) -> int:
        """
        Expire every pending request of a guild, used when its session ends.

        Returns:
            int: Number of requests expired
        """
        views = self._pending.pop(guild_id, {})
        expired = 0
        for view in views.values():
            if not view.request.resolve(JoinRequestStatus.EXPIRED):
                continue
            view.stop()
            expired += 1
            await self._disable_message(view)
        if expired:
            logger.info(f"Expired {expired} pending join request(s) in guild {guild_id}")
        return expired

    def pending_requests(self, guild_id: int):
        return [view.request for view in self._pending.get(guild_id, {}).values()]

    async def move_member(self, member: discord.Member, channel_id: int) -> None:
        """
        Move a member into a voice channel.

        Raises:
            MoveError: If Discord refuses the move (e.g. the member left voice)
        """
        try:
            await member.move_to(discord.Object(id=channel_id), reason="Admitted by bouncer")
        except discord.DiscordException as e:
            raise MoveError(member.id, channel_id, str(e)) from e

    def _forget(self, request: JoinRequest) -> None:
        views = self._pending.get(request.guild_id)
        if views is None:
            return
        views.pop(request.request_id, None)
        if not views:
            del self._pending[request.guild_id]

    async def _disable_message(self, view: JoinRequestView) -> None:
        view.disable_controls()
        if view.message is None:
            return
        try:
            await view.message.edit(view=view)
        except discord.DiscordException as e:
            logger.warning(f"Could not disable join request {view.request.request_id}: {e}")

"""
Session Registry for the Discord Bouncer bot.

A session exists for a guild while its private room is occupied. The registry
is the only owner of session objects; everything else reaches them through it.
"""

import time
from typing import Dict, Optional

from discord_bouncer.infrastructure.logging import setup_logging
from .types import GuildChannels, Session

logger = setup_logging(component_name="discord_bouncer.session_registry")


class SessionRegistry:
    """
    Keeps at most one Session per guild.

    None of the operations await, so a check followed by a mutation on the
    registry cannot interleave with another event handler.
    """

    def __init__(self):
        self._sessions: Dict[int, Session] = {}

    def start_session(self, guild_id: int, channels: GuildChannels) -> bool:
        """
        Create a session for a guild.

        Returns:
            bool: False if a session already exists or a channel id is missing
        """
        if channels is None or not channels.is_complete():
            logger.debug(f"Refusing to start session for guild {guild_id}: incomplete channels")
            return False
        if guild_id in self._sessions:
            return False

        self._sessions[guild_id] = Session(guild_id=guild_id, channels=channels)
        logger.info(f"Session started for guild {guild_id}")
        return True

    def get_session(self, guild_id: int) -> Optional[Session]:
        return self._sessions.get(guild_id)

    def has_session(self, guild_id: int) -> bool:
        return guild_id in self._sessions

    def end_session(self, guild_id: int) -> None:
        """Destroy a guild's session and every piece of policy state it holds."""
        session = self._sessions.pop(guild_id, None)
        if session is None:
            return
        session.clear()
        logger.info(
            f"Session ended for guild {guild_id} after {time.time() - session.started_at:.0f}s"
        )

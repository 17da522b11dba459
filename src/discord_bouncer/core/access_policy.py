"""
Access Policy Store for the Discord Bouncer bot.

Tracks, per session, which users are cooling down after a join request,
which users are remembered (admitted without asking) and which users are
ignored. Expiry of cooldowns is evaluated when they are read.
"""

import time
from typing import Callable, Optional

from discord_bouncer.infrastructure.logging import setup_logging
from .session_registry import SessionRegistry
from .types import COOLDOWN_WINDOW, Session

logger = setup_logging(component_name="discord_bouncer.access_policy")


class AccessPolicyStore:
    """Per-session cooldown, remembered and ignored sets."""

    def __init__(
        self,
        registry: SessionRegistry,
        clock: Optional[Callable[[], float]] = None,
        cooldown_window: float = COOLDOWN_WINDOW,
    ):
        self.registry = registry
        self.clock = clock or time.monotonic
        self.cooldown_window = cooldown_window

    def _session(self, guild_id: int) -> Optional[Session]:
        return self.registry.get_session(guild_id)

    def is_ignored(self, guild_id: int, user_id: int) -> bool:
        session = self._session(guild_id)
        return session is not None and user_id in session.ignored

    def is_remembered(self, guild_id: int, user_id: int) -> bool:
        session = self._session(guild_id)
        return session is not None and user_id in session.remembered

    def remember(self, guild_id: int, user_id: int) -> None:
        session = self._session(guild_id)
        if session is None:
            return
        session.remembered.add(user_id)
        logger.debug(f"User {user_id} remembered in guild {guild_id}")

    def ignore(self, guild_id: int, user_id: int) -> None:
        session = self._session(guild_id)
        if session is None:
            return
        session.ignored.add(user_id)
        logger.debug(f"User {user_id} ignored in guild {guild_id}")

    def is_in_cooldown(self, guild_id: int, user_id: int) -> bool:
        session = self._session(guild_id)
        if session is None:
            return False
        last_attempt = session.cooldowns.get(user_id)
        if last_attempt is None:
            return False
        return self.clock() - last_attempt <= self.cooldown_window

    def set_cooldown(self, guild_id: int, user_id: int) -> None:
        session = self._session(guild_id)
        if session is None:
            return
        session.cooldowns[user_id] = self.clock()

    def clear_cooldown(self, guild_id: int, user_id: int) -> None:
        session = self._session(guild_id)
        if session is None:
            return
        session.cooldowns.pop(user_id, None)

    def try_set_cooldown(self, guild_id: int, user_id: int) -> bool:
        """
        Start a cooldown unless one is already running.

        Returns:
            bool: True if the cooldown was set by this call
        """
        if self._session(guild_id) is None:
            return False
        if self.is_in_cooldown(guild_id, user_id):
            return False
        self.set_cooldown(guild_id, user_id)
        return True

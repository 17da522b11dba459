"""
Common types and constants for the Discord Bouncer bot.

This module centralizes the session and join request data structures
and the fixed policy constants used throughout the codebase.
"""

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Final, List, Optional, Set

# Policy constants (seconds)
COOLDOWN_WINDOW: Final[float] = 15 * 60
REQUEST_TIMEOUT: Final[float] = 900

# Capabilities the bot needs in each configured room
VOICE_ROOM_CAPABILITIES: Final[List[str]] = ["connect", "speak", "move_members"]
NOTICE_CHANNEL_CAPABILITIES: Final[List[str]] = ["view_channel", "send_messages"]


@dataclass(frozen=True)
class GuildChannels:
    """Snapshot of the three rooms configured for a guild."""

    private_room_id: Optional[int]
    waiting_room_id: Optional[int]
    notice_channel_id: Optional[int]

    def is_complete(self) -> bool:
        return (
            self.private_room_id is not None
            and self.waiting_room_id is not None
            and self.notice_channel_id is not None
        )


@dataclass
class Session:
    """Access-control state for one occupancy of a guild's private room."""

    guild_id: int
    channels: GuildChannels
    cooldowns: Dict[int, float] = field(default_factory=dict)
    remembered: Set[int] = field(default_factory=set)
    ignored: Set[int] = field(default_factory=set)
    started_at: float = field(default_factory=time.time)

    def clear(self) -> None:
        """Drop all per-session policy state."""
        self.cooldowns.clear()
        self.remembered.clear()
        self.ignored.clear()


class JoinRequestStatus(Enum):
    """Lifecycle states of a join request."""

    PENDING = "pending"
    MOVED = "moved"
    REMEMBERED = "remembered"
    IGNORED = "ignored"
    EXPIRED = "expired"


class Decision(Enum):
    """Moderator decisions offered on a join request notification."""

    MOVE = "move"
    MOVE_REMEMBER = "remember"
    IGNORE = "ignore"

    @property
    def status(self) -> JoinRequestStatus:
        return _DECISION_STATUS[self]


_DECISION_STATUS = {
    Decision.MOVE: JoinRequestStatus.MOVED,
    Decision.MOVE_REMEMBER: JoinRequestStatus.REMEMBERED,
    Decision.IGNORE: JoinRequestStatus.IGNORED,
}


@dataclass
class JoinRequest:
    """A pending approval for one waiting-room arrival."""

    guild_id: int
    user_id: int
    private_room_id: int
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: float = field(default_factory=time.time)
    status: JoinRequestStatus = JoinRequestStatus.PENDING
    resolved_at: Optional[float] = None

    @property
    def is_pending(self) -> bool:
        return self.status is JoinRequestStatus.PENDING

    def resolve(self, status: JoinRequestStatus) -> bool:
        """
        Move the request out of the pending state.

        Returns True only for the call that performed the transition; any
        later call leaves the request untouched and returns False.
        """
        if status is JoinRequestStatus.PENDING:
            raise ValueError("A join request cannot be resolved back to pending")
        if not self.is_pending:
            return False
        self.status = status
        self.resolved_at = time.time()
        return True


class ArrivalOutcome(Enum):
    """What the workflow decided for a waiting-room arrival."""

    NO_SESSION = "no_session"
    IGNORED = "ignored"
    PRIVATE_ROOM_EMPTY = "private_room_empty"
    ADMIT = "admit"
    COOLDOWN = "cooldown"
    REQUEST = "request"


@dataclass(frozen=True)
class CapabilityCheck:
    """Result of checking the bot's permissions in a channel."""

    missing: List[str] = field(default_factory=list)
    failed: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed and not self.missing

    @classmethod
    def check_failed(cls) -> "CapabilityCheck":
        return cls(failed=True)

"""
Core components for the Discord Bouncer bot.

This package contains the session-scoped access-control engine: the session
registry, the per-session policy store and the join request workflow.
"""

from .types import (
    COOLDOWN_WINDOW,
    REQUEST_TIMEOUT,
    ArrivalOutcome,
    CapabilityCheck,
    Decision,
    GuildChannels,
    JoinRequest,
    JoinRequestStatus,
    Session,
)
from .session_registry import SessionRegistry
from .access_policy import AccessPolicyStore
from .join_request_view import JoinRequestView
from .join_requests import JoinRequestWorkflow

__all__ = [
    "COOLDOWN_WINDOW",
    "REQUEST_TIMEOUT",
    "ArrivalOutcome",
    "CapabilityCheck",
    "Decision",
    "GuildChannels",
    "JoinRequest",
    "JoinRequestStatus",
    "Session",
    "SessionRegistry",
    "AccessPolicyStore",
    "JoinRequestView",
    "JoinRequestWorkflow",
]

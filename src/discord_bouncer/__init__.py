"""
Discord Bouncer - moderated access to a private voice channel.

Members who want to join a guild's private voice channel enter a waiting room
instead. While someone is in the private channel, each arrival in the waiting
room is either admitted silently, ignored, or turned into a join request that
moderators approve with a button.

Key Features:
- Session-scoped access control bound to the private channel's occupancy
- Per-session cooldowns, remembered users and ignored users
- Interactive join requests with a 15 minute decision window
- Optional audio alert in the private channel
- Slash and prefix setup commands

Architecture:
- Core: Session registry, policy store and join request workflow
- Storage: Persistent guild configuration
- Audio: Alert playback
- Bots: Discord bot, event handlers and commands
- Config: Configuration management
- Infrastructure: Logging and exceptions
- Utils: Embeds and permission checks
"""

__version__ = "1.0.0"
__author__ = "Discord Bouncer Team"

# Core components
from .core import (
    AccessPolicyStore,
    GuildChannels,
    JoinRequest,
    JoinRequestStatus,
    JoinRequestWorkflow,
    Session,
    SessionRegistry,
)

# Storage
from .storage import GuildSettings, GuildSettingsStore

# Configuration
from .config import BouncerConfig, BouncerConfigManager

# Infrastructure
from .infrastructure.logging import setup_logging, get_logger
from .infrastructure.exceptions import (
    BouncerError,
    ConfigurationError,
    MoveError,
    StorageError,
    TokenError,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Core components
    "AccessPolicyStore",
    "GuildChannels",
    "JoinRequest",
    "JoinRequestStatus",
    "JoinRequestWorkflow",
    "Session",
    "SessionRegistry",
    # Storage
    "GuildSettings",
    "GuildSettingsStore",
    # Configuration
    "BouncerConfig",
    "BouncerConfigManager",
    # Infrastructure
    "setup_logging",
    "get_logger",
    "BouncerError",
    "ConfigurationError",
    "MoveError",
    "StorageError",
    "TokenError",
]

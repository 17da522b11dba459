"""
Persistent storage for the Discord Bouncer bot.

Only guild configuration is persisted; sessions live in memory.
"""

from .guild_settings import GuildSettings, GuildSettingsStore

__all__ = ["GuildSettings", "GuildSettingsStore"]

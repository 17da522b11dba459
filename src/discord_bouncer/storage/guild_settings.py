"""
Guild Settings Storage Manager

This module handles persistent storage for per-guild bouncer configuration
(private room, waiting room, notice channel, enabled flag) across bot restarts.
Uses a JSON file with file locking to handle concurrent writes safely.
"""

import json
import threading
import time
from pathlib import Path
from typing import Dict, Optional, Any
import fcntl

from discord_bouncer.core.types import GuildChannels
from discord_bouncer.infrastructure.exceptions import StorageError
from discord_bouncer.infrastructure.logging import setup_logging

logger = setup_logging(component_name="discord_bouncer.guild_settings")


class GuildSettings:
    """Data class for a guild's bouncer configuration."""

    def __init__(
        self,
        guild_id: int,
        private_room_id: Optional[int] = None,
        waiting_room_id: Optional[int] = None,
        notice_channel_id: Optional[int] = None,
        enabled: bool = False,
        last_updated: Optional[float] = None,
    ):
        self.guild_id = guild_id
        self.private_room_id = private_room_id
        self.waiting_room_id = waiting_room_id
        self.notice_channel_id = notice_channel_id
        self.enabled = enabled
        self.last_updated = last_updated or time.time()

    @property
    def channels(self) -> GuildChannels:
        return GuildChannels(
            private_room_id=self.private_room_id,
            waiting_room_id=self.waiting_room_id,
            notice_channel_id=self.notice_channel_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "guild_id": self.guild_id,
            "private_room_id": self.private_room_id,
            "waiting_room_id": self.waiting_room_id,
            "notice_channel_id": self.notice_channel_id,
            "enabled": self.enabled,
            "last_updated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GuildSettings":
        """Create from dictionary."""
        return cls(
            guild_id=data["guild_id"],
            private_room_id=data.get("private_room_id"),
            waiting_room_id=data.get("waiting_room_id"),
            notice_channel_id=data.get("notice_channel_id"),
            enabled=data.get("enabled", False),
            last_updated=data.get("last_updated"),
        )


class GuildSettingsStore:
    """Manages persistent storage for guild bouncer settings."""

    def __init__(self, data_dir: str = "data"):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.settings_file = self.data_dir / "guild_settings.json"
        self._lock = threading.RLock()
        self._settings_cache: Dict[int, GuildSettings] = {}
        self._load_settings()

    def _load_settings(self) -> None:
        """Load settings from file."""
        if not self.settings_file.exists():
            logger.info("Guild settings file not found, using defaults")
            return

        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                with self._lock:
                    fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                    data = json.load(f)
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)

            for guild_id_str, settings_data in data.items():
                self._settings_cache[int(guild_id_str)] = GuildSettings.from_dict(
                    settings_data
                )

            logger.info(f"Loaded bouncer settings for {len(self._settings_cache)} guilds")
        except Exception as e:
            logger.error(f"Failed to load guild settings: {e}", exc_info=True)

    def _save_settings(self, settings_by_guild: Dict[int, GuildSettings]) -> None:
        """Write the given settings to a temp file and swap it into place."""
        temp_file = self.settings_file.with_suffix(".tmp")
        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                with self._lock:
                    fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                    json.dump(
                        {
                            str(guild_id): settings.to_dict()
                            for guild_id, settings in settings_by_guild.items()
                        },
                        f,
                        indent=2,
                        ensure_ascii=False,
                    )
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)

            temp_file.replace(self.settings_file)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save guild settings: {e}", exc_info=True)
            if temp_file.exists():
                temp_file.unlink()
            raise StorageError(f"Failed to save guild settings: {e}") from e

    def get_settings(self, guild_id: int) -> GuildSettings:
        """Get settings for a guild (defaults if never configured)."""
        with self._lock:
            settings = self._settings_cache.get(guild_id)
            if settings is None:
                return GuildSettings(guild_id=guild_id)
            return settings

    def _update(self, guild_id: int, **fields) -> GuildSettings:
        """Apply field changes to a copy and only cache it once it is on disk."""
        with self._lock:
            current = self._settings_cache.get(guild_id) or GuildSettings(guild_id=guild_id)
            settings = GuildSettings.from_dict(current.to_dict())
            for name, value in fields.items():
                setattr(settings, name, value)
            settings.last_updated = time.time()

            self._save_settings({**self._settings_cache, guild_id: settings})
            self._settings_cache[guild_id] = settings
            logger.info(f"Updated bouncer settings for guild {guild_id}: {fields}")
            return settings

    def set_private_room(self, guild_id: int, channel_id: int) -> GuildSettings:
        return self._update(guild_id, private_room_id=channel_id)

    def set_waiting_room(self, guild_id: int, channel_id: int) -> GuildSettings:
        return self._update(guild_id, waiting_room_id=channel_id)

    def set_notice_channel(self, guild_id: int, channel_id: int) -> GuildSettings:
        return self._update(guild_id, notice_channel_id=channel_id)

    def set_enabled(self, guild_id: int, enabled: bool) -> GuildSettings:
        """
        Toggle the bouncer for a guild.

        Raises:
            ValueError: When enabling a guild whose rooms are not all configured
        """
        if enabled and not self.is_fully_configured(guild_id):
            raise ValueError("All channels must be set up before enabling the bouncer")
        return self._update(guild_id, enabled=enabled)

    def reset(self, guild_id: int) -> bool:
        """Remove all settings for a guild."""
        with self._lock:
            if guild_id not in self._settings_cache:
                return False
            remaining = {
                gid: settings
                for gid, settings in self._settings_cache.items()
                if gid != guild_id
            }
            self._save_settings(remaining)
            del self._settings_cache[guild_id]
            logger.info(f"Reset bouncer settings for guild {guild_id}")
            return True

    def is_fully_configured(self, guild_id: int) -> bool:
        return self.get_settings(guild_id).channels.is_complete()

    def get_channels(self, guild_id: int) -> Optional[GuildChannels]:
        """Channel snapshot for a guild, or None unless all three are set."""
        channels = self.get_settings(guild_id).channels
        return channels if channels.is_complete() else None

    def get_private_room_id(self, guild_id: int) -> Optional[int]:
        return self.get_settings(guild_id).private_room_id

    def get_waiting_room_id(self, guild_id: int) -> Optional[int]:
        return self.get_settings(guild_id).waiting_room_id

    def get_notice_channel_id(self, guild_id: int) -> Optional[int]:
        return self.get_settings(guild_id).notice_channel_id

    def get_feature_enabled(self, guild_id: int) -> bool:
        return self.get_settings(guild_id).enabled

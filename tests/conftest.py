"""
Pytest configuration and shared fixtures for the Discord Bouncer test suite.

This module provides common fixtures and configuration for all tests.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

import discord

from discord_bouncer.config.settings import BouncerConfig
from discord_bouncer.core.access_policy import AccessPolicyStore
from discord_bouncer.core.join_requests import JoinRequestWorkflow
from discord_bouncer.core.session_registry import SessionRegistry
from discord_bouncer.core.types import GuildChannels
from discord_bouncer.storage.guild_settings import GuildSettingsStore

GUILD_ID = 123456789
BOT_ID = 999
PRIVATE_ROOM_ID = 1001
WAITING_ROOM_ID = 1002
NOTICE_CHANNEL_ID = 1003


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def mock_config(tmp_path):
    """Create a configuration for testing."""
    return BouncerConfig(
        bot_token="mock_token",
        command_prefix="!",
        log_level="DEBUG",
        data_dir=str(tmp_path / "data"),
    )


@pytest.fixture
def channels():
    return GuildChannels(
        private_room_id=PRIVATE_ROOM_ID,
        waiting_room_id=WAITING_ROOM_ID,
        notice_channel_id=NOTICE_CHANNEL_ID,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry():
    return SessionRegistry()


@pytest.fixture
def policy(registry, clock):
    return AccessPolicyStore(registry, clock=clock)


@pytest.fixture
def alert_player():
    player = MagicMock()
    player.play_alert = AsyncMock(return_value=True)
    return player


@pytest.fixture
def workflow(registry, policy, alert_player):
    return JoinRequestWorkflow(registry, policy, alert_player=alert_player)


@pytest.fixture
def settings_store(tmp_path):
    return GuildSettingsStore(data_dir=str(tmp_path / "data"))


@pytest.fixture
def configured_store(settings_store):
    """Settings store with all rooms set and the bouncer enabled."""
    settings_store.set_private_room(GUILD_ID, PRIVATE_ROOM_ID)
    settings_store.set_waiting_room(GUILD_ID, WAITING_ROOM_ID)
    settings_store.set_notice_channel(GUILD_ID, NOTICE_CHANNEL_ID)
    settings_store.set_enabled(GUILD_ID, True)
    return settings_store


@pytest.fixture
def mock_guild():
    """Create a mock Discord guild that only knows its registered channels."""
    guild = MagicMock(spec=discord.Guild)
    guild.id = GUILD_ID
    guild.name = "Test Guild"
    guild.me = MagicMock(spec=discord.Member)
    guild.me.id = BOT_ID
    guild.voice_client = None
    guild.channels_by_id = {}
    guild.get_channel = MagicMock(side_effect=lambda cid: guild.channels_by_id.get(cid))
    guild.fetch_channel = AsyncMock(
        side_effect=discord.NotFound(MagicMock(status=404, reason="Not Found"), "Unknown Channel")
    )
    return guild


@pytest.fixture
def private_room(mock_guild):
    channel = MagicMock(spec=discord.VoiceChannel)
    channel.id = PRIVATE_ROOM_ID
    channel.name = "VIP"
    channel.guild = mock_guild
    channel.members = []
    mock_guild.channels_by_id[PRIVATE_ROOM_ID] = channel
    return channel


@pytest.fixture
def waiting_room(mock_guild):
    channel = MagicMock(spec=discord.VoiceChannel)
    channel.id = WAITING_ROOM_ID
    channel.name = "Waiting Room"
    channel.guild = mock_guild
    channel.members = []
    mock_guild.channels_by_id[WAITING_ROOM_ID] = channel
    return channel


@pytest.fixture
def notice_channel(mock_guild):
    channel = MagicMock(spec=discord.TextChannel)
    channel.id = NOTICE_CHANNEL_ID
    channel.name = "bouncer"
    channel.guild = mock_guild

    async def send(*args, **kwargs):
        message = MagicMock(spec=discord.Message)
        message.edit = AsyncMock()
        message.kwargs = kwargs
        return message

    channel.send = AsyncMock(side_effect=send)
    mock_guild.channels_by_id[NOTICE_CHANNEL_ID] = channel
    return channel


@pytest.fixture
def make_member(mock_guild):
    """Factory for mock guild members."""

    def factory(member_id: int, name: str = "member", bot: bool = False):
        member = MagicMock(spec=discord.Member)
        member.id = member_id
        member.name = name
        member.display_name = name
        member.bot = bot
        member.guild = mock_guild
        member.display_avatar.url = f"https://cdn.example.com/avatars/{member_id}.png"
        member.move_to = AsyncMock()
        return member

    return factory


@pytest.fixture
def make_interaction():
    """Factory for mock component interactions."""

    def factory(user_id: int = 555):
        interaction = MagicMock()
        interaction.user.id = user_id
        interaction.response.send_message = AsyncMock()
        interaction.response.edit_message = AsyncMock()
        interaction.followup.send = AsyncMock()
        return interaction

    return factory


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )

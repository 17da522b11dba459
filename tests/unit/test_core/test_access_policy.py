"""
Unit tests for the AccessPolicyStore core component.
"""

import pytest

from discord_bouncer.core.access_policy import AccessPolicyStore
from discord_bouncer.core.types import COOLDOWN_WINDOW
from tests.conftest import GUILD_ID

USER_ID = 4242


@pytest.fixture
def active(registry, channels):
    registry.start_session(GUILD_ID, channels)
    return registry.get_session(GUILD_ID)


class TestAccessPolicyStore:
    """Test cases for AccessPolicyStore class."""

    @pytest.mark.unit
    def test_defaults(self, policy, active):
        assert policy.is_ignored(GUILD_ID, USER_ID) is False
        assert policy.is_remembered(GUILD_ID, USER_ID) is False
        assert policy.is_in_cooldown(GUILD_ID, USER_ID) is False

    @pytest.mark.unit
    def test_remember_and_ignore(self, policy, active):
        policy.remember(GUILD_ID, USER_ID)
        policy.ignore(GUILD_ID, USER_ID + 1)

        assert policy.is_remembered(GUILD_ID, USER_ID) is True
        assert policy.is_ignored(GUILD_ID, USER_ID + 1) is True
        assert policy.is_ignored(GUILD_ID, USER_ID) is False

    @pytest.mark.unit
    def test_cooldown_expires_after_window(self, policy, clock, active):
        """A cooldown lasts the full window and lapses right after it."""
        policy.set_cooldown(GUILD_ID, USER_ID)

        clock.advance(COOLDOWN_WINDOW)
        assert policy.is_in_cooldown(GUILD_ID, USER_ID) is True

        clock.advance(1)
        assert policy.is_in_cooldown(GUILD_ID, USER_ID) is False

    @pytest.mark.unit
    def test_clear_cooldown(self, policy, active):
        policy.set_cooldown(GUILD_ID, USER_ID)
        policy.clear_cooldown(GUILD_ID, USER_ID)
        assert policy.is_in_cooldown(GUILD_ID, USER_ID) is False

    @pytest.mark.unit
    def test_try_set_cooldown(self, policy, clock, active):
        """Only the first attempt inside a window claims the cooldown."""
        assert policy.try_set_cooldown(GUILD_ID, USER_ID) is True
        assert policy.try_set_cooldown(GUILD_ID, USER_ID) is False

        clock.advance(COOLDOWN_WINDOW + 1)
        assert policy.try_set_cooldown(GUILD_ID, USER_ID) is True
        assert active.cooldowns[USER_ID] == clock.now

    @pytest.mark.unit
    def test_custom_window(self, registry, clock, active):
        policy = AccessPolicyStore(registry, clock=clock, cooldown_window=5)
        policy.set_cooldown(GUILD_ID, USER_ID)
        clock.advance(6)
        assert policy.is_in_cooldown(GUILD_ID, USER_ID) is False

    @pytest.mark.unit
    def test_no_session_is_noop(self, policy, registry):
        """Without a session nothing is recorded and every query is negative."""
        policy.remember(GUILD_ID, USER_ID)
        policy.ignore(GUILD_ID, USER_ID)
        policy.set_cooldown(GUILD_ID, USER_ID)
        policy.clear_cooldown(GUILD_ID, USER_ID)

        assert policy.try_set_cooldown(GUILD_ID, USER_ID) is False
        assert policy.is_remembered(GUILD_ID, USER_ID) is False
        assert policy.is_ignored(GUILD_ID, USER_ID) is False
        assert policy.is_in_cooldown(GUILD_ID, USER_ID) is False
        assert registry.has_session(GUILD_ID) is False

    @pytest.mark.unit
    def test_state_dropped_with_session(self, policy, registry, channels, active):
        policy.remember(GUILD_ID, USER_ID)
        policy.ignore(GUILD_ID, USER_ID + 1)
        policy.set_cooldown(GUILD_ID, USER_ID + 2)

        registry.end_session(GUILD_ID)
        registry.start_session(GUILD_ID, channels)

        assert policy.is_remembered(GUILD_ID, USER_ID) is False
        assert policy.is_ignored(GUILD_ID, USER_ID + 1) is False
        assert policy.is_in_cooldown(GUILD_ID, USER_ID + 2) is False

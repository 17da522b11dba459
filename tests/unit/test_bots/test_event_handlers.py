"""
Unit tests for the general bot event handlers.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from discord.ext import commands

from discord_bouncer.bots.handlers.event_handlers import EventHandlers


@pytest.fixture
def event_handlers():
    bouncer = MagicMock()
    bouncer.bot.tree.sync = AsyncMock(return_value=[MagicMock()])
    return EventHandlers(bot=bouncer)


@pytest.fixture
def ctx():
    context = MagicMock()
    context.send = AsyncMock()
    return context


class TestEventHandlers:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_on_ready_syncs_commands(self, event_handlers):
        await event_handlers.on_ready()
        event_handlers.bot.tree.sync.assert_awaited_once()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_not_found_is_silent(self, event_handlers, ctx):
        await event_handlers.on_command_error(ctx, commands.CommandNotFound("nope"))
        ctx.send.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_check_failure_reports_permission(self, event_handlers, ctx):
        await event_handlers.on_command_error(ctx, commands.CheckFailure())

        embed = ctx.send.call_args.kwargs["embed"]
        assert "Moderate Members" in embed.description
        assert ctx.send.call_args.kwargs["ephemeral"] is True

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_private_message_rejected(self, event_handlers, ctx):
        await event_handlers.on_command_error(ctx, commands.NoPrivateMessage())

        assert "only be used in a server" in ctx.send.call_args.kwargs["embed"].description

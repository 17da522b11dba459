"""
Setup and configuration command handlers for the bouncer.

This module contains the commands that pick the private room, the waiting
room and the notice channel, and that enable, disable or reset the bouncer.
"""

from typing import Iterable

import discord
from discord.ext import commands

from discord_bouncer.core.types import NOTICE_CHANNEL_CAPABILITIES, VOICE_ROOM_CAPABILITIES
from discord_bouncer.infrastructure.exceptions import StorageError
from discord_bouncer.utils.embed_builder import EmbedBuilder
from discord_bouncer.utils.permission_utils import PermissionUtils
from .base import BaseCommandHandler


class SetupCommands(BaseCommandHandler):
    """Handles all bouncer setup commands."""

    async def status_command(self, ctx: commands.Context) -> None:
        """Show the configured channels and whether the bouncer is enabled."""
        try:
            settings = self.settings_store.get_settings(ctx.guild.id)
            embed = EmbedBuilder.bouncer_status(
                settings.private_room_id,
                settings.waiting_room_id,
                settings.notice_channel_id,
                settings.enabled,
                prefix=self.prefix,
            )
            await ctx.send(embed=embed, ephemeral=True)
        except Exception as e:
            await self._handle_command_error(ctx, e, "status")

    async def set_private_room_command(
        self, ctx: commands.Context, channel: discord.VoiceChannel
    ) -> None:
        """Set the voice channel guarded by the bouncer."""
        try:
            if not await self._check_capabilities(ctx, channel, VOICE_ROOM_CAPABILITIES):
                return
            self.settings_store.set_private_room(ctx.guild.id, channel.id)
            await self._reply(ctx, f"The private channel has been updated to <#{channel.id}>.")
        except StorageError:
            await self._reply(ctx, "Error updating the private voice channel.")
        except Exception as e:
            await self._handle_command_error(ctx, e, "set_private")

    async def set_waiting_room_command(
        self, ctx: commands.Context, channel: discord.VoiceChannel
    ) -> None:
        """Set the voice channel members join to ask for access."""
        try:
            if not await self._check_capabilities(ctx, channel, VOICE_ROOM_CAPABILITIES):
                return
            self.settings_store.set_waiting_room(ctx.guild.id, channel.id)
            await self._reply(
                ctx, f"The waiting room channel has been updated to <#{channel.id}>."
            )
        except StorageError:
            await self._reply(ctx, "Error updating the waiting room voice channel.")
        except Exception as e:
            await self._handle_command_error(ctx, e, "set_waiting")

    async def set_notice_channel_command(
        self, ctx: commands.Context, channel: discord.TextChannel
    ) -> None:
        """Set the text channel join requests are posted to."""
        try:
            if not await self._check_capabilities(ctx, channel, NOTICE_CHANNEL_CAPABILITIES):
                return
            self.settings_store.set_notice_channel(ctx.guild.id, channel.id)
            await self._reply(ctx, f"The text channel has been updated to <#{channel.id}>.")
        except StorageError:
            await self._reply(ctx, "Error updating the text channel.")
        except Exception as e:
            await self._handle_command_error(ctx, e, "set_notice")

    async def enable_command(self, ctx: commands.Context) -> None:
        """Enable the bouncer once all channels are configured."""
        try:
            if not self.settings_store.is_fully_configured(ctx.guild.id):
                await self._reply(
                    ctx, "All channels must be set up before enabling the bouncer."
                )
                return
            self.settings_store.set_enabled(ctx.guild.id, True)
            await self._reply(ctx, "The bouncer has been enabled for this server.")
        except StorageError:
            await self._reply(ctx, "Error updating the bouncer status.")
        except Exception as e:
            await self._handle_command_error(ctx, e, "enable")

    async def disable_command(self, ctx: commands.Context) -> None:
        """Disable the bouncer; running sessions finish normally."""
        try:
            self.settings_store.set_enabled(ctx.guild.id, False)
            await self._reply(ctx, "The bouncer has been disabled for this server.")
        except StorageError:
            await self._reply(ctx, "Error updating the bouncer status.")
        except Exception as e:
            await self._handle_command_error(ctx, e, "disable")

    async def reset_command(self, ctx: commands.Context) -> None:
        """Forget every setting for this server."""
        try:
            self.settings_store.reset(ctx.guild.id)
            await self._reply(ctx, "The bouncer has been reset for this server.")
        except StorageError:
            await self._reply(ctx, "Error resetting the bouncer status.")
        except Exception as e:
            await self._handle_command_error(ctx, e, "reset")

    async def _check_capabilities(
        self,
        ctx: commands.Context,
        channel: discord.abc.GuildChannel,
        capabilities: Iterable[str],
    ) -> bool:
        """Tell the invoker, and only them, when the bot lacks permissions in a channel."""
        result = await PermissionUtils.check_channel_capabilities(
            ctx.guild, channel.id, capabilities
        )
        if result.failed:
            await self._reply(ctx, "Error checking channel permissions.")
            return False
        if result.missing:
            await self._reply(
                ctx,
                "I do not have permission(s) to perform this action.\n"
                f"Missing permissions: `{PermissionUtils.format_capabilities(result.missing)}`",
            )
            return False
        return True

"""
Core bot management class for the Discord Bouncer.

This module provides a centralized way to manage the Discord bot instance,
command registration, and event handling.
"""

import asyncio
import logging
import sys
from typing import Optional

import discord
from discord.ext import commands

from discord_bouncer.audio.alert import AlertPlayer
from discord_bouncer.bots.commands import BaseCommandHandler, SetupCommands
from discord_bouncer.bots.handlers import EventHandlers, VoiceEventHandlers
from discord_bouncer.config.settings import BouncerConfig, config_manager
from discord_bouncer.core.access_policy import AccessPolicyStore
from discord_bouncer.core.join_requests import JoinRequestWorkflow
from discord_bouncer.core.session_registry import SessionRegistry
from discord_bouncer.infrastructure import setup_logging
from discord_bouncer.storage.guild_settings import GuildSettingsStore
from discord_bouncer.utils.permission_utils import PermissionUtils


class BouncerBot:
    """Main bot class that manages the Discord bot and all its components."""

    def __init__(self, config: Optional[BouncerConfig] = None):
        """Initialize the bot with all necessary components."""
        self.logger = setup_logging(
            component_name="discord_bouncer.bot",
            log_file="logs/bouncer.log",
        )

        if config is None:
            try:
                config = config_manager.get_config()
            except Exception as e:
                self.logger.error(f"Failed to load configuration: {e}", exc_info=True)
                sys.exit(1)
        self.config = config
        logging.getLogger("discord_bouncer").setLevel(self.config.log_level.upper())

        intents = discord.Intents.default()
        intents.voice_states = True
        intents.guilds = True
        intents.members = True
        intents.message_content = True

        self.bot = commands.Bot(
            command_prefix=self.config.command_prefix,
            intents=intents,
            help_command=None,
        )

        # Access-control engine
        self.settings_store = GuildSettingsStore(data_dir=self.config.data_dir)
        self.registry = SessionRegistry()
        self.policy = AccessPolicyStore(self.registry)
        self.alert_player = AlertPlayer(
            sound_path=self.config.alert_sound_path,
            timeout=self.config.alert_timeout,
        )
        self.workflow = JoinRequestWorkflow(
            self.registry, self.policy, alert_player=self.alert_player
        )

        self.event_handlers: Optional[EventHandlers] = None
        self.voice_handlers: Optional[VoiceEventHandlers] = None
        self.command_handlers: dict[str, BaseCommandHandler] = {}

        self._setup_event_handlers()
        self._setup_command_handlers()

    def _setup_event_handlers(self) -> None:
        """Setup event handlers for the bot."""
        self.event_handlers = EventHandlers(bot=self, logger=self.logger)
        self.voice_handlers = VoiceEventHandlers(
            settings_store=self.settings_store,
            registry=self.registry,
            workflow=self.workflow,
            logger=self.logger,
        )

        self.bot.event(self.event_handlers.on_ready)
        self.bot.event(self.event_handlers.on_command_error)
        self.bot.event(self.voice_handlers.on_voice_state_update)

    def _setup_command_handlers(self) -> None:
        """Setup command handlers for the bot."""
        self.command_handlers = {
            "setup": SetupCommands(
                settings_store=self.settings_store,
                logger=self.logger,
                config=self.config,
            ),
        }

        self._register_commands()

    def _register_commands(self) -> None:
        """Register all bot commands."""

        @self.bot.hybrid_group(
            name="bouncer",
            description="Configure the bouncer",
            fallback="status",
            invoke_without_command=True,
        )
        @commands.guild_only()
        @PermissionUtils.is_moderator()
        async def bouncer_group(ctx):
            setup_handler: SetupCommands = self.command_handlers["setup"]
            await setup_handler.status_command(ctx)

        @bouncer_group.command(
            name="set_private", description="Set the voice channel that will be private"
        )
        @commands.guild_only()
        @PermissionUtils.is_moderator()
        async def set_private_wrapper(ctx, channel: discord.VoiceChannel):
            setup_handler: SetupCommands = self.command_handlers["setup"]
            await setup_handler.set_private_room_command(ctx, channel)

        @bouncer_group.command(
            name="set_waiting", description="Set the voice channel that will be the waiting room"
        )
        @commands.guild_only()
        @PermissionUtils.is_moderator()
        async def set_waiting_wrapper(ctx, channel: discord.VoiceChannel):
            setup_handler: SetupCommands = self.command_handlers["setup"]
            await setup_handler.set_waiting_room_command(ctx, channel)

        @bouncer_group.command(
            name="set_notice", description="Set the text channel where join requests are sent"
        )
        @commands.guild_only()
        @PermissionUtils.is_moderator()
        async def set_notice_wrapper(ctx, channel: discord.TextChannel):
            setup_handler: SetupCommands = self.command_handlers["setup"]
            await setup_handler.set_notice_channel_command(ctx, channel)

        @bouncer_group.command(name="enable", description="Enable the bouncer for this server")
        @commands.guild_only()
        @PermissionUtils.is_moderator()
        async def enable_wrapper(ctx):
            setup_handler: SetupCommands = self.command_handlers["setup"]
            await setup_handler.enable_command(ctx)

        @bouncer_group.command(name="disable", description="Disable the bouncer for this server")
        @commands.guild_only()
        @PermissionUtils.is_moderator()
        async def disable_wrapper(ctx):
            setup_handler: SetupCommands = self.command_handlers["setup"]
            await setup_handler.disable_command(ctx)

        @bouncer_group.command(name="reset", description="Reset all bouncer settings")
        @commands.guild_only()
        @PermissionUtils.is_moderator()
        async def reset_wrapper(ctx):
            setup_handler: SetupCommands = self.command_handlers["setup"]
            await setup_handler.reset_command(ctx)

    async def start(self) -> None:
        """Start the bot."""
        try:
            self.logger.info("Starting Bouncer Bot...")
            await self.bot.start(self.config.bot_token)
        except Exception as e:
            self.logger.critical(f"Failed to start Bouncer Bot: {e}")
            raise

    async def close(self) -> None:
        """Close the bot and clean up resources."""
        if self.bot:
            await self.bot.close()


async def main():
    """Main function to initialize and run the bot."""
    bot = BouncerBot()

    try:
        await bot.start()
    except KeyboardInterrupt:
        bot.logger.info("Bot shutdown requested")
    except Exception as e:
        bot.logger.critical(f"Fatal error: {e}")
        raise
    finally:
        await bot.close()


def run():
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nBot shutdown requested")


if __name__ == "__main__":
    run()

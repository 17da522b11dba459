"""
Audio alert for the Discord Bouncer bot.

Plays a short sound in the private room when a join request is posted so the
people inside notice it. Playback is best effort: every failure is logged and
swallowed.
"""

import asyncio
import os
from typing import Optional

import discord

from discord_bouncer.infrastructure.logging import setup_logging

logger = setup_logging(component_name="discord_bouncer.audio_alert")


class AlertPlayer:
    """Connects to a voice channel, plays the alert sound and leaves."""

    def __init__(self, sound_path: Optional[str] = None, timeout: float = 10.0):
        self.sound_path = sound_path
        self.timeout = timeout

    def is_available(self) -> bool:
        return bool(self.sound_path) and os.path.isfile(self.sound_path)

    def _create_source(self) -> discord.AudioSource:
        return discord.FFmpegPCMAudio(self.sound_path)

    async def play_alert(self, channel: discord.VoiceChannel) -> bool:
        """
        Play the alert in a voice channel.

        Returns:
            bool: True if the sound was played to completion
        """
        if not self.is_available():
            logger.debug("No alert sound configured, skipping audio alert")
            return False

        if channel.guild.voice_client is not None:
            logger.debug(f"Already connected to voice in guild {channel.guild.id}, skipping alert")
            return False

        voice_client = None
        try:
            voice_client = await channel.connect(timeout=self.timeout, self_deaf=True)

            loop = asyncio.get_running_loop()
            finished = asyncio.Event()

            def after_playing(error: Optional[Exception]) -> None:
                if error:
                    logger.warning(f"Alert playback error: {error}")
                loop.call_soon_threadsafe(finished.set)

            voice_client.play(self._create_source(), after=after_playing)
            await asyncio.wait_for(finished.wait(), timeout=self.timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning(f"Audio alert in channel {channel.id} timed out")
            return False
        except discord.ClientException as e:
            # Voice is already in use by another alert
            logger.debug(f"Skipping audio alert in channel {channel.id}: {e}")
            return False
        except Exception as e:
            logger.error(f"Failed to play audio alert in channel {channel.id}: {e}", exc_info=True)
            return False
        finally:
            if voice_client is not None:
                try:
                    await voice_client.disconnect()
                except Exception as e:
                    logger.warning(f"Error disconnecting after audio alert: {e}")

"""
Event handlers for the bouncer bot.
"""

from .event_handlers import EventHandlers
from .voice_handlers import VoiceEventHandlers

__all__ = ["EventHandlers", "VoiceEventHandlers"]

"""
Audio components for the Discord Bouncer bot.
"""

from .alert import AlertPlayer

__all__ = ["AlertPlayer"]

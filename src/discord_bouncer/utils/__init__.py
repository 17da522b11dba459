"""
Common utilities for the Discord Bouncer bot.

- embed_builder: consistent embeds for notices and command replies
- permission_utils: capability checks and command checks
"""

from .embed_builder import EmbedBuilder
from .permission_utils import PermissionUtils

__all__ = ["EmbedBuilder", "PermissionUtils"]

"""
Join Request UI Components

Discord View posted with every join request notification. It offers the three
mutually exclusive moderator decisions and hands them to the workflow.
"""

from typing import TYPE_CHECKING, Optional

import discord

from .types import REQUEST_TIMEOUT, Decision, JoinRequest

if TYPE_CHECKING:
    from .join_requests import JoinRequestWorkflow


class JoinRequestView(discord.ui.View):
    """Move / Move + Remember / Ignore buttons for a single join request."""

    def __init__(
        self,
        workflow: "JoinRequestWorkflow",
        request: JoinRequest,
        member: discord.Member,
        timeout: Optional[float] = REQUEST_TIMEOUT,
    ):
        super().__init__(timeout=timeout)
        self.workflow = workflow
        self.request = request
        self.member = member
        self.message: Optional[discord.Message] = None

    def disable_controls(self) -> None:
        for item in self.children:
            item.disabled = True

    async def on_timeout(self):
        """Expire the request and disable all buttons."""
        await self.workflow.expire(self)

    @discord.ui.button(label="Move", style=discord.ButtonStyle.primary)
    async def move_button(
        self, interaction: discord.Interaction, button: discord.ui.Button
    ):
        await self.workflow.resolve(self, interaction, Decision.MOVE)

    @discord.ui.button(label="Move + remember", style=discord.ButtonStyle.success)
    async def remember_button(
        self, interaction: discord.Interaction, button: discord.ui.Button
    ):
        await self.workflow.resolve(self, interaction, Decision.MOVE_REMEMBER)

    @discord.ui.button(label="Ignore for this session", style=discord.ButtonStyle.danger)
    async def ignore_button(
        self, interaction: discord.Interaction, button: discord.ui.Button
    ):
        await self.workflow.resolve(self, interaction, Decision.IGNORE)

"""Notifier that reports playback status back through a slash-command interaction."""

from __future__ import annotations

import logging

import discord

from discord_music_queue.application.interfaces.notifier import Notifier
from discord_music_queue.domain.shared.exceptions import NotifyError

logger = logging.getLogger(__name__)


class InteractionNotifier(Notifier):
    """Edits the deferred reply once, then posts later updates to the same channel.

    Interaction webhooks expire after fifteen minutes, which a queue easily
    outlives, so only the first message goes through the interaction.
    """

    def __init__(self, interaction: discord.Interaction) -> None:
        self._interaction = interaction
        self._replied = False

    async def notify(self, message: str) -> None:
        try:
            if not self._replied:
                await self._interaction.edit_original_response(content=message)
                self._replied = True
                return

            channel = self._interaction.channel
            if isinstance(channel, discord.abc.Messageable):
                await channel.send(message)
            else:
                await self._interaction.followup.send(message)
        except Exception as exc:
            raise NotifyError(str(exc) or type(exc).__name__) from exc

"""Discord voice connector implementing VoiceConnector on top of discord.py voice clients."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import discord

from discord_music_queue.application.interfaces.voice_connector import (
    VoiceConnection,
    VoiceConnector,
)
from discord_music_queue.config.settings import AudioSettings
from discord_music_queue.domain.shared.exceptions import VoiceConnectionError
from discord_music_queue.domain.shared.messages import ErrorMessages, LogTemplates
from discord_music_queue.infrastructure.discord.adapters.audio_player import DiscordAudioPlayer

if TYPE_CHECKING:
    from ....application.interfaces.audio_player import AudioPlayer

logger = logging.getLogger(__name__)


class DiscordVoiceConnection(VoiceConnection):
    """Wraps the ``discord.VoiceClient`` a guild queue owns."""

    def __init__(self, guild_id: int, voice_client: discord.VoiceClient) -> None:
        self._guild_id = guild_id
        self._voice_client = voice_client
        self._destroyed = False

    @property
    def channel_id(self) -> int:
        return self._voice_client.channel.id

    @property
    def voice_client(self) -> discord.VoiceClient:
        return self._voice_client

    def subscribe(self, player: AudioPlayer) -> None:
        if not isinstance(player, DiscordAudioPlayer):
            raise TypeError(f"Cannot subscribe {type(player).__name__} to a Discord voice connection")
        player.attach(self._voice_client)

    async def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        await self._voice_client.disconnect(force=True)


class DiscordVoiceConnector(VoiceConnector):
    def __init__(self, bot: discord.Client, settings: AudioSettings | None = None) -> None:
        self._bot = bot
        self._settings = settings or AudioSettings()

    async def connect(self, guild_id: int, channel_id: int) -> DiscordVoiceConnection:
        guild = self._bot.get_guild(guild_id)
        if guild is None:
            raise VoiceConnectionError(
                guild_id, channel_id, ErrorMessages.GUILD_NOT_FOUND.format(guild_id=guild_id)
            )

        channel = guild.get_channel(channel_id)
        if not isinstance(channel, discord.VoiceChannel | discord.StageChannel):
            raise VoiceConnectionError(
                guild_id, channel_id, ErrorMessages.CHANNEL_NOT_VOICE.format(channel_id=channel_id)
            )

        try:
            async with asyncio.timeout(self._settings.connect_timeout_seconds):
                voice_client = await channel.connect(self_deaf=True)
        except TimeoutError as exc:
            logger.error(LogTemplates.VOICE_CONNECTION_TIMEOUT, channel_id)
            raise VoiceConnectionError(
                guild_id, channel_id, ErrorMessages.VOICE_TIMEOUT.format(channel_id=channel_id)
            ) from exc
        except discord.Forbidden as exc:
            logger.error(LogTemplates.VOICE_NO_PERMISSION, channel_id)
            raise VoiceConnectionError(
                guild_id, channel_id, ErrorMessages.VOICE_FORBIDDEN.format(channel_id=channel_id)
            ) from exc
        except discord.ClientException as exc:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, exc)
            raise VoiceConnectionError(
                guild_id, channel_id, ErrorMessages.VOICE_CLIENT_ERROR.format(error=exc)
            ) from exc

        await self._ensure_self_deaf(guild, channel)
        logger.info(LogTemplates.VOICE_CONNECTED, channel.name, guild.name)
        return DiscordVoiceConnection(guild_id, voice_client)

    async def _ensure_self_deaf(
        self,
        guild: discord.Guild,
        channel: discord.VoiceChannel | discord.StageChannel,
    ) -> None:
        try:
            await guild.change_voice_state(channel=channel, self_deaf=True)
        except Exception as exc:
            logger.debug(LogTemplates.VOICE_SELF_DEAFEN_FAILED, guild.id, exc)

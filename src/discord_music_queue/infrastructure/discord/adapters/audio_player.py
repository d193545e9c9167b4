"""Discord audio player bridging discord.py's playback thread to the event loop."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Future
from typing import Any

import discord

from discord_music_queue.application.interfaces.audio_player import (
    AudioPlayer,
    PlayerFactory,
    PlayerListener,
)
from discord_music_queue.domain.music.value_objects import PlayerEvent
from discord_music_queue.domain.shared.exceptions import PlaybackError
from discord_music_queue.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)


class DiscordAudioPlayer(AudioPlayer):
    """One guild's player, reused for every song that guild queues.

    discord.py calls ``after`` on its audio thread whenever a source ends,
    including when it is replaced or stopped on purpose. Each ``play`` bumps
    a generation counter so only the end of the current source becomes an
    event.
    """

    def __init__(self, guild_id: int, loop: asyncio.AbstractEventLoop) -> None:
        self.guild_id = guild_id
        self._loop = loop
        self._voice_client: discord.VoiceClient | None = None
        self._listener: PlayerListener | None = None
        self._generation = 0

    @property
    def voice_client(self) -> discord.VoiceClient | None:
        return self._voice_client

    def attach(self, voice_client: discord.VoiceClient) -> None:
        self._voice_client = voice_client

    def set_listener(self, listener: PlayerListener) -> None:
        self._listener = listener

    def play(self, resource: Any) -> None:
        voice_client = self._voice_client
        if voice_client is None:
            raise PlaybackError(
                self.guild_id, ErrorMessages.PLAYER_NOT_SUBSCRIBED.format(guild_id=self.guild_id)
            )

        self._generation += 1
        generation = self._generation
        if voice_client.is_playing() or voice_client.is_paused():
            voice_client.stop()

        def after_callback(error: Exception | None = None) -> None:
            self._on_source_end(generation, error)

        voice_client.play(resource, after=after_callback)

    def stop(self) -> None:
        self._generation += 1
        voice_client = self._voice_client
        if voice_client is not None and (voice_client.is_playing() or voice_client.is_paused()):
            voice_client.stop()

    def _on_source_end(self, generation: int, error: Exception | None) -> None:
        """Runs on discord.py's audio thread."""
        if generation != self._generation:
            return

        if self._listener is None:
            logger.warning(LogTemplates.PLAYER_NO_LISTENER, self.guild_id)
            return

        if error is not None:
            event = PlayerEvent.failed(self.guild_id, self, error)
        else:
            event = PlayerEvent.idle(self.guild_id, self)

        future = asyncio.run_coroutine_threadsafe(self._listener(event), self._loop)
        future.add_done_callback(self._log_dispatch_failure)

    def _log_dispatch_failure(self, future: Future[None]) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error(
                LogTemplates.PLAYER_EVENT_DISPATCH_FAILED, self.guild_id, exc_info=exc
            )


class DiscordPlayerFactory(PlayerFactory):
    def __init__(self, bot: discord.Client) -> None:
        self._bot = bot

    def create(self, guild_id: int) -> DiscordAudioPlayer:
        return DiscordAudioPlayer(guild_id, self._bot.loop)

"""Dependency Injection Container

Manages the application's dependency graph with lazy initialization.
Components are created on first access and cached for reuse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.interfaces.audio_player import PlayerFactory
    from ..application.interfaces.audio_source import AudioSource
    from ..application.interfaces.voice_connector import VoiceConnector
    from ..application.services.playback_controller import PlaybackController
    from ..domain.music.repository import QueueStore
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Discord-backed adapters need the bot, so ``set_bot`` must be called
    before they are first accessed.
    """

    settings: Settings
    _bot: Bot | None = None

    # Storage
    _queue_store: QueueStore | None = None

    # Infrastructure adapters
    _audio_source: AudioSource | None = None
    _voice_connector: VoiceConnector | None = None
    _player_factory: PlayerFactory | None = None

    # Application services
    _playback_controller: PlaybackController | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Storage ===

    @property
    def queue_store(self) -> QueueStore:
        if self._queue_store is None:
            from ..infrastructure.persistence.queue_store import InMemoryQueueStore

            self._queue_store = InMemoryQueueStore()
        return self._queue_store

    # === Infrastructure Adapters ===

    @property
    def audio_source(self) -> AudioSource:
        """Get the yt-dlp backed audio source."""
        if self._audio_source is None:
            from ..infrastructure.audio.ytdlp_source import YtDlpAudioSource

            self._audio_source = YtDlpAudioSource(self.settings.audio)
        return self._audio_source

    @property
    def voice_connector(self) -> VoiceConnector:
        """Get the voice connector."""
        if self._voice_connector is None:
            from ..infrastructure.discord.adapters.voice_connector import DiscordVoiceConnector

            self._voice_connector = DiscordVoiceConnector(self.bot, self.settings.audio)
        return self._voice_connector

    @property
    def player_factory(self) -> PlayerFactory:
        if self._player_factory is None:
            from ..infrastructure.discord.adapters.audio_player import DiscordPlayerFactory

            self._player_factory = DiscordPlayerFactory(self.bot)
        return self._player_factory

    # === Application Services ===

    @property
    def playback_controller(self) -> PlaybackController:
        """Get the playback controller."""
        if self._playback_controller is None:
            from ..application.services.playback_controller import PlaybackController

            self._playback_controller = PlaybackController(
                queue_store=self.queue_store,
                audio_source=self.audio_source,
                voice_connector=self.voice_connector,
                player_factory=self.player_factory,
                skip_unplayable=self.settings.audio.skip_unplayable,
            )
        return self._playback_controller

    # === Lifecycle ===

    async def shutdown(self) -> None:
        """Tear down every active queue and release voice connections."""
        if self._playback_controller is not None:
            await self._playback_controller.shutdown()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)

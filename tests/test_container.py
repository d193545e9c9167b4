"""
Unit Tests for Dependency Injection Container

Tests for:
- Container initialization with settings
- Lazy initialization and caching of every component
- Bot instance management (set_bot, bot property, error when not set)
- Wiring of the playback controller
- Shutdown
"""

from unittest.mock import AsyncMock, MagicMock, Mock, patch

import pytest

from discord_music_queue.config.container import Container, create_container
from discord_music_queue.config.settings import AudioSettings, Settings
from discord_music_queue.domain.music.repository import QueueStore


@pytest.fixture
def mock_settings():
    """Mock Settings object."""
    settings = Mock(spec=Settings)
    settings.audio = AudioSettings(skip_unplayable=False)
    return settings


@pytest.fixture
def container(mock_settings):
    """Create container with mock settings."""
    return Container(settings=mock_settings)


@pytest.fixture
def mock_bot():
    """Mock Discord bot instance."""
    bot = MagicMock()
    bot.user = MagicMock()
    bot.user.id = 123456789
    return bot


# =============================================================================
# Container Initialization Tests
# =============================================================================


class TestContainerInitialization:
    """Unit tests for Container initialization."""

    def test_create_container_factory(self, mock_settings):
        """Should create container using factory function."""
        container = create_container(mock_settings)
        assert isinstance(container, Container)
        assert container.settings == mock_settings

    def test_initial_state_all_none(self, container):
        """Should not build anything up front."""
        assert container._bot is None
        assert container._queue_store is None
        assert container._audio_source is None
        assert container._voice_connector is None
        assert container._player_factory is None
        assert container._playback_controller is None


# =============================================================================
# Bot Instance Management Tests
# =============================================================================


class TestBotManagement:
    """Unit tests for bot instance management."""

    def test_get_bot_when_set(self, container, mock_bot):
        """Should return bot instance when set."""
        container.set_bot(mock_bot)
        assert container.bot == mock_bot

    def test_get_bot_when_not_set_raises_error(self, container):
        """Should raise RuntimeError when bot not set."""
        with pytest.raises(RuntimeError, match="Bot not initialized"):
            _ = container.bot

    def test_discord_adapters_need_bot(self, container):
        """Should refuse to build Discord-backed adapters before set_bot."""
        with pytest.raises(RuntimeError):
            _ = container.voice_connector
        with pytest.raises(RuntimeError):
            _ = container.player_factory


# =============================================================================
# Component Tests
# =============================================================================


class TestComponents:
    """Unit tests for lazily built components."""

    def test_queue_store(self, container):
        """Should build one in-memory store."""
        store = container.queue_store

        assert isinstance(store, QueueStore)
        assert container.queue_store is store

    def test_audio_source(self, container, mock_settings):
        """Should build the yt-dlp source from the audio settings."""
        with patch(
            "discord_music_queue.infrastructure.audio.ytdlp_source.YtDlpAudioSource"
        ) as MockSource:
            source1 = container.audio_source
            source2 = container.audio_source

        MockSource.assert_called_once_with(mock_settings.audio)
        assert source1 is source2

    def test_voice_connector(self, container, mock_bot, mock_settings):
        """Should build the voice connector around the bot."""
        container.set_bot(mock_bot)
        with patch(
            "discord_music_queue.infrastructure.discord.adapters.voice_connector.DiscordVoiceConnector"
        ) as MockConnector:
            connector = container.voice_connector
            assert container.voice_connector is connector

        MockConnector.assert_called_once_with(mock_bot, mock_settings.audio)

    def test_player_factory(self, container, mock_bot):
        """Should build the player factory around the bot."""
        container.set_bot(mock_bot)
        with patch(
            "discord_music_queue.infrastructure.discord.adapters.audio_player.DiscordPlayerFactory"
        ) as MockFactory:
            factory = container.player_factory

        MockFactory.assert_called_once_with(mock_bot)
        assert factory is MockFactory.return_value

    def test_playback_controller_wiring(self, container, mock_bot):
        """Should hand every port and the skip policy to the controller."""
        container.set_bot(mock_bot)
        with patch(
            "discord_music_queue.application.services.playback_controller.PlaybackController"
        ) as MockController:
            controller = container.playback_controller
            assert container.playback_controller is controller

        MockController.assert_called_once_with(
            queue_store=container.queue_store,
            audio_source=container.audio_source,
            voice_connector=container.voice_connector,
            player_factory=container.player_factory,
            skip_unplayable=False,
        )


# =============================================================================
# Lifecycle Tests
# =============================================================================


class TestShutdown:
    """Unit tests for container shutdown."""

    async def test_shutdown_without_controller(self, container):
        """Should do nothing when the controller was never built."""
        await container.shutdown()

        assert container._playback_controller is None

    async def test_shutdown_delegates_to_controller(self, container):
        """Should tear down every guild through the controller."""
        controller = MagicMock()
        controller.shutdown = AsyncMock()
        container._playback_controller = controller

        await container.shutdown()

        controller.shutdown.assert_awaited_once()

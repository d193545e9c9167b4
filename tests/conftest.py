from unittest.mock import AsyncMock, MagicMock

import pytest

from discord_music_queue.application.interfaces.audio_player import AudioPlayer, PlayerFactory
from discord_music_queue.application.services.playback_controller import PlaybackController
from discord_music_queue.domain.music.entities import Track
from discord_music_queue.domain.music.value_objects import PlayerEvent
from discord_music_queue.infrastructure.persistence.queue_store import InMemoryQueueStore

GUILD_ID = 111111111111111111
OTHER_GUILD_ID = 222222222222222222
VOICE_CHANNEL_ID = 333333333333333333
OTHER_VOICE_CHANNEL_ID = 444444444444444444

URL_A = "https://www.youtube.com/watch?v=aaaaaaaaaaa"
URL_B = "https://www.youtube.com/watch?v=bbbbbbbbbbb"
URL_C = "https://www.youtube.com/watch?v=ccccccccccc"

TITLES = {URL_A: "Song A", URL_B: "Song B", URL_C: "Song C"}


# ============================================================================
# Test Doubles
# ============================================================================


class FakePlayer(AudioPlayer):
    """Records what it was asked to play and lets tests emit lifecycle events."""

    def __init__(self, guild_id: int) -> None:
        self.guild_id = guild_id
        self.played: list[object] = []
        self.stopped = 0
        self.listener = None

    def play(self, resource):
        self.played.append(resource)

    def stop(self):
        self.stopped += 1

    def set_listener(self, listener):
        self.listener = listener

    async def finish(self) -> None:
        await self.listener(PlayerEvent.idle(self.guild_id, self))

    async def fail(self, error: BaseException | None = None) -> None:
        await self.listener(PlayerEvent.failed(self.guild_id, self, error or RuntimeError("boom")))


class FakePlayerFactory(PlayerFactory):
    def __init__(self) -> None:
        self.created: list[FakePlayer] = []

    def create(self, guild_id):
        player = FakePlayer(guild_id)
        self.created.append(player)
        return player


def make_connection(channel_id: int) -> MagicMock:
    connection = MagicMock()
    connection.channel_id = channel_id
    connection.subscribe = MagicMock()
    connection.destroy = AsyncMock()
    return connection


# ============================================================================
# Domain Fixtures
# ============================================================================


@pytest.fixture
def sample_track():
    """Create a sample track for testing."""
    return Track(title="Test Track", source_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ")


# ============================================================================
# Port Fixtures
# ============================================================================


@pytest.fixture
def queue_store():
    return InMemoryQueueStore()


@pytest.fixture
def audio_source():
    """AudioSource double that resolves the known URLs and opens a string resource."""
    source = MagicMock()
    source.validate = MagicMock(side_effect=lambda query: query.startswith("https://"))
    source.resolve = AsyncMock(
        side_effect=lambda query: Track(title=TITLES.get(query, "Other"), source_url=query)
    )
    source.open_stream = AsyncMock(side_effect=lambda url, options: f"resource:{url}")
    return source


@pytest.fixture
def voice_connector():
    connector = MagicMock()
    connector.connect = AsyncMock(side_effect=lambda guild_id, channel_id: make_connection(channel_id))
    return connector


@pytest.fixture
def player_factory():
    return FakePlayerFactory()


@pytest.fixture
def notifier():
    sink = MagicMock()
    sink.notify = AsyncMock()
    return sink


@pytest.fixture
def controller(queue_store, audio_source, voice_connector, player_factory):
    return PlaybackController(
        queue_store=queue_store,
        audio_source=audio_source,
        voice_connector=voice_connector,
        player_factory=player_factory,
    )

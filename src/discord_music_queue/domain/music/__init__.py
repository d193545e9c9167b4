"""
Music Bounded Context

Domain logic for tracks, per-guild queues and the playback state machine.
"""

from discord_music_queue.domain.music.entities import GuildMusicQueue, Track
from discord_music_queue.domain.music.repository import QueueStore
from discord_music_queue.domain.music.value_objects import (
    PlaybackState,
    PlayerEvent,
    PlayerEventKind,
    StreamOptions,
)

__all__ = [
    # Entities
    "Track",
    "GuildMusicQueue",
    # Value Objects
    "PlaybackState",
    "PlayerEvent",
    "PlayerEventKind",
    "StreamOptions",
    # Repository
    "QueueStore",
]

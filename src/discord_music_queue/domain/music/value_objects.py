"""Immutable value objects for the music bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PlaybackState(Enum):
    """Per-guild playback state with enforced transitions.

    State transitions:
    - IDLE -> CONNECTING (first song requested)
    - CONNECTING -> PLAYING (voice connection established)
    - CONNECTING -> TEARDOWN (voice connection failed)
    - PLAYING -> PLAYING (advance to the next song)
    - PLAYING -> TEARDOWN (queue drained or player error)
    - TEARDOWN -> IDLE (resources released, queue removed)
    """

    IDLE = "idle"
    CONNECTING = "connecting"
    PLAYING = "playing"
    TEARDOWN = "teardown"

    def can_transition_to(self, target: PlaybackState) -> bool:
        """Check if transition to target state is valid."""
        valid_transitions = {
            PlaybackState.IDLE: {PlaybackState.CONNECTING},
            PlaybackState.CONNECTING: {PlaybackState.PLAYING, PlaybackState.TEARDOWN},
            PlaybackState.PLAYING: {PlaybackState.PLAYING, PlaybackState.TEARDOWN},
            PlaybackState.TEARDOWN: {PlaybackState.IDLE},
        }
        return target in valid_transitions.get(self, set())

    @property
    def is_active(self) -> bool:
        return self in {PlaybackState.CONNECTING, PlaybackState.PLAYING}


class PlayerEventKind(Enum):
    """Lifecycle signals emitted by an audio player."""

    IDLE = "idle"
    ERROR = "error"


@dataclass(frozen=True)
class PlayerEvent:
    """A lifecycle signal from a guild's audio player.

    ``player`` identifies the emitting instance so late signals from a player
    that has since been torn down can be recognised and dropped.
    """

    guild_id: int
    kind: PlayerEventKind
    player: object
    error: BaseException | None = None

    @classmethod
    def idle(cls, guild_id: int, player: object) -> PlayerEvent:
        return cls(guild_id=guild_id, kind=PlayerEventKind.IDLE, player=player)

    @classmethod
    def failed(cls, guild_id: int, player: object, error: BaseException) -> PlayerEvent:
        return cls(guild_id=guild_id, kind=PlayerEventKind.ERROR, player=player, error=error)


@dataclass(frozen=True)
class StreamOptions:
    """How an audio source should open a stream."""

    audio_only: bool = True
    quality: str = "highestaudio"

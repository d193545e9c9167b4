"""Core domain entities for the music bounded context."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from discord_music_queue.domain.music.value_objects import PlaybackState
from discord_music_queue.domain.shared.exceptions import InvalidStateTransitionError
from discord_music_queue.domain.shared.types import HttpUrlStr, TrackTitleStr

if TYPE_CHECKING:
    from ...application.interfaces.audio_player import AudioPlayer
    from ...application.interfaces.notifier import Notifier
    from ...application.interfaces.voice_connector import VoiceConnection


class Track(BaseModel):
    """Immutable value object representing a playable track."""

    model_config = ConfigDict(frozen=True, strict=True)

    title: TrackTitleStr
    source_url: HttpUrlStr


@dataclass(eq=False)
class GuildMusicQueue:
    """Mutable per-guild queue and the live handles that serve it.

    ``songs[0]`` is the song currently playing (or about to). The voice
    connection and the player are owned by this queue for its whole lifetime
    and are only ever touched by the playback controller.
    """

    guild_id: int
    songs: list[Track] = field(default_factory=list)
    player: AudioPlayer | None = None
    connection: VoiceConnection | None = None
    state: PlaybackState = PlaybackState.IDLE
    notifier: Notifier | None = None

    @property
    def head(self) -> Track | None:
        return self.songs[0] if self.songs else None

    @property
    def is_empty(self) -> bool:
        return not self.songs

    @property
    def is_connected(self) -> bool:
        return self.connection is not None

    def append(self, track: Track) -> int:
        """Add a track to the end of the queue and return its zero-based position."""
        self.songs.append(track)
        return len(self.songs) - 1

    def remove_head(self) -> Track | None:
        """Drop the song at the head of the queue."""
        if not self.songs:
            return None
        return self.songs.pop(0)

    def clear(self) -> int:
        """Remove every song and return how many were dropped."""
        count = len(self.songs)
        self.songs.clear()
        return count

    def transition_to(self, new_state: PlaybackState) -> PlaybackState:
        """Move to ``new_state`` and return the previous state."""
        if not self.state.can_transition_to(new_state):
            raise InvalidStateTransitionError(self.state.value, new_state.value)

        previous = self.state
        self.state = new_state
        return previous

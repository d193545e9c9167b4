"""Port interface for validating, resolving and streaming audio."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from discord_music_queue.domain.shared.types import HttpUrlStr, NonEmptyStr

if TYPE_CHECKING:
    from ...domain.music.entities import Track
    from ...domain.music.value_objects import StreamOptions


class AudioSource(ABC):
    """Interface for turning user references into tracks and playable streams."""

    @abstractmethod
    def validate(self, query: str) -> bool:
        """Cheap, offline check that ``query`` is a reference this source can resolve."""
        ...

    @abstractmethod
    async def resolve(self, query: NonEmptyStr) -> "Track":
        """Resolve a reference to a track.

        Raises:
            ResolutionError: If the reference is unknown or unreachable.
        """
        ...

    @abstractmethod
    async def open_stream(self, url: HttpUrlStr, options: "StreamOptions") -> Any:
        """Open a playable resource for a track's source URL.

        Raises:
            ResolutionError: If no stream could be opened.
        """
        ...

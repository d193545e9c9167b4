"""Port interfaces for per-guild audio players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from discord_music_queue.domain.shared.types import DiscordSnowflake

if TYPE_CHECKING:
    from ...domain.music.value_objects import PlayerEvent

PlayerListener = Callable[["PlayerEvent"], Awaitable[None]]


class AudioPlayer(ABC):
    """Plays one resource at a time and reports when it stops."""

    @abstractmethod
    def play(self, resource: Any) -> None:
        """Start playing ``resource``, replacing whatever was playing."""
        ...

    @abstractmethod
    def stop(self) -> None:
        """Stop the current resource without emitting an idle event."""
        ...

    @abstractmethod
    def set_listener(self, listener: PlayerListener) -> None:
        """Register the single coroutine that receives idle and error events."""
        ...


class PlayerFactory(ABC):
    """Creates one audio player per guild queue."""

    @abstractmethod
    def create(self, guild_id: DiscordSnowflake) -> AudioPlayer:
        ...

"""Port interfaces for joining voice channels."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from discord_music_queue.domain.shared.types import DiscordSnowflake

if TYPE_CHECKING:
    from .audio_player import AudioPlayer


class VoiceConnection(ABC):
    """A live voice link owned by exactly one guild queue."""

    @property
    @abstractmethod
    def channel_id(self) -> int:
        """ID of the voice channel this connection is actually joined to."""
        ...

    @abstractmethod
    def subscribe(self, player: "AudioPlayer") -> None:
        """Route the player's output into this connection. Idempotent."""
        ...

    @abstractmethod
    async def destroy(self) -> None:
        """Leave the channel and release the link. Safe to call twice."""
        ...


class VoiceConnector(ABC):
    """Interface for establishing voice connections."""

    @abstractmethod
    async def connect(
        self, guild_id: DiscordSnowflake, channel_id: DiscordSnowflake
    ) -> VoiceConnection:
        """Join a voice channel.

        Raises:
            VoiceConnectionError: If the channel could not be joined.
        """
        ...

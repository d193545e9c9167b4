"""
Music Domain Repository Interfaces

Abstract base classes defining the contracts for queue storage.
Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod

from discord_music_queue.domain.music.entities import GuildMusicQueue


class QueueStore(ABC):
    """Abstract store mapping guild IDs to their music queue.

    The store is a plain mapping: it never releases the voice connection or
    player held by a queue. Callers must release those before ``remove``.
    """

    @abstractmethod
    def get(self, guild_id: int) -> GuildMusicQueue | None:
        """Retrieve a queue by guild ID.

        Args:
            guild_id: The Discord guild ID.

        Returns:
            The queue if one is registered, None otherwise.
        """
        ...

    @abstractmethod
    def get_or_create(self, guild_id: int) -> GuildMusicQueue:
        """Get the registered queue or register a new empty one.

        Repeated calls for the same guild return the same instance.

        Args:
            guild_id: The Discord guild ID.

        Returns:
            The existing or newly created queue.
        """
        ...

    @abstractmethod
    def remove(self, guild_id: int) -> bool:
        """Evict a guild's queue.

        Args:
            guild_id: The Discord guild ID.

        Returns:
            True if a queue was removed, False if none was registered.
        """
        ...

    @abstractmethod
    def guild_ids(self) -> list[int]:
        """Return the IDs of every guild with a registered queue."""
        ...

    def __contains__(self, guild_id: object) -> bool:
        return isinstance(guild_id, int) and self.get(guild_id) is not None

    def __len__(self) -> int:
        return len(self.guild_ids())

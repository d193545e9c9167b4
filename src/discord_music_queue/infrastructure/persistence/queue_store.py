"""In-memory implementation of the queue store."""

from __future__ import annotations

import logging

from discord_music_queue.domain.music.entities import GuildMusicQueue
from discord_music_queue.domain.music.repository import QueueStore
from discord_music_queue.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class InMemoryQueueStore(QueueStore):
    """Process-local queue store.

    Every method is synchronous with no await inside, so each call is atomic
    with respect to other coroutines on the event loop.
    """

    def __init__(self) -> None:
        self._queues: dict[int, GuildMusicQueue] = {}

    def get(self, guild_id: int) -> GuildMusicQueue | None:
        return self._queues.get(guild_id)

    def get_or_create(self, guild_id: int) -> GuildMusicQueue:
        queue = self._queues.get(guild_id)
        if queue is None:
            queue = GuildMusicQueue(guild_id=guild_id)
            self._queues[guild_id] = queue
            logger.debug(LogTemplates.QUEUE_CREATED, guild_id)
        return queue

    def remove(self, guild_id: int) -> bool:
        if self._queues.pop(guild_id, None) is None:
            return False
        logger.debug(LogTemplates.QUEUE_REMOVED, guild_id)
        return True

    def guild_ids(self) -> list[int]:
        return list(self._queues)

    def __contains__(self, guild_id: object) -> bool:
        return guild_id in self._queues

    def __len__(self) -> int:
        return len(self._queues)

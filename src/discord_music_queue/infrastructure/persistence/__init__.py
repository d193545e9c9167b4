"""Persistence infrastructure - in-process queue storage."""

from discord_music_queue.infrastructure.persistence.queue_store import InMemoryQueueStore

__all__ = ["InMemoryQueueStore"]

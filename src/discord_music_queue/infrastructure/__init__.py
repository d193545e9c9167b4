"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Persistence (in-memory queue store)
- Discord (bot, cogs, voice and player adapters, notifier)
- Audio (yt-dlp, FFmpeg)
"""

from discord_music_queue.infrastructure.discord.bot import create_bot
from discord_music_queue.infrastructure.persistence.queue_store import InMemoryQueueStore

__all__ = [
    "create_bot",
    "InMemoryQueueStore",
]

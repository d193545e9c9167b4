# ruff: noqa: N999
"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Constrained types, messages and exceptions
- music/: Track, per-guild queue and playback state machine
"""

from discord_music_queue.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]

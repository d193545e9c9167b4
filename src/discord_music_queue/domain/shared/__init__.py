"""
Shared Domain Kernel

Contains constrained types, messages and exceptions shared across the package.
"""

from discord_music_queue.domain.shared.exceptions import (
    DomainError,
    InvalidStateTransitionError,
    NotifyError,
    PlaybackError,
    ResolutionError,
    VoiceConnectionError,
)

__all__ = [
    "DomainError",
    "ResolutionError",
    "VoiceConnectionError",
    "PlaybackError",
    "NotifyError",
    "InvalidStateTransitionError",
]

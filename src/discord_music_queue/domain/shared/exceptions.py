"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ResolutionError(DomainError):
    """Raised when a track reference is invalid or cannot be resolved.

    User-correctable; raised before any queue state is touched.
    """

    def __init__(self, query: str, message: str | None = None) -> None:
        msg = message or f"Could not resolve a track from '{query}'"
        super().__init__(msg, code="RESOLUTION_ERROR")
        self.query = query


class VoiceConnectionError(DomainError):
    """Raised when a voice connection cannot be established or maintained."""

    def __init__(self, guild_id: int, channel_id: int | None, message: str | None = None) -> None:
        msg = message or f"Could not connect to voice channel {channel_id} in guild {guild_id}"
        super().__init__(msg, code="VOICE_CONNECTION_ERROR")
        self.guild_id = guild_id
        self.channel_id = channel_id


class PlaybackError(DomainError):
    """Raised when audio cannot be played in an already-connected session.

    Never returned to the caller that started playback; delivered to the
    guild's notifier instead.
    """

    def __init__(self, guild_id: int, message: str | None = None) -> None:
        msg = message or f"Playback failed in guild {guild_id}"
        super().__init__(msg, code="PLAYBACK_ERROR")
        self.guild_id = guild_id


class NotifyError(DomainError):
    """Raised by a notifier that could not deliver a status message."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Failed to deliver notification", code="NOTIFY_ERROR")


class InvalidStateTransitionError(DomainError):
    """Raised when the playback state machine is asked for an illegal transition."""

    def __init__(self, current_state: str, target_state: str) -> None:
        msg = f"Cannot transition from {current_state} to {target_state}"
        super().__init__(msg, code="INVALID_STATE_TRANSITION")
        self.current_state = current_state
        self.target_state = target_state

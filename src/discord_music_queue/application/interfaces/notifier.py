"""Port interface for user-facing status messages."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Sink for status messages addressed to the user who requested playback."""

    @abstractmethod
    async def notify(self, message: str) -> None:
        """Deliver a message.

        Raises:
            NotifyError: If delivery failed. Callers log and discard it.
        """
        ...

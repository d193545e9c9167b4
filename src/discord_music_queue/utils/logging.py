"""Console logging formatter used by ``logging_config.json``."""

from __future__ import annotations

import logging
import os
import sys

PACKAGE_PREFIX = "discord_music_queue."


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name and shortens package logger names.

    Colour is disabled when ``NO_COLOR`` is set or when the stream is not a
    TTY. Logger names under this package lose their common prefix, so
    ``discord_music_queue.application.services.playback_controller`` prints
    as ``application.services.playback_controller``.
    """

    COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        *,
        shorten_names: bool = True,
        stream=None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)  # type: ignore[arg-type]
        self.shorten_names = shorten_names
        self._stream = stream

    def _use_color(self) -> bool:
        if os.environ.get("NO_COLOR") is not None:
            return False
        stream = self._stream or sys.stdout
        return hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        use_color = self._use_color()
        shorten = self.shorten_names and record.name.startswith(PACKAGE_PREFIX)
        if not use_color and not shorten:
            return super().format(record)

        # Work on a copy so other handlers see the original record.
        record = logging.makeLogRecord(record.__dict__)
        if shorten:
            record.name = record.name[len(PACKAGE_PREFIX):]
        if use_color:
            color = self.COLORS.get(record.levelno, "")
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)

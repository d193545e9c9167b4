"""AudioSource implementation using yt-dlp for lookup and FFmpeg for streaming."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Final, cast

import discord
from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError

from discord_music_queue.application.interfaces.audio_source import AudioSource
from discord_music_queue.config.settings import AudioSettings
from discord_music_queue.domain.music.entities import Track
from discord_music_queue.domain.music.value_objects import StreamOptions
from discord_music_queue.domain.shared.exceptions import ResolutionError
from discord_music_queue.domain.shared.messages import ErrorMessages, LogTemplates
from discord_music_queue.infrastructure.audio.models import (
    AudioFormatInfo,
    YtDlpOpts,
    YtDlpTrackInfo,
)

logger = logging.getLogger(__name__)

LOWEST_AUDIO_FORMAT: Final[str] = "worstaudio/worst"
FULL_MEDIA_FORMAT: Final[str] = "best"

YOUTUBE_URL_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:https?://)?"
    r"(?:"
    r"(?:www\.|m\.|music\.|gaming\.)?youtube\.com/"
    r"(?:watch\?(?:.*&)?v=|embed/|v/|shorts/|live/)"
    r"|youtu\.be/"
    r")"
    r"(?P<id>[A-Za-z0-9_-]{11})"
    r"(?:[?&#/].*)?$"
)


class YtDlpAudioSource(AudioSource):

    def __init__(self, settings: AudioSettings | None = None) -> None:
        self._settings = settings or AudioSettings()
        self._base_opts = YtDlpOpts(format=self._settings.ytdlp_format)

    def _get_opts(self, **overrides: Any) -> YtDlpOpts:
        if overrides:
            return self._base_opts.model_copy(update=overrides)
        return self._base_opts

    def _format_for(self, options: StreamOptions) -> str:
        if not options.audio_only:
            return FULL_MEDIA_FORMAT
        if options.quality == "lowestaudio":
            return LOWEST_AUDIO_FORMAT
        return self._settings.ytdlp_format

    def validate(self, query: str) -> bool:
        return bool(YOUTUBE_URL_PATTERN.match(query.strip()))

    def _extract_info_sync(self, url: str, opts: YtDlpOpts) -> YtDlpTrackInfo:
        try:
            with YoutubeDL(params=cast(Any, opts.model_dump(exclude_none=True))) as ydl:
                data = ydl.extract_info(url, download=False)
        except DownloadError as exc:
            logger.warning(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, url)
            raise ResolutionError(url, ErrorMessages.RESOLVE_FAILED.format(error=exc)) from exc

        if not isinstance(data, dict):
            raise ResolutionError(url, ErrorMessages.NO_INFO_RETURNED.format(query=url))
        return YtDlpTrackInfo.model_validate(dict(data))

    async def resolve(self, query: str) -> Track:
        query = query.strip()
        info = await asyncio.to_thread(self._extract_info_sync, query, self._get_opts())

        source_url = info.webpage_url
        if not source_url:
            raise ResolutionError(query, ErrorMessages.NO_WEBPAGE_URL.format(query=query))

        track = Track(title=info.title, source_url=source_url)
        logger.info(LogTemplates.TRACK_RESOLVED, track.title, track.source_url)
        return track

    async def open_stream(self, url: str, options: StreamOptions) -> discord.PCMVolumeTransformer:
        opts = self._get_opts(format=self._format_for(options))
        info = await asyncio.to_thread(self._extract_info_sync, url, opts)

        stream_url = self._extract_stream_url(info, options)
        if not stream_url:
            logger.warning(LogTemplates.YTDLP_NO_STREAM_URL, url)
            raise ResolutionError(url, ErrorMessages.NO_STREAM_URL_FOR_TRACK.format(url=url))

        source = discord.FFmpegPCMAudio(
            stream_url,
            before_options=self._settings.ffmpeg_options.get("before_options", ""),
            options=self._settings.ffmpeg_options.get("options", ""),
        )
        logger.debug(LogTemplates.STREAM_OPENED, url)
        return discord.PCMVolumeTransformer(source, volume=self._settings.default_volume)

    def _extract_stream_url(self, info: YtDlpTrackInfo, options: StreamOptions) -> str | None:
        if info.url:
            return info.url
        return self._extract_stream_from_formats(info.formats, options)

    @staticmethod
    def _extract_stream_from_formats(
        formats: list[AudioFormatInfo], options: StreamOptions
    ) -> str | None:
        candidates = [f for f in formats if f.has_audio]
        if options.audio_only:
            candidates = [f for f in candidates if f.is_audio_only] or candidates
        if not candidates:
            return None

        # yt-dlp lists formats worst to best; prefer the reported bitrate when present.
        ranked = sorted(enumerate(candidates), key=lambda item: (item[1].abr or 0.0, item[0]))
        chosen = ranked[0][1] if options.quality == "lowestaudio" else ranked[-1][1]
        return chosen.url

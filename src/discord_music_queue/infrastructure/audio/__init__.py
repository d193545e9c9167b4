"""Audio infrastructure - yt-dlp lookup and FFmpeg streaming."""

from discord_music_queue.infrastructure.audio.models import (
    AudioFormatInfo,
    YtDlpOpts,
    YtDlpTrackInfo,
)
from discord_music_queue.infrastructure.audio.ytdlp_source import YtDlpAudioSource

__all__ = [
    "AudioFormatInfo",
    "YtDlpAudioSource",
    "YtDlpOpts",
    "YtDlpTrackInfo",
]

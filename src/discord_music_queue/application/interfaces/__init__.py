"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from discord_music_queue.application.interfaces.audio_player import (
    AudioPlayer,
    PlayerFactory,
    PlayerListener,
)
from discord_music_queue.application.interfaces.audio_source import AudioSource
from discord_music_queue.application.interfaces.notifier import Notifier
from discord_music_queue.application.interfaces.voice_connector import (
    VoiceConnection,
    VoiceConnector,
)

__all__ = [
    "AudioSource",
    "AudioPlayer",
    "PlayerFactory",
    "PlayerListener",
    "VoiceConnection",
    "VoiceConnector",
    "Notifier",
]

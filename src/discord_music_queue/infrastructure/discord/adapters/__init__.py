"""Discord adapters implementing the voice and player ports."""

from discord_music_queue.infrastructure.discord.adapters.audio_player import (
    DiscordAudioPlayer,
    DiscordPlayerFactory,
)
from discord_music_queue.infrastructure.discord.adapters.voice_connector import (
    DiscordVoiceConnection,
    DiscordVoiceConnector,
)

__all__ = [
    "DiscordAudioPlayer",
    "DiscordPlayerFactory",
    "DiscordVoiceConnection",
    "DiscordVoiceConnector",
]

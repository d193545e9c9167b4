"""Tests for the Discord voice connector and connection handle."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from conftest import FakePlayer, GUILD_ID, VOICE_CHANNEL_ID
from discord_music_queue.config.settings import AudioSettings
from discord_music_queue.domain.shared.exceptions import VoiceConnectionError
from discord_music_queue.infrastructure.discord.adapters.audio_player import DiscordAudioPlayer
from discord_music_queue.infrastructure.discord.adapters.voice_connector import (
    DiscordVoiceConnection,
    DiscordVoiceConnector,
)

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def voice_client():
    client = MagicMock(spec=discord.VoiceClient)
    client.channel = MagicMock()
    client.channel.id = VOICE_CHANNEL_ID
    client.disconnect = AsyncMock()
    return client


@pytest.fixture
def channel(voice_client):
    ch = MagicMock(spec=discord.VoiceChannel)
    ch.id = VOICE_CHANNEL_ID
    ch.name = "General"
    ch.connect = AsyncMock(return_value=voice_client)
    return ch


@pytest.fixture
def guild(channel):
    g = MagicMock()
    g.id = GUILD_ID
    g.name = "Test Guild"
    g.get_channel = MagicMock(return_value=channel)
    g.change_voice_state = AsyncMock()
    return g


@pytest.fixture
def bot(guild):
    b = MagicMock()
    b.get_guild = MagicMock(return_value=guild)
    return b


@pytest.fixture
def connector(bot):
    return DiscordVoiceConnector(bot, AudioSettings())


# =============================================================================
# DiscordVoiceConnector
# =============================================================================


class TestConnect:
    """Tests for joining a voice channel."""

    async def test_connect_success(self, connector, bot, guild, channel, voice_client):
        """Should join self-deafened and wrap the voice client."""
        connection = await connector.connect(GUILD_ID, VOICE_CHANNEL_ID)

        bot.get_guild.assert_called_once_with(GUILD_ID)
        guild.get_channel.assert_called_once_with(VOICE_CHANNEL_ID)
        channel.connect.assert_awaited_once_with(self_deaf=True)
        guild.change_voice_state.assert_awaited_once_with(channel=channel, self_deaf=True)
        assert isinstance(connection, DiscordVoiceConnection)
        assert connection.voice_client is voice_client
        assert connection.channel_id == VOICE_CHANNEL_ID

    async def test_unknown_guild(self, connector, bot):
        """Should fail when the bot is not in the guild."""
        bot.get_guild.return_value = None

        with pytest.raises(VoiceConnectionError) as exc_info:
            await connector.connect(GUILD_ID, VOICE_CHANNEL_ID)

        assert exc_info.value.guild_id == GUILD_ID
        assert exc_info.value.channel_id == VOICE_CHANNEL_ID

    async def test_not_a_voice_channel(self, connector, guild):
        """Should refuse text channels and missing channels."""
        guild.get_channel.return_value = MagicMock(spec=discord.TextChannel)

        with pytest.raises(VoiceConnectionError):
            await connector.connect(GUILD_ID, VOICE_CHANNEL_ID)

        guild.get_channel.return_value = None
        with pytest.raises(VoiceConnectionError):
            await connector.connect(GUILD_ID, VOICE_CHANNEL_ID)

    async def test_timeout(self, bot, channel):
        """Should give up after the configured timeout."""

        async def hang(**kwargs):
            await asyncio.sleep(5)

        channel.connect = AsyncMock(side_effect=hang)
        connector = DiscordVoiceConnector(bot, AudioSettings(connect_timeout_seconds=0.01))

        with pytest.raises(VoiceConnectionError) as exc_info:
            await connector.connect(GUILD_ID, VOICE_CHANNEL_ID)

        assert isinstance(exc_info.value.__cause__, TimeoutError)

    async def test_forbidden(self, connector, channel):
        """Should translate missing permissions."""
        channel.connect.side_effect = discord.Forbidden(MagicMock(), "No permission")

        with pytest.raises(VoiceConnectionError) as exc_info:
            await connector.connect(GUILD_ID, VOICE_CHANNEL_ID)

        assert isinstance(exc_info.value.__cause__, discord.Forbidden)

    async def test_client_exception(self, connector, channel):
        """Should translate discord.py client errors such as already connected."""
        channel.connect.side_effect = discord.ClientException("Already connected to a voice channel.")

        with pytest.raises(VoiceConnectionError):
            await connector.connect(GUILD_ID, VOICE_CHANNEL_ID)

    async def test_self_deafen_failure_is_ignored(self, connector, guild):
        """Should still return the connection when re-deafening fails."""
        guild.change_voice_state.side_effect = RuntimeError("gateway hiccup")

        connection = await connector.connect(GUILD_ID, VOICE_CHANNEL_ID)

        assert connection.channel_id == VOICE_CHANNEL_ID


# =============================================================================
# DiscordVoiceConnection
# =============================================================================


class TestVoiceConnection:
    """Tests for the connection handle stored on a guild queue."""

    def test_subscribe_attaches_player(self, voice_client):
        """Should route the player's audio to this voice client."""
        connection = DiscordVoiceConnection(GUILD_ID, voice_client)
        player = DiscordAudioPlayer(GUILD_ID, MagicMock())

        connection.subscribe(player)

        assert player.voice_client is voice_client

    def test_subscribe_rejects_foreign_player(self, voice_client):
        """Should refuse players that cannot drive a discord.py voice client."""
        connection = DiscordVoiceConnection(GUILD_ID, voice_client)

        with pytest.raises(TypeError):
            connection.subscribe(FakePlayer(GUILD_ID))

    async def test_destroy_is_idempotent(self, voice_client):
        """Should disconnect once no matter how often it is destroyed."""
        connection = DiscordVoiceConnection(GUILD_ID, voice_client)

        await connection.destroy()
        await connection.destroy()

        voice_client.disconnect.assert_awaited_once_with(force=True)

"""
Unit Tests for Bot Lifecycle

Tests for src/discord_music_queue/infrastructure/discord/bot.py:
- Intents and container wiring on construction
- setup_hook cog loading, error handler and optional command sync
- Guild-scoped and global command sync
- Global slash-command error handler
- Presence on ready
- Shutdown through the container
"""

from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

import discord
import pytest

from discord_music_queue.domain.shared.messages import DiscordUIMessages
from discord_music_queue.infrastructure.discord.bot import COGS, MusicBot, create_bot


@pytest.fixture
def mock_settings():
    """Create mock settings."""
    settings = MagicMock()
    settings.discord.sync_on_startup = False
    settings.discord.test_guild_ids = ()
    return settings


@pytest.fixture
def mock_container():
    container = MagicMock()
    container.shutdown = AsyncMock()
    container.set_bot = MagicMock()
    return container


@pytest.fixture
def bot(mock_container, mock_settings):
    return MusicBot(container=mock_container, settings=mock_settings)


# =============================================================================
# Bot Initialization Tests
# =============================================================================


class TestBotInitialization:
    """Tests for MusicBot initialization."""

    async def test_minimal_intents(self, bot):
        """Should request only guild and voice state events."""
        assert bot.intents.guilds is True
        assert bot.intents.voice_states is True
        assert bot.intents.message_content is False
        assert bot.intents.members is False

    async def test_registers_with_container(self, bot, mock_container):
        """Should hand itself to the container."""
        mock_container.set_bot.assert_called_once_with(bot)
        assert bot.container is mock_container

    async def test_default_help_disabled(self, bot):
        """Should not register the prefix help command."""
        assert bot.help_command is None


# =============================================================================
# Setup Hook Tests
# =============================================================================


class TestSetupHook:
    """Tests for setup_hook."""

    async def test_loads_cogs_and_sets_error_handler(self, bot):
        """Should load cogs and install the slash-command error handler."""
        with patch.object(bot, "_load_cogs", new_callable=AsyncMock) as mock_load:
            await bot.setup_hook()

        mock_load.assert_awaited_once()
        assert bot.tree.on_error == bot._on_app_command_error

    async def test_sync_only_when_enabled(self, bot, mock_settings):
        """Should sync commands only when sync_on_startup is set."""
        with (
            patch.object(bot, "_load_cogs", new_callable=AsyncMock),
            patch.object(bot, "_sync_commands", new_callable=AsyncMock) as mock_sync,
        ):
            await bot.setup_hook()
            mock_sync.assert_not_awaited()

            mock_settings.discord.sync_on_startup = True
            await bot.setup_hook()
            mock_sync.assert_awaited_once()

    async def test_load_cogs(self, bot):
        """Should load every configured extension."""
        with patch.object(bot, "load_extension", new_callable=AsyncMock) as mock_load:
            await bot._load_cogs()

        assert [c.args[0] for c in mock_load.await_args_list] == list(COGS)

    async def test_load_cogs_failure_propagates(self, bot):
        """Should refuse to start without the music cog."""
        with patch.object(
            bot, "load_extension", new_callable=AsyncMock, side_effect=RuntimeError("bad cog")
        ):
            with pytest.raises(RuntimeError):
                await bot._load_cogs()


# =============================================================================
# Command Sync Tests
# =============================================================================


class TestSyncCommands:
    """Tests for _sync_commands."""

    async def test_global_sync(self, bot):
        """Should sync globally when no test guilds are configured."""
        with patch.object(bot.tree, "sync", new_callable=AsyncMock, return_value=[MagicMock()]) as mock_sync:
            await bot._sync_commands()

        mock_sync.assert_awaited_once_with()

    async def test_test_guild_sync(self, bot, mock_settings):
        """Should copy global commands to each test guild and sync there only."""
        mock_settings.discord.test_guild_ids = (111111111111111111, 222222222222222222)

        with (
            patch.object(bot.tree, "copy_global_to") as mock_copy,
            patch.object(bot.tree, "sync", new_callable=AsyncMock, return_value=[]) as mock_sync,
        ):
            await bot._sync_commands()

        assert mock_copy.call_count == 2
        assert mock_sync.await_count == 2
        for call in mock_sync.await_args_list:
            assert "guild" in call.kwargs

    async def test_sync_http_error_is_logged(self, bot):
        """Should keep running when Discord rejects the sync."""
        with patch.object(
            bot.tree,
            "sync",
            new_callable=AsyncMock,
            side_effect=discord.HTTPException(MagicMock(), "rate limited"),
        ):
            await bot._sync_commands()


# =============================================================================
# App Command Error Handler Tests
# =============================================================================


class TestAppCommandErrorHandler:
    """Tests for the global slash-command error handler."""

    def _interaction(self, done: bool) -> MagicMock:
        interaction = MagicMock()
        interaction.command.name = "play"
        interaction.response.is_done.return_value = done
        interaction.response.send_message = AsyncMock()
        interaction.followup.send = AsyncMock()
        return interaction

    async def test_sends_ephemeral_response(self, bot):
        """Should answer with an ephemeral error message."""
        interaction = self._interaction(done=False)

        await bot._on_app_command_error(interaction, RuntimeError("kaboom"))

        interaction.response.send_message.assert_awaited_once_with(
            DiscordUIMessages.ERROR_OCCURRED.format(error="kaboom"), ephemeral=True
        )

    async def test_uses_followup_when_responded(self, bot):
        """Should use the followup webhook after a response was sent."""
        interaction = self._interaction(done=True)

        await bot._on_app_command_error(interaction, RuntimeError("kaboom"))

        interaction.followup.send.assert_awaited_once()

    async def test_unwraps_original(self, bot):
        """Should report the wrapped exception."""
        interaction = self._interaction(done=False)
        error = MagicMock()
        error.original = ValueError("inner")

        await bot._on_app_command_error(interaction, error)

        message = interaction.response.send_message.call_args.args[0]
        assert "inner" in message

    async def test_send_failure_is_swallowed(self, bot):
        """Should not raise when the error message cannot be sent."""
        interaction = self._interaction(done=False)
        interaction.response.send_message.side_effect = discord.HTTPException(MagicMock(), "gone")

        await bot._on_app_command_error(interaction, RuntimeError("kaboom"))


# =============================================================================
# Ready / Close Tests
# =============================================================================


class TestOnReady:
    async def test_sets_presence(self, bot):
        """Should advertise /play as the bot's activity."""
        mock_user = MagicMock()
        mock_user.id = 987654321
        with (
            patch.object(type(bot), "user", PropertyMock(return_value=mock_user)),
            patch.object(type(bot), "guilds", PropertyMock(return_value=[])),
            patch.object(bot, "change_presence", new_callable=AsyncMock) as mock_change,
        ):
            await bot.on_ready()

        activity = mock_change.call_args.kwargs["activity"]
        assert activity.type is discord.ActivityType.listening
        assert activity.name == "/play"


class TestBotClose:
    """Tests for MusicBot.close."""

    async def test_close_shuts_down_container(self, bot, mock_container):
        """Should release every guild's voice connection through the container."""
        await bot.close()

        mock_container.shutdown.assert_awaited_once()
        assert bot._shutdown_event.is_set()

    async def test_close_handles_container_error(self, bot, mock_container):
        """Should finish closing when container shutdown fails."""
        mock_container.shutdown.side_effect = RuntimeError("shutdown failed")

        await bot.close()

        assert bot._shutdown_event.is_set()


def test_create_bot(mock_container, mock_settings):
    """Should build a MusicBot bound to the container and settings."""
    bot = create_bot(mock_container, mock_settings)

    assert isinstance(bot, MusicBot)
    assert bot.settings is mock_settings

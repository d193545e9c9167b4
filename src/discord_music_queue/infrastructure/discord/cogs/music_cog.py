"""Slash-command music cog delegating to the playback controller."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from discord_music_queue.domain.shared.exceptions import ResolutionError, VoiceConnectionError
from discord_music_queue.domain.shared.messages import DiscordUIMessages, LogTemplates
from discord_music_queue.infrastructure.discord.notifier import InteractionNotifier

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


class MusicCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    async def _send_ephemeral(self, interaction: discord.Interaction, message: str) -> None:
        if interaction.response.is_done():
            await interaction.followup.send(message, ephemeral=True)
        else:
            await interaction.response.send_message(message, ephemeral=True)

    async def _fail_deferred(self, interaction: discord.Interaction, message: str) -> None:
        """Replace the public "thinking" reply with an ephemeral error."""
        try:
            await interaction.delete_original_response()
        except discord.HTTPException as e:
            logger.debug(LogTemplates.COMMAND_REPLY_FAILED, e)
        await interaction.followup.send(message, ephemeral=True)

    @staticmethod
    def _bot_can_join(guild: discord.Guild, channel: discord.VoiceChannel) -> bool:
        permissions = channel.permissions_for(guild.me)
        return permissions.connect and permissions.speak

    @app_commands.command(name="play", description="Play a song from YouTube.")
    @app_commands.describe(
        query="YouTube video URL",
        channel="Voice channel to play the song in",
    )
    async def play(
        self,
        interaction: discord.Interaction,
        query: str,
        channel: discord.VoiceChannel,
    ) -> None:
        guild = interaction.guild
        logger.info(
            LogTemplates.COMMAND_EXECUTING,
            "play",
            interaction.user.id,
            guild.id if guild else None,
            getattr(channel, "id", None),
        )

        if guild is None:
            logger.info(LogTemplates.COMMAND_OUTSIDE_GUILD, "play", interaction.user.id)
            await self._send_ephemeral(interaction, DiscordUIMessages.STATE_SERVER_ONLY)
            return

        if not isinstance(channel, discord.VoiceChannel):
            logger.info(LogTemplates.COMMAND_INVALID_CHANNEL, getattr(channel, "id", None), guild.id)
            await self._send_ephemeral(interaction, DiscordUIMessages.ERROR_INVALID_VOICE_CHANNEL)
            return

        if not self._bot_can_join(guild, channel):
            logger.info(LogTemplates.COMMAND_MISSING_PERMISSIONS, channel.id, guild.id)
            await self._send_ephemeral(
                interaction, DiscordUIMessages.ERROR_BOT_MISSING_VOICE_PERMISSIONS
            )
            return

        if not self.container.audio_source.validate(query):
            logger.info(LogTemplates.TRACK_INVALID_REFERENCE, query)
            await self._send_ephemeral(interaction, DiscordUIMessages.ERROR_INVALID_URL)
            return

        logger.debug(LogTemplates.COMMAND_CHANNEL_SELECTED, channel.name, channel.id, guild.id)

        # Defer early because resolving and joining voice can exceed the 3-second deadline
        try:
            await interaction.response.defer()
        except discord.HTTPException as e:
            logger.warning(LogTemplates.COMMAND_DEFER_FAILED, guild.id, e)
            return

        try:
            await self.container.playback_controller.enqueue(
                guild.id,
                channel.id,
                query,
                notifier=InteractionNotifier(interaction),
            )
        except ResolutionError:
            await self._fail_deferred(interaction, DiscordUIMessages.ERROR_TRACK_NOT_FOUND)
        except VoiceConnectionError:
            await self._fail_deferred(interaction, DiscordUIMessages.ERROR_COULD_NOT_JOIN_VOICE)
        except Exception:
            logger.exception(LogTemplates.COMMAND_FAILED, "play", guild.id)
            await self._fail_deferred(interaction, DiscordUIMessages.ERROR_PLAY_COMMAND_FAILED)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError("Container not found on bot instance")

    await bot.add_cog(MusicCog(bot, container))

"""Playback Controller - drives each guild's queue through the voice playback state machine."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...domain.music.value_objects import (
    PlaybackState,
    PlayerEvent,
    PlayerEventKind,
    StreamOptions,
)
from ...domain.shared.exceptions import (
    PlaybackError,
    ResolutionError,
    VoiceConnectionError,
)
from ...domain.shared.messages import DiscordUIMessages, ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ...domain.music.entities import GuildMusicQueue, Track
    from ...domain.music.repository import QueueStore
    from ..interfaces.audio_player import PlayerFactory
    from ..interfaces.audio_source import AudioSource
    from ..interfaces.notifier import Notifier
    from ..interfaces.voice_connector import VoiceConnector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnqueueResult:
    """Outcome of a successful enqueue."""

    track: Track
    position: int
    started: bool
    channel_id: int


class PlaybackController:
    """Sole owner of every guild queue's voice connection, player and state.

    All mutations of a guild's queue happen while holding that guild's lock,
    so requests and player events for one guild are applied in order even
    when they interleave at network awaits.
    """

    def __init__(
        self,
        *,
        queue_store: QueueStore,
        audio_source: AudioSource,
        voice_connector: VoiceConnector,
        player_factory: PlayerFactory,
        skip_unplayable: bool = True,
        stream_options: StreamOptions | None = None,
    ) -> None:
        self._store = queue_store
        self._audio_source = audio_source
        self._voice_connector = voice_connector
        self._player_factory = player_factory
        self._skip_unplayable = skip_unplayable
        self._stream_options = stream_options or StreamOptions(audio_only=True, quality="highestaudio")

        # Locks are never discarded: a waiter may still hold a reference after teardown.
        self._locks: dict[int, asyncio.Lock] = defaultdict(asyncio.Lock)

    def state_of(self, guild_id: int) -> PlaybackState:
        queue = self._store.get(guild_id)
        return queue.state if queue is not None else PlaybackState.IDLE

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def enqueue(
        self,
        guild_id: int,
        channel_id: int,
        query: str,
        *,
        notifier: Notifier | None = None,
    ) -> EnqueueResult:
        """Resolve ``query`` and append it to the guild's queue, joining voice if needed.

        Raises:
            ResolutionError: The reference is invalid or could not be resolved.
                Nothing was queued.
            VoiceConnectionError: The voice channel could not be joined. The
                guild's queue was discarded.
        """
        track = await self._resolve(query)

        async with self._locks[guild_id]:
            queue = self._store.get_or_create(guild_id)
            position = queue.append(track)
            logger.info(LogTemplates.QUEUE_ENQUEUED, track.title, position, guild_id)

            if queue.connection is None:
                await self._connect(queue, channel_id)
            elif queue.connection.channel_id != channel_id:
                logger.info(
                    LogTemplates.VOICE_CHANNEL_REUSED,
                    guild_id,
                    queue.connection.channel_id,
                    channel_id,
                )

            if notifier is not None:
                queue.notifier = notifier

            actual_channel_id = queue.connection.channel_id
            if len(queue.songs) == 1:
                started = await self._start_from_head(queue)
            else:
                started = False
                await self._notify(queue, DiscordUIMessages.ADDED_TO_QUEUE.format(title=track.title))

        return EnqueueResult(
            track=track,
            position=position,
            started=started,
            channel_id=actual_channel_id,
        )

    async def play_head(self, guild_id: int) -> bool:
        """Start the song at the head of the guild's queue.

        Failure to open the stream is reported to the guild's notifier and
        leaves the queue untouched.

        Raises:
            PlaybackError: The guild has no songs queued or no voice connection.
        """
        async with self._locks[guild_id]:
            queue = self._store.get(guild_id)
            if queue is None or queue.is_empty:
                raise PlaybackError(guild_id, ErrorMessages.PLAY_EMPTY_QUEUE.format(guild_id=guild_id))
            if queue.connection is None or queue.player is None:
                raise PlaybackError(guild_id, ErrorMessages.PLAY_NOT_CONNECTED.format(guild_id=guild_id))

            if await self._play_head(queue):
                return True
            await self._notify(queue, DiscordUIMessages.ERROR_SONG_FAILED.format(title=queue.songs[0].title))
            return False

    async def handle_player_event(self, event: PlayerEvent) -> None:
        """React to a player going idle or failing."""
        async with self._locks[event.guild_id]:
            queue = self._store.get(event.guild_id)
            if queue is None or queue.player is not event.player:
                logger.debug(LogTemplates.PLAYER_EVENT_STALE, event.kind.value, event.guild_id)
                return

            if event.kind is PlayerEventKind.ERROR:
                logger.error(LogTemplates.PLAYER_ERROR, event.guild_id, event.error)
                await self._hard_reset(queue)
            else:
                logger.debug(LogTemplates.PLAYER_IDLE, event.guild_id)
                await self._advance(queue)

    async def shutdown(self) -> None:
        """Tear down every guild's queue."""
        count = 0
        for guild_id in self._store.guild_ids():
            async with self._locks[guild_id]:
                queue = self._store.get(guild_id)
                if queue is None:
                    continue
                queue.clear()
                await self._teardown(queue)
                count += 1
        logger.info(LogTemplates.CONTROLLER_SHUTDOWN, count)

    # ------------------------------------------------------------------
    # State machine steps (caller holds the guild lock)
    # ------------------------------------------------------------------

    async def _resolve(self, query: str) -> Track:
        if not self._audio_source.validate(query):
            logger.info(LogTemplates.TRACK_INVALID_REFERENCE, query)
            raise ResolutionError(query, ErrorMessages.UNSUPPORTED_URL.format(query=query))

        try:
            return await self._audio_source.resolve(query)
        except ResolutionError:
            raise
        except Exception as exc:
            logger.warning(LogTemplates.TRACK_RESOLVE_FAILED, query, exc)
            raise ResolutionError(query, ErrorMessages.RESOLVE_FAILED.format(error=exc)) from exc

    async def _connect(self, queue: GuildMusicQueue, channel_id: int) -> None:
        self._transition(queue, PlaybackState.CONNECTING)
        try:
            connection = await self._voice_connector.connect(queue.guild_id, channel_id)
        except BaseException as exc:
            logger.warning(LogTemplates.VOICE_CONNECT_FAILED, channel_id, queue.guild_id, exc)
            queue.clear()
            await self._teardown(queue)
            # Cancellation and connector errors propagate unchanged.
            if isinstance(exc, VoiceConnectionError) or not isinstance(exc, Exception):
                raise
            raise VoiceConnectionError(queue.guild_id, channel_id) from exc

        queue.connection = connection
        if queue.player is None:
            player = self._player_factory.create(queue.guild_id)
            player.set_listener(self.handle_player_event)
            queue.player = player
        self._transition(queue, PlaybackState.PLAYING)

    async def _play_head(self, queue: GuildMusicQueue) -> bool:
        track = queue.songs[0]
        connection = queue.connection
        player = queue.player

        try:
            resource = await self._audio_source.open_stream(track.source_url, self._stream_options)
            connection.subscribe(player)
            player.play(resource)
        except Exception as exc:
            logger.error(LogTemplates.PLAYBACK_START_FAILED, track.title, queue.guild_id, exc)
            return False

        logger.info(LogTemplates.PLAYBACK_STARTED, track.title, queue.guild_id, connection.channel_id)
        await self._notify(
            queue,
            DiscordUIMessages.NOW_PLAYING.format(title=track.title, channel_id=connection.channel_id),
        )
        return True

    async def _start_from_head(self, queue: GuildMusicQueue) -> bool:
        """Play the head song, dropping unplayable songs when configured to."""
        while queue.songs:
            if await self._play_head(queue):
                return True

            track = queue.songs[0]
            if not self._skip_unplayable:
                logger.warning(LogTemplates.PLAYBACK_HEAD_KEPT, track.title, queue.guild_id)
                await self._notify(queue, DiscordUIMessages.ERROR_SONG_FAILED.format(title=track.title))
                return False

            queue.remove_head()
            logger.warning(LogTemplates.PLAYBACK_SKIPPING_UNPLAYABLE, track.title, queue.guild_id)
            message = DiscordUIMessages.ERROR_SONG_SKIPPED if queue.songs else DiscordUIMessages.ERROR_SONG_FAILED
            await self._notify(queue, message.format(title=track.title))

        await self._teardown(queue)
        logger.info(LogTemplates.QUEUE_EMPTY_DISCONNECTED, queue.guild_id)
        return False

    async def _advance(self, queue: GuildMusicQueue) -> None:
        queue.remove_head()
        if queue.is_empty:
            await self._teardown(queue)
            logger.info(LogTemplates.QUEUE_EMPTY_DISCONNECTED, queue.guild_id)
            return

        self._transition(queue, PlaybackState.PLAYING)
        await self._start_from_head(queue)

    async def _hard_reset(self, queue: GuildMusicQueue) -> None:
        try:
            await self._notify(queue, DiscordUIMessages.ERROR_PLAYBACK)
        finally:
            dropped = queue.clear()
            logger.warning(LogTemplates.QUEUE_HARD_RESET, dropped, queue.guild_id)
            await self._teardown(queue)

    async def _teardown(self, queue: GuildMusicQueue) -> None:
        """Release the queue's voice resources and evict it from the store."""
        self._transition(queue, PlaybackState.TEARDOWN)

        if queue.player is not None:
            queue.player.stop()

        connection = queue.connection
        queue.connection = None
        if connection is not None:
            try:
                await connection.destroy()
                logger.debug(LogTemplates.VOICE_DESTROYED, queue.guild_id)
            except Exception as exc:
                logger.warning(LogTemplates.VOICE_DESTROY_FAILED, queue.guild_id, exc)

        self._transition(queue, PlaybackState.IDLE)
        self._store.remove(queue.guild_id)

    def _transition(self, queue: GuildMusicQueue, state: PlaybackState) -> None:
        previous = queue.transition_to(state)
        logger.debug(LogTemplates.STATE_TRANSITION, queue.guild_id, previous.value, state.value)

    async def _notify(self, queue: GuildMusicQueue, message: str) -> None:
        if queue.notifier is None:
            return
        try:
            await queue.notifier.notify(message)
        except Exception as exc:
            logger.warning(LogTemplates.NOTIFY_FAILED, queue.guild_id, exc)

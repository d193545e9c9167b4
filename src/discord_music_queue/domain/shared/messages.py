"""Centralized message constants for error messages, log templates, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Discord ID Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID exceeds maximum value (2^64)"

    # Settings Validation Errors
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Track Resolution Errors
    UNSUPPORTED_URL = "Not a valid YouTube URL: {query}"
    RESOLVE_FAILED = "Failed to fetch YouTube video info: {error}"
    NO_INFO_RETURNED = "yt-dlp returned no info for {query}"
    NO_WEBPAGE_URL = "No canonical URL found for {query}"
    NO_STREAM_URL_FOR_TRACK = "No audio stream found for {url}"

    # Voice Errors
    GUILD_NOT_FOUND = "Guild {guild_id} is not available"
    CHANNEL_NOT_VOICE = "Channel {channel_id} is not a voice channel"
    VOICE_TIMEOUT = "Timed out joining voice channel {channel_id}"
    VOICE_FORBIDDEN = "Missing permission to join voice channel {channel_id}"
    VOICE_CLIENT_ERROR = "Voice client error: {error}"
    PLAYER_NOT_SUBSCRIBED = "Player for guild {guild_id} has no voice connection"

    # Playback Errors
    PLAY_EMPTY_QUEUE = "No songs queued in guild {guild_id}"
    PLAY_NOT_CONNECTED = "Not connected to voice in guild {guild_id}"

    # Authentication/Startup Errors
    DISCORD_TOKEN_REQUIRED = "DISCORD__TOKEN environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Queue Store
    QUEUE_CREATED = "Created music queue for guild %s"
    QUEUE_REMOVED = "Removed music queue for guild %s"
    QUEUE_ENQUEUED = "Enqueued '%s' at position %s in guild %s"
    QUEUE_EMPTY_DISCONNECTED = "Queue empty, disconnected from voice channel in guild %s"
    QUEUE_HARD_RESET = "Cleared %s song(s) after player error in guild %s"

    # State Machine
    STATE_TRANSITION = "Guild %s: %s -> %s"

    # Track Resolution
    TRACK_INVALID_REFERENCE = "Invalid YouTube URL provided: %r"
    TRACK_RESOLVED = "Fetched song info: '%s' (%s)"
    TRACK_RESOLVE_FAILED = "Failed to resolve %r: %s"
    YTDLP_FAILED_EXTRACT_INFO = "yt-dlp failed to extract info from %s"
    YTDLP_NO_STREAM_URL = "No audio stream URL found for %s"
    STREAM_OPENED = "Opened audio stream for %s"

    # Voice
    VOICE_CONNECTED = "Bot joined voice channel %s in guild %s"
    VOICE_CONNECT_FAILED = "Failed to join voice channel %s in guild %s: %s"
    VOICE_CONNECTION_TIMEOUT = "Timeout connecting to channel %s"
    VOICE_NO_PERMISSION = "No permission to connect to channel %s"
    VOICE_CLIENT_ERROR = "Client error connecting: %r"
    VOICE_CHANNEL_REUSED = (
        "Guild %s already connected to channel %s, reusing it instead of requested channel %s"
    )
    VOICE_DESTROYED = "Destroyed voice connection in guild %s"
    VOICE_DESTROY_FAILED = "Error destroying voice connection in guild %s: %r"
    VOICE_SELF_DEAFEN_FAILED = "Failed to self-deafen in guild %s: %r"

    # Playback
    PLAYBACK_STARTED = "Playing song '%s' in guild %s (channel %s)"
    PLAYBACK_START_FAILED = "Error playing song '%s' in guild %s: %s"
    PLAYBACK_SKIPPING_UNPLAYABLE = "Skipping unplayable song '%s' in guild %s"
    PLAYBACK_HEAD_KEPT = "Leaving unplayable song '%s' at head of queue in guild %s"

    # Player Events
    PLAYER_ERROR = "Audio player error in guild %s: %s"
    PLAYER_IDLE = "Player idle in guild %s"
    PLAYER_EVENT_STALE = "Ignoring %s event from stale player in guild %s"
    PLAYER_EVENT_DISPATCH_FAILED = "Failed to dispatch player event in guild %s"
    PLAYER_NO_LISTENER = "No listener registered for player in guild %s"

    # Notifications
    NOTIFY_FAILED = "Failed to deliver notification in guild %s: %s"

    # Controller Lifecycle
    CONTROLLER_SHUTDOWN = "Tore down %d music queue(s) on shutdown"

    # Commands
    COMMAND_EXECUTING = "Executing command /%s (user=%s guild=%s channel=%s)"
    COMMAND_OUTSIDE_GUILD = "/%s used outside a guild by user %s"
    COMMAND_INVALID_CHANNEL = "Invalid or non-voice channel %s selected in guild %s"
    COMMAND_MISSING_PERMISSIONS = "Bot lacks voice permissions for channel %s in guild %s"
    COMMAND_CHANNEL_SELECTED = "Voice channel selected: %s (%s) in guild %s"
    COMMAND_DEFER_FAILED = "Failed to defer reply in guild %s: %s"
    COMMAND_FAILED = "Error in /%s command in guild %s"
    COMMAND_REPLY_FAILED = "Failed to edit reply: %s"

    # Application Lifecycle
    BOT_STARTING = "Starting Discord music queue bot in {environment} mode"
    BOT_SETUP = "Setting up bot..."
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STARTING_RUN = "Starting bot..."
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_CONTAINER_SHUTDOWN = "Container shutdown complete"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error during container shutdown: %s"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %ss"
    BOT_READY = "Bot ready as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"

    # Bot Cog Management
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"

    # Bot Command Sync
    BOT_SYNCED_GUILD = "Synced %s commands to guild %s"
    BOT_SYNC_GUILD_FAILED = "Failed to sync to guild %s: %s"
    BOT_SYNCED_GLOBAL = "Synced %s commands globally"
    BOT_SYNC_GLOBAL_FAILED = "Failed to sync commands globally: %s"

    # Bot Error Handling
    BOT_SLASH_COMMAND_ERROR = "Slash command error in '%s': %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"


class DiscordUIMessages:
    """User-facing Discord messages and responses.

    These strings are shown directly to users in Discord interactions.
    Keep them concise, friendly, and include appropriate emoji.
    """

    # Playback Status
    NOW_PLAYING = "▶️ Now playing: **{title}** in <#{channel_id}>"
    ADDED_TO_QUEUE = "🎶 Added to queue: **{title}**"

    # Command Validation
    STATE_SERVER_ONLY = "❌ This command can only be used in a server!"
    ERROR_INVALID_VOICE_CHANNEL = "❌ Please select a valid voice channel!"
    ERROR_BOT_MISSING_VOICE_PERMISSIONS = (
        "❌ I lack permissions to join or speak in the selected voice channel!"
    )
    ERROR_INVALID_URL = "❌ Please provide a valid YouTube URL."

    # Enqueue Failures
    ERROR_TRACK_NOT_FOUND = "❌ Couldn't fetch that video. Check the link and try again."
    ERROR_COULD_NOT_JOIN_VOICE = (
        "❌ Failed to join the selected voice channel. "
        "Please check my permissions and try again."
    )
    ERROR_PLAY_COMMAND_FAILED = "❌ Failed to play the song. Please try again."

    # Playback Failures
    ERROR_SONG_FAILED = "❌ Failed to play **{title}**."
    ERROR_SONG_SKIPPED = "⚠️ Couldn't play **{title}**, skipping to the next song."
    ERROR_PLAYBACK = "❌ An error occurred while playing the audio."

    # Generic
    ERROR_OCCURRED = "❌ An error occurred: {error}"

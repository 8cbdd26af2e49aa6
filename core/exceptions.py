"""Custom exception hierarchy for the shuffle player service.

This module provides a structured exception hierarchy for consistent
error handling across the application. Errors raised during startup are
fatal; errors raised inside the control loop are logged and retried.
"""


class ShufflePlayerError(Exception):
    """Base exception for all shuffle player errors."""

    pass


class ConfigurationError(ShufflePlayerError):
    """Errors related to configuration."""

    pass


class PlaylistError(ShufflePlayerError):
    """Errors related to playlist operations."""

    pass


class PlaylistReadError(PlaylistError):
    """The raw track list could not be read."""

    pass


class EmptyPlaylistError(PlaylistError):
    """The track list contains no tracks."""

    pass


class PlaylistExhaustedError(PlaylistError):
    """The cursor ran past the end of the playlist."""

    pass


class StateError(ShufflePlayerError):
    """Errors related to the persisted playback state."""

    pass


class StateNotFoundError(StateError):
    """No state file exists yet."""

    pass


class StateMalformedError(StateError):
    """State file present but unparsable or missing required keys."""

    pass


class StateWriteError(StateError):
    """State file could not be written."""

    pass


class PlayerError(ShufflePlayerError):
    """Errors related to the external player process."""

    pass


class PlayerSpawnError(PlayerError):
    """The external player failed to start."""

    pass


class PlayerControlError(PlayerError):
    """Terminating or reaping the external player failed."""

    pass


class ControlServerError(ShufflePlayerError):
    """Errors related to the HTTP control surface."""

    pass

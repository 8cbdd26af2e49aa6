"""Lifecycle of the external player process.

At most one player runs at a time. The supervisor is polled ("ticked") by the
control loop; when idle it pulls the next track from the playlist, saves the
advanced cursor and only then starts the player, so a crash between the two
resumes at the following track rather than replaying this one.
"""

import subprocess
from enum import Enum
from typing import List, Optional, Sequence

from core.exceptions import (
    PlayerControlError,
    PlayerSpawnError,
    PlaylistExhaustedError,
    StateWriteError,
)
from core.logging import get_logger
from core.metadata import TrackMetadata
from core.playlist import Playlist
from core.state import PersistentState, StateStore

logger = get_logger(__name__)

TRACK_PLACEHOLDER = '{track}'

# Upper bound on waiting for a killed player to be reaped (seconds)
KILL_WAIT_TIMEOUT = 5.0


class SupervisorState(Enum):
    """State machine for the player process."""

    IDLE = "idle"
    RUNNING = "running"


def build_command(template: Sequence[str], track: str) -> List[str]:
    """
    Substitute track into the player command.

    Every argument containing {track} gets the path spliced in. A template
    without the placeholder is used as-is.
    """
    return [arg.replace(TRACK_PLACEHOLDER, track) for arg in template]


class PlayerSupervisor:
    """Starts, polls and kills the external player; advances the playlist."""

    def __init__(
        self,
        playlist: Playlist,
        state: PersistentState,
        store: StateStore,
        command: Sequence[str],
        exhaustion_policy: str = 'wrap',
    ):
        self._playlist = playlist
        self._state = state
        self._store = store
        self._command = list(command)
        self._exhaustion_policy = exhaustion_policy

        self._process: Optional[subprocess.Popen] = None
        self._exhausted: bool = False
        self.current_track: Optional[str] = None
        self.current_metadata: Optional[TrackMetadata] = None

    @property
    def state(self) -> SupervisorState:
        if self._process is None:
            return SupervisorState.IDLE
        return SupervisorState.RUNNING

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process is not None else None

    def tick(self) -> None:
        """Drive the state machine one step without blocking."""
        if self._process is None:
            self._start_next()
        else:
            self._check_process()

    def _check_process(self) -> None:
        try:
            returncode = self._process.poll()
        except OSError as e:
            # Treat as still running; never risk two players at once.
            logger.error("unable to check player state: %s", e)
            return
        if returncode is not None:
            logger.debug("Player for %s exited with %s", self.current_track, returncode)
            self._process = None

    def _next_track(self) -> Optional[str]:
        try:
            return self._playlist.next_track(self._state)
        except PlaylistExhaustedError:
            if self._exhaustion_policy != 'wrap':
                if not self._exhausted:
                    logger.info("Playlist exhausted after %d tracks; stopping", len(self._playlist))
                    self._exhausted = True
                    self.current_track = None
                    self.current_metadata = None
                return None
            logger.info("Playlist exhausted; starting over")
            self._state.cursor = 0
            return self._playlist.next_track(self._state)

    def _persist(self) -> None:
        try:
            self._store.save(self._state)
        except StateWriteError as e:
            logger.error("unable to save state: %s", e)

    def _start_next(self) -> None:
        track = self._next_track()
        if track is None:
            return
        # Saved before the player starts: a crash from here on skips forward.
        self._persist()

        logger.info("track %s", track)
        try:
            self._process = self._spawn(track)
        except PlayerSpawnError as e:
            # The cursor has already moved on; the next tick tries the next track.
            logger.error("unable to start playing: %s", e)
            self.current_track = None
            self.current_metadata = None
            return
        self.current_track = track
        self.current_metadata = TrackMetadata(track)

    def _spawn(self, track: str) -> subprocess.Popen:
        args = build_command(self._command, track)
        try:
            return subprocess.Popen(args, stdin=subprocess.DEVNULL)
        except (OSError, ValueError, subprocess.SubprocessError) as e:
            raise PlayerSpawnError(f"{args[0]}: {e}") from e

    def skip(self) -> None:
        """
        Kill the running player and wait for it to exit.

        A no-op when idle; the next tick starts the following track.

        Raises:
            PlayerControlError: The player could not be killed or reaped
        """
        if self._process is None:
            return
        try:
            self._process.kill()
            self._process.wait(timeout=KILL_WAIT_TIMEOUT)
        except (OSError, subprocess.TimeoutExpired) as e:
            raise PlayerControlError(f"unable to stop player: {e}") from e
        logger.info("Skipped %s", self.current_track)
        self._process = None

    def shutdown(self) -> None:
        """Stop any running player on the way out."""
        try:
            self.skip()
        except PlayerControlError as e:
            logger.error("%s", e)

"""The playback session: playlist, persisted state and player supervisor.

One session exists per running service and is owned by the control loop.
"""

from typing import Any, Dict, Optional

from core.config import Config
from core.exceptions import StateMalformedError
from core.logging import get_logger
from core.metadata import TrackMetadata
from core.player_supervisor import PlayerSupervisor, SupervisorState
from core.playlist import Playlist
from core.state import PersistentState, StateStore

logger = get_logger(__name__)


class PlaybackSession:
    """Bundles the mutable playback objects behind one owner."""

    def __init__(
        self,
        playlist: Playlist,
        state: PersistentState,
        store: StateStore,
        supervisor: PlayerSupervisor,
    ):
        self.playlist = playlist
        self.state = state
        self.store = store
        self.supervisor = supervisor

    @classmethod
    def start(cls, config: Config) -> 'PlaybackSession':
        """
        Load state and the track list described by config.

        Raises:
            StateMalformedError: The state file is corrupt or does not fit
                                 the track list
            PlaylistReadError: The track list cannot be read
            EmptyPlaylistError: The track list holds no tracks
            ConfigurationError: A config value is invalid
        """
        store = StateStore(config.state_file)
        state = store.load_or_fresh()
        playlist = Playlist.from_file(config.playlist_file, state.seed)
        if state.cursor > len(playlist):
            raise StateMalformedError(
                f"saved index {state.cursor} exceeds the {len(playlist)} tracks "
                f"in {config.playlist_file}"
            )
        logger.info("Loaded %d tracks from %s", len(playlist), config.playlist_file)
        supervisor = PlayerSupervisor(
            playlist,
            state,
            store,
            config.player_command,
            exhaustion_policy=config.exhaustion_policy,
        )
        return cls(playlist, state, store, supervisor)

    @property
    def current_track(self) -> Optional[str]:
        return self.supervisor.current_track

    @property
    def current_metadata(self) -> Optional[TrackMetadata]:
        return self.supervisor.current_metadata

    def tick(self) -> None:
        self.supervisor.tick()

    def skip(self) -> None:
        self.supervisor.skip()

    def status(self) -> Dict[str, Any]:
        """Snapshot for the JSON status route."""
        metadata = self.current_metadata
        return {
            'track': self.current_track,
            'cursor': self.state.cursor,
            'length': len(self.playlist),
            'state': self.supervisor.state.value,
            'metadata': metadata.to_dict() if metadata is not None else None,
        }

    def close(self) -> None:
        if self.supervisor.state is SupervisorState.RUNNING:
            self.supervisor.shutdown()

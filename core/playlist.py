"""Shuffled playlist built from a flat track list."""

from pathlib import Path
from typing import List, Sequence, Tuple

from core.exceptions import EmptyPlaylistError, PlaylistExhaustedError, PlaylistReadError
from core.logging import get_logger
from core.shuffle import permute
from core.state import PersistentState

logger = get_logger(__name__)


def read_track_list(path: Path) -> List[str]:
    """
    Read a newline-delimited track list.

    Lines are taken verbatim (no comments, no escaping). Blank lines are
    dropped with a warning since they cannot name a track.

    Raises:
        PlaylistReadError: The file could not be read
    """
    try:
        # newline='' keeps lone '\r' inside paths; only '\n' ends a line.
        with open(path, 'r', encoding='utf-8', newline='') as f:
            lines = f.read().split('\n')
    except (OSError, UnicodeDecodeError) as e:
        raise PlaylistReadError(f"unable to read track list {path}: {e}") from e

    if lines and lines[-1] == '':
        lines.pop()
    lines = [line[:-1] if line.endswith('\r') else line for line in lines]

    tracks = [line for line in lines if line.strip()]
    skipped = len(lines) - len(tracks)
    if skipped:
        logger.warning("Ignoring %d blank line(s) in %s", skipped, path)
    return tracks


class Playlist:
    """Immutable shuffled track order; the cursor lives in PersistentState."""

    def __init__(self, tracks: Sequence[str]) -> None:
        self._tracks: Tuple[str, ...] = tuple(tracks)

    @classmethod
    def build(cls, raw_tracks: Sequence[str], seed: int) -> 'Playlist':
        """
        Shuffle raw_tracks once with seed.

        Raises:
            EmptyPlaylistError: raw_tracks holds no tracks
        """
        if not raw_tracks:
            raise EmptyPlaylistError("track list is empty")
        return cls(permute(raw_tracks, seed))

    @classmethod
    def from_file(cls, path: Path, seed: int) -> 'Playlist':
        """Read the track list at path and shuffle it."""
        return cls.build(read_track_list(path), seed)

    @property
    def tracks(self) -> Tuple[str, ...]:
        return self._tracks

    def __len__(self) -> int:
        return len(self._tracks)

    def __getitem__(self, index: int) -> str:
        return self._tracks[index]

    def advance(self, cursor: int) -> Tuple[str, int]:
        """
        Return the track at cursor and the cursor that follows it.

        Raises:
            PlaylistExhaustedError: cursor is at or past the end
        """
        if cursor < 0 or cursor >= len(self._tracks):
            raise PlaylistExhaustedError(
                f"cursor {cursor} is past the end of {len(self._tracks)} tracks"
            )
        return self._tracks[cursor], cursor + 1

    def next_track(self, state: PersistentState) -> str:
        """Advance the cursor held by state and return the track it passed."""
        track, state.cursor = self.advance(state.cursor)
        return track

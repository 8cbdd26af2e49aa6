"""Durable playback state: the shuffle seed and the playlist cursor.

The state is stored as a small INI document::

    [general]
    seed = 1234567890123456789
    index = 17

It is the only thing the service writes to disk besides its log.
"""

import configparser
import os
from pathlib import Path
from typing import Optional

from core.exceptions import StateMalformedError, StateNotFoundError, StateWriteError
from core.logging import get_logger
from core.shuffle import MAX_SEED, generate_seed

logger = get_logger(__name__)

SECTION = 'general'


class PersistentState:
    """Seed plus cursor; mutated by the playlist, saved by StateStore."""

    def __init__(self, seed: int, cursor: int = 0) -> None:
        self.seed = seed
        self.cursor = cursor

    @classmethod
    def fresh(cls) -> 'PersistentState':
        """Create state for a first run: new random seed, cursor at 0."""
        return cls(generate_seed(), 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PersistentState):
            return NotImplemented
        return self.seed == other.seed and self.cursor == other.cursor

    def __repr__(self) -> str:
        return f"PersistentState(seed={self.seed}, cursor={self.cursor})"


def _parse_unsigned(section: configparser.SectionProxy, key: str, maximum: Optional[int] = None) -> int:
    raw = section.get(key)
    if raw is None:
        raise StateMalformedError(f"missing key '{key}'")
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        raise StateMalformedError(f"'{key}' is not an unsigned integer: {raw!r}")
    value = int(raw)
    if maximum is not None and value > maximum:
        raise StateMalformedError(f"'{key}' out of range: {value}")
    return value


class StateStore:
    """Loads and saves PersistentState at a fixed path."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> PersistentState:
        """
        Read the state file.

        Raises:
            StateNotFoundError: No file at the configured path
            StateMalformedError: File unreadable, unparsable or missing keys
        """
        if not self.path.exists():
            raise StateNotFoundError(f"no state file at {self.path}")

        parser = configparser.ConfigParser(interpolation=None)
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                parser.read_file(f)
        except (OSError, UnicodeDecodeError, configparser.Error) as e:
            raise StateMalformedError(f"cannot parse {self.path}: {e}") from e

        if not parser.has_section(SECTION):
            raise StateMalformedError(f"missing [{SECTION}] section in {self.path}")
        section = parser[SECTION]
        seed = _parse_unsigned(section, 'seed', MAX_SEED)
        cursor = _parse_unsigned(section, 'index')
        return PersistentState(seed, cursor)

    def load_or_fresh(self) -> PersistentState:
        """Load existing state, or start fresh when there is none yet."""
        try:
            state = self.load()
        except StateNotFoundError:
            state = PersistentState.fresh()
            logger.info("No saved state; starting fresh with seed %d", state.seed)
            return state
        logger.info("Resuming at index %d (seed %d)", state.cursor, state.seed)
        return state

    def save(self, state: PersistentState) -> None:
        """
        Write state, replacing the previous file in one rename.

        Raises:
            StateWriteError: The file could not be written
        """
        parser = configparser.ConfigParser(interpolation=None)
        parser[SECTION] = {
            'seed': str(state.seed),
            'index': str(state.cursor),
        }
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                parser.write(f)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError:
                logger.debug("Could not remove %s", tmp_path)
            raise StateWriteError(f"unable to save state to {self.path}: {e}") from e

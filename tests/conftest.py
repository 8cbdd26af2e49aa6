"""Pytest configuration and fixtures."""

import shutil
import sys
import tempfile
from pathlib import Path

import pytest

from core.config import Config
from core.player_supervisor import PlayerSupervisor
from core.playlist import Playlist
from core.session import PlaybackSession
from core.state import PersistentState, StateStore

# Stand-in players built from the running interpreter, so tests need no
# real audio player installed. The track path ends up in sys.argv.
SLEEPING_PLAYER = [sys.executable, '-c', 'import time; time.sleep(30)', '{track}']
EXITING_PLAYER = [sys.executable, '-c', 'pass', '{track}']
MISSING_PLAYER = ['/nonexistent/shuffleplayer-test-player', '{track}']

TRACKS = ['a.mp3', 'b.mp3', 'c.mp3']


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def mock_config(monkeypatch, temp_dir):
    """Configuration rooted in a temporary XDG tree."""
    monkeypatch.setenv('XDG_CONFIG_HOME', str(temp_dir / 'config'))
    monkeypatch.setenv('XDG_DATA_HOME', str(temp_dir / 'data'))
    monkeypatch.delenv('SHUFFLEPLAYER_CONFIG', raising=False)
    monkeypatch.setattr(Config, '_instance', None)
    return Config.get_instance()


@pytest.fixture
def track_file(temp_dir):
    """A three-track list on disk."""
    path = temp_dir / 'files.txt'
    path.write_text('\n'.join(TRACKS) + '\n', encoding='utf-8')
    return path


@pytest.fixture
def store(temp_dir):
    return StateStore(temp_dir / 'state.ini')


@pytest.fixture
def make_supervisor(store):
    """Build a supervisor over a fresh seed-42 playlist."""
    created = []

    def _make(command=SLEEPING_PLAYER, tracks=TRACKS, cursor=0, policy='wrap'):
        state = PersistentState(42, cursor)
        playlist = Playlist.build(tracks, state.seed)
        supervisor = PlayerSupervisor(playlist, state, store, command, exhaustion_policy=policy)
        created.append(supervisor)
        return supervisor, playlist, state

    yield _make

    for supervisor in created:
        supervisor.shutdown()


@pytest.fixture
def session(make_supervisor, store):
    """A playback session that has not ticked yet."""
    supervisor, playlist, state = make_supervisor()
    return PlaybackSession(playlist, state, store, supervisor)

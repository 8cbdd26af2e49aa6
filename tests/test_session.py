"""Tests for session startup."""

import shlex

import pytest

from core.exceptions import EmptyPlaylistError, PlaylistReadError, StateMalformedError
from core.session import PlaybackSession
from core.shuffle import permute
from core.state import PersistentState, StateStore
from tests.conftest import EXITING_PLAYER, TRACKS


@pytest.fixture
def config(mock_config, track_file):
    mock_config.set('playlist', 'file', str(track_file))
    mock_config.set('player', 'command', shlex.join(EXITING_PLAYER))
    return mock_config


class TestPlaybackSessionStart:
    """Test PlaybackSession.start()."""

    def test_fresh_start(self, config):
        """Test a first run with no saved state."""
        session = PlaybackSession.start(config)
        assert session.state.cursor == 0
        assert sorted(session.playlist.tracks) == TRACKS
        assert session.current_track is None
        assert session.status()['state'] == 'idle'

    def test_resume(self, config):
        """Test that saved seed and cursor are restored."""
        StateStore(config.state_file).save(PersistentState(42, 2))
        session = PlaybackSession.start(config)
        assert session.state == PersistentState(42, 2)
        assert list(session.playlist.tracks) == permute(TRACKS, 42)

    def test_malformed_state_is_fatal(self, config):
        """Test that corrupt state stops startup."""
        config.state_file.parent.mkdir(parents=True, exist_ok=True)
        config.state_file.write_text('[general]\nseed = x\n', encoding='utf-8')
        with pytest.raises(StateMalformedError):
            PlaybackSession.start(config)

    def test_cursor_beyond_playlist(self, config):
        """Test that a cursor past the track list is rejected."""
        StateStore(config.state_file).save(PersistentState(42, 4))
        with pytest.raises(StateMalformedError):
            PlaybackSession.start(config)

    def test_missing_track_list(self, config, temp_dir):
        """Test that an unreadable track list stops startup."""
        config.set('playlist', 'file', str(temp_dir / 'missing.txt'))
        with pytest.raises(PlaylistReadError):
            PlaybackSession.start(config)

    def test_empty_track_list(self, config, track_file):
        """Test that an empty track list stops startup."""
        track_file.write_text('', encoding='utf-8')
        with pytest.raises(EmptyPlaylistError):
            PlaybackSession.start(config)

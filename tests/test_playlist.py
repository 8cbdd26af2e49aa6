"""Tests for the shuffled playlist."""

import pytest

from core.exceptions import EmptyPlaylistError, PlaylistExhaustedError, PlaylistReadError
from core.playlist import Playlist, read_track_list
from core.shuffle import permute
from core.state import PersistentState

TRACKS = ['a.mp3', 'b.mp3', 'c.mp3']


class TestReadTrackList:
    """Test read_track_list()."""

    def test_reads_lines_verbatim(self, temp_dir):
        """Test that each line is one track path."""
        path = temp_dir / 'files.txt'
        path.write_text('/music/a b.mp3\n#not a comment.mp3\n/music/c.flac', encoding='utf-8')
        assert read_track_list(path) == ['/music/a b.mp3', '#not a comment.mp3', '/music/c.flac']

    def test_drops_blank_lines(self, temp_dir):
        """Test that blank lines do not become tracks."""
        path = temp_dir / 'files.txt'
        path.write_text('a.mp3\n\n  \nb.mp3\n', encoding='utf-8')
        assert read_track_list(path) == ['a.mp3', 'b.mp3']

    def test_splits_on_newline_only(self, temp_dir):
        """Test that other Unicode line boundaries stay inside a path."""
        path = temp_dir / 'files.txt'
        path.write_bytes('/music/a\u2028b.mp3\n/music/c\x1cd.mp3\n'.encode('utf-8'))
        assert read_track_list(path) == ['/music/a\u2028b.mp3', '/music/c\x1cd.mp3']

    def test_strips_crlf(self, temp_dir):
        """Test that a trailing carriage return is not part of the path."""
        path = temp_dir / 'files.txt'
        path.write_bytes('a.mp3\r\nb\rc.mp3\r\n'.encode('utf-8'))
        assert read_track_list(path) == ['a.mp3', 'b\rc.mp3']

    def test_missing_file(self, temp_dir):
        """Test that an unreadable list raises PlaylistReadError."""
        with pytest.raises(PlaylistReadError):
            read_track_list(temp_dir / 'missing.txt')


class TestPlaylist:
    """Test Playlist class."""

    def test_build_is_deterministic(self):
        """Test that the same seed builds the same order."""
        assert Playlist.build(TRACKS, 42).tracks == Playlist.build(TRACKS, 42).tracks
        assert list(Playlist.build(TRACKS, 42).tracks) == permute(TRACKS, 42)

    def test_build_empty(self):
        """Test that an empty track list is rejected."""
        with pytest.raises(EmptyPlaylistError):
            Playlist.build([], 42)

    def test_from_file_empty(self, temp_dir):
        """Test that a file of blank lines is an empty playlist."""
        path = temp_dir / 'files.txt'
        path.write_text('\n\n', encoding='utf-8')
        with pytest.raises(EmptyPlaylistError):
            Playlist.from_file(path, 42)

    def test_from_file(self, track_file):
        """Test building from a file."""
        playlist = Playlist.from_file(track_file, 42)
        assert len(playlist) == 3
        assert sorted(playlist.tracks) == TRACKS

    def test_advance(self):
        """Test that advance returns the track and the next cursor."""
        playlist = Playlist.build(TRACKS, 42)
        track, cursor = playlist.advance(0)
        assert track == playlist[0]
        assert cursor == 1
        track, cursor = playlist.advance(cursor)
        assert track == playlist[1]
        assert cursor == 2

    def test_advance_exhausted(self):
        """Test that advancing at the end raises instead of indexing."""
        playlist = Playlist.build(TRACKS, 42)
        with pytest.raises(PlaylistExhaustedError):
            playlist.advance(len(playlist))

    def test_next_track_moves_state_cursor(self):
        """Test that next_track mutates the borrowed cursor."""
        playlist = Playlist.build(TRACKS, 42)
        state = PersistentState(42, 1)
        assert playlist.next_track(state) == playlist[1]
        assert state.cursor == 2

    def test_next_track_exhausted_leaves_cursor(self):
        """Test that a failed advance does not move the cursor."""
        playlist = Playlist.build(TRACKS, 42)
        state = PersistentState(42, 3)
        with pytest.raises(PlaylistExhaustedError):
            playlist.next_track(state)
        assert state.cursor == 3

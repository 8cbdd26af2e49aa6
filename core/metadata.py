"""Metadata extraction for audio files using mutagen."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from mutagen import File

from core.logging import get_logger

logger = get_logger(__name__)


class TrackMetadata:
    """Display metadata for a single track; never raises on bad files."""

    def __init__(self, file_path: str):
        self.file_path = file_path
        self.title: Optional[str] = None
        self.artist: Optional[str] = None
        self.album: Optional[str] = None
        self.duration: Optional[float] = None

        self._extract_metadata()

    def _extract_metadata(self):
        """Extract metadata using mutagen's format-agnostic easy tags."""
        try:
            audio_file = File(self.file_path, easy=True)
            if audio_file is None:
                return

            self.title = self._get_tag_generic(audio_file, ['title'])
            self.artist = self._get_tag_generic(audio_file, ['artist', 'albumartist'])
            self.album = self._get_tag_generic(audio_file, ['album'])

            if hasattr(audio_file, 'info') and hasattr(audio_file.info, 'length'):
                self.duration = audio_file.info.length
        except Exception as e:
            # mutagen raises more than MutagenError on damaged files
            logger.debug("No metadata for %s: %s", self.file_path, e)
        finally:
            # Always ensure we at least have a sensible title, even if mutagen
            # failed to parse tags for this file.
            if not self.title:
                self.title = Path(self.file_path).stem or self.file_path

    def _get_tag_generic(self, audio_file, tag_keys: List[str]) -> Optional[str]:
        """Get a tag value trying multiple possible keys."""
        tags = getattr(audio_file, 'tags', None)
        if tags is None:
            return None
        for key in tag_keys:
            try:
                value = tags.get(key)
            except (KeyError, TypeError, ValueError):
                continue
            if not value:
                continue
            if isinstance(value, (list, tuple)):
                value = value[0]
            if isinstance(value, bytes):
                value = value.decode('utf-8', errors='ignore')
            result = str(value).strip()
            if result:
                return result
        return None

    @property
    def display_name(self) -> str:
        """Human readable 'Artist - Title', or just the title."""
        if self.artist:
            return f"{self.artist} - {self.title}"
        return self.title or self.file_path

    def to_dict(self) -> Dict[str, Any]:
        """Convert metadata to dictionary."""
        return {
            'file_path': self.file_path,
            'title': self.title,
            'artist': self.artist,
            'album': self.album,
            'duration': self.duration,
        }

"""Save sinks for finished lyrics."""

from pathlib import Path
from typing import Dict, Optional, Protocol

from ..config import DEFAULT_ENCODING, LRC_EXTENSION, get_lyrics_dir
from ..exceptions import StoreError
from ..utils.logging import get_logger
from ..utils.validation import sanitize_filename
from .models import TrackInfo

logger = get_logger(__name__)


def lrc_filename(track: TrackInfo) -> str:
    """File name used when saving or downloading a track's lyrics."""
    return sanitize_filename(track.display_name) + LRC_EXTENSION


class LyricsStore(Protocol):
    """Persists serialized lyrics per track. An empty lyric clears them."""

    def save(self, track: TrackInfo, lyric: str) -> None: ...

    def load(self, track: TrackInfo) -> Optional[str]: ...


class MemoryStore:
    """Keeps saved lyrics in a dict, keyed by track."""

    def __init__(self):
        self.songs: Dict[TrackInfo, str] = {}

    def save(self, track: TrackInfo, lyric: str) -> None:
        if lyric:
            self.songs[track] = lyric
        else:
            self.songs.pop(track, None)

    def load(self, track: TrackInfo) -> Optional[str]:
        return self.songs.get(track)


class LrcDirectoryStore:
    """Stores one ``.lrc`` file per track in a directory."""

    def __init__(self, lyrics_dir: Optional[Path] = None, encoding: str = DEFAULT_ENCODING):
        self.lyrics_dir = lyrics_dir or get_lyrics_dir()
        self.encoding = encoding

    def get_path(self, track: TrackInfo) -> Path:
        """Get path of a track's lyrics file."""
        return self.lyrics_dir / lrc_filename(track)

    def save(self, track: TrackInfo, lyric: str) -> None:
        """Write lyrics for a track, or remove the file for an empty lyric."""
        path = self.get_path(track)
        try:
            if not lyric:
                if path.exists():
                    path.unlink()
                    logger.info(f"Cleared saved lyrics for {track.display_name}")
                return
            self.lyrics_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(lyric, encoding=self.encoding)
            logger.debug(f"Saved lyrics to {path}")
        except OSError as e:
            raise StoreError(f"Failed to save lyrics: {e}")

    def load(self, track: TrackInfo) -> Optional[str]:
        """Load saved lyrics for a track."""
        path = self.get_path(track)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to load lyrics for {track.display_name}: {e}")
            return None

    def list_tracks(self) -> list[str]:
        """Names of all saved lyrics files."""
        if not self.lyrics_dir.exists():
            return []
        return sorted(p.stem for p in self.lyrics_dir.glob(f"*{LRC_EXTENSION}"))

"""Interactive lyrics timing editor.

An ``EditorSession`` owns one lyric sequence and a cursor pointing at the
most recently marked line. Marking and inserting read the injected playback
source's position; jumping and resetting seek it.
"""

import math
from pathlib import Path
from typing import Optional

from ..config import DEFAULT_ENCODING
from ..exceptions import LyricsError
from ..utils.logging import get_logger
from ..utils.validation import (
    validate_complete_timing,
    validate_playback_rate,
    validate_start_time,
)
from .lrc import init_lyrics, parse_lyrics
from .models import LyricLine, LyricSequence, TrackInfo, copy_lyrics
from .playback import PlaybackSource
from .serialization import clean_line_text, serialize_lyrics
from .store import LyricsStore, MemoryStore, lrc_filename

logger = get_logger(__name__)


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


class EditorSession:
    """Editing state for one track's lyrics."""

    def __init__(
        self,
        playback: PlaybackSource,
        track: TrackInfo,
        text: str = "",
        saved_lyrics: Optional[LyricSequence] = None,
        store: Optional[LyricsStore] = None,
    ):
        """
        Args:
            playback: Clock to mark against and seek
            track: Identity handed to the store on save
            text: Raw track lyrics, used when nothing was saved before
            saved_lyrics: Previously saved sequence; copied, never aliased
            store: Save sink, in-memory by default
        """
        self.playback = playback
        self.track = track
        self.text = text
        self.store = store if store is not None else MemoryStore()

        self.origin_lyrics: Optional[LyricSequence] = saved_lyrics
        self._lyrics: LyricSequence = (
            copy_lyrics(saved_lyrics) if saved_lyrics else init_lyrics(text)
        )
        self._current_index = -1

        self._origin_loop: Optional[bool] = None
        self._origin_playback_rate: Optional[float] = None

    @classmethod
    def from_store(
        cls, playback: PlaybackSource, track: TrackInfo, text: str, store: LyricsStore
    ) -> "EditorSession":
        """Start a session from the store's saved lyrics, falling back to text."""
        saved = store.load(track)
        saved_lyrics = parse_lyrics(saved, keep_plain_text=True) if saved else None
        if saved_lyrics:
            logger.info(f"Loaded {len(saved_lyrics)} saved line(s) for {track.display_name}")
        return cls(playback, track, text=text, saved_lyrics=saved_lyrics, store=store)

    # ----------------------
    # Read-only views
    # ----------------------

    @property
    def lyrics(self) -> LyricSequence:
        return self._lyrics

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def untimed_count(self) -> int:
        return sum(1 for line in self._lyrics if not line.is_timed)

    def is_marked(self, index: int) -> bool:
        """Whether a line is at or before the cursor."""
        return self._current_index >= index

    def __len__(self) -> int:
        return len(self._lyrics)

    # ----------------------
    # Session lifecycle
    # ----------------------

    def open(self) -> "EditorSession":
        """Rewind playback and loop it for the duration of the session."""
        self.reset_local()
        self._origin_loop = self.playback.loop
        self._origin_playback_rate = self.playback.playback_rate
        self.playback.loop = True
        return self

    def close(self) -> Optional[LyricSequence]:
        """Restore playback settings; returns the last saved lyrics."""
        if self._origin_loop is not None:
            self.playback.loop = self._origin_loop
        if self._origin_playback_rate is not None:
            self.playback.playback_rate = self._origin_playback_rate
        self._origin_loop = None
        self._origin_playback_rate = None
        return self.origin_lyrics

    def __enter__(self) -> "EditorSession":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def set_playback_rate(self, rate: float) -> None:
        self.playback.playback_rate = validate_playback_rate(rate)

    # ----------------------
    # Editing operations
    # ----------------------

    def mark(self) -> bool:
        """Time the line after the cursor at the current playback position."""
        index = self._current_index + 1
        if index >= len(self._lyrics):
            logger.debug("Nothing left to mark")
            return False
        t = self.playback.current_time
        self._lyrics[index].start_time = t
        self._current_index = index
        logger.debug(f"Marked line {index} at {t:.2f}s")
        return True

    def insert_line(self) -> bool:
        """Insert an empty line timed now, right after the cursor."""
        index = self._current_index + 1
        t = self.playback.current_time
        self._lyrics.insert(index, LyricLine(start_time=t, text=""))
        self._current_index = index
        logger.debug(f"Inserted line {index} at {t:.2f}s")
        return True

    def remove_line(self, index: int) -> bool:
        if not 0 <= index < len(self._lyrics):
            return False
        del self._lyrics[index]
        # Keep the cursor on the same logical line.
        if index <= self._current_index:
            self._current_index -= 1
        logger.debug(f"Removed line {index}")
        return True

    def jump(self, time, index: int) -> bool:
        """Seek playback to a marked line and move the cursor onto it."""
        if not _is_number(time):
            return False
        if not 0 <= index < len(self._lyrics):
            return False
        self.playback.current_time = time
        self._current_index = index
        logger.debug(f"Jumped to line {index} at {time:.2f}s")
        return True

    def modify_line(self, index: int, text: str) -> bool:
        """Replace a line's text, folded onto one line and stripped."""
        if not 0 <= index < len(self._lyrics):
            return False
        self._lyrics[index].text = clean_line_text(text)
        logger.debug(f"Edited line {index}")
        return True

    def retime_line(self, index: int, start_time: Optional[float]) -> bool:
        """Set or clear one line's timestamp without moving the cursor."""
        start_time = validate_start_time(start_time)
        if not 0 <= index < len(self._lyrics):
            return False
        self._lyrics[index].start_time = start_time
        logger.debug(f"Retimed line {index} to {start_time}")
        return True

    def reset_local(self, lyrics: Optional[LyricSequence] = None) -> None:
        """Rewind playback and the cursor, optionally swapping in new lyrics."""
        self.playback.current_time = 0
        if lyrics is not None:
            self._lyrics = lyrics
        self._current_index = -1
        logger.debug(f"Reset cursor over {len(self._lyrics)} line(s)")

    def paste_import(self, raw_text: str) -> int:
        """Replace the lyrics with freshly parsed text; returns the line count."""
        lyrics = init_lyrics(raw_text)
        self.reset_local(lyrics)
        logger.info(f"Imported {len(lyrics)} line(s)")
        return len(lyrics)

    def import_file(self, path: Path, encoding: str = DEFAULT_ENCODING) -> int:
        try:
            raw_text = Path(path).read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise LyricsError(f"Cannot read lyrics file {path}: {e}")
        return self.paste_import(raw_text)

    def reset_remote(self) -> None:
        """Discard saved lyrics and start over from the raw track text."""
        self.store.save(self.track, "")
        lyrics = init_lyrics(self.text)
        self.reset_local(lyrics)
        self.origin_lyrics = copy_lyrics(lyrics)
        logger.info(f"Reset lyrics for {self.track.display_name}")

    # ----------------------
    # Output
    # ----------------------

    def serialize(self) -> str:
        return serialize_lyrics(self._lyrics)

    def validate(self) -> None:
        validate_complete_timing(self._lyrics)

    def save(self) -> str:
        """Validate and hand the serialized lyrics to the store.

        Raises:
            IncompleteTimingError: If any line is still untimed
        """
        self.validate()
        lyric = self.serialize()
        self.store.save(self.track, lyric)
        self.origin_lyrics = copy_lyrics(self._lyrics)
        logger.info(f"Saved {len(self._lyrics)} line(s) for {self.track.display_name}")
        return lyric

    def download(self, directory: Path, encoding: str = DEFAULT_ENCODING) -> Path:
        """Write the current lyrics to ``<name> - <artists>.lrc``."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / lrc_filename(self.track)
        path.write_text(self.serialize(), encoding=encoding)
        logger.info(f"Downloaded lyrics to {path}")
        return path

"""Data models for timed lyrics."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class LyricLine:
    """A single lyric line, optionally anchored to a playback time."""

    start_time: Optional[float]
    text: str = ""

    @property
    def is_timed(self) -> bool:
        return self.start_time is not None

    def copy(self) -> "LyricLine":
        return LyricLine(start_time=self.start_time, text=self.text)


# Insertion order is display and playback order.
LyricSequence = List[LyricLine]


def copy_lyrics(lyrics: LyricSequence) -> LyricSequence:
    """Return an independent copy of a lyric sequence."""
    return [line.copy() for line in lyrics]


@dataclass(frozen=True)
class TrackInfo:
    """Identity of the track whose lyrics are being edited."""

    name: str
    artists: str

    @property
    def display_name(self) -> str:
        return f"{self.name} - {self.artists}"

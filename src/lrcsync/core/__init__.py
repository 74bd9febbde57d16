"""Core lyrics normalization, parsing, editing and serialization."""

from .models import LyricLine, LyricSequence, TrackInfo

__all__ = [
    "LyricLine",
    "LyricSequence",
    "TrackInfo",
]

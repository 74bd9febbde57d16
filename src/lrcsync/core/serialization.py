"""LRC and JSON serialization for lyric sequences."""

import re
from typing import List

from .models import LyricLine, LyricSequence

_LINE_BREAKS_RE = re.compile(r"\r\n|\r|\n")


def clean_line_text(text: str) -> str:
    """Fold a line's text onto one line and strip surrounding whitespace.

    An LRC record ends at the first line break, and the parser strips each
    record before reading it.
    """
    return _LINE_BREAKS_RE.sub(" ", text or "").strip()


def format_lrc_time(seconds: float) -> str:
    """Format seconds as ``mm:ss.xx``.

    Minutes are padded to two digits but never capped, so long tracks
    render as ``123:04.50``.
    """
    centiseconds = max(int(round(seconds * 100)), 0)
    minutes, centiseconds = divmod(centiseconds, 6000)
    return f"{minutes:02d}:{centiseconds / 100:05.2f}"


def serialize_lyrics(lyrics: LyricSequence, monotonic: bool = True) -> str:
    """Render lyric lines as LRC text, one ``[mm:ss.xx] text`` record per line.

    Untimed lines reuse the last emitted timestamp (0 before any timed
    line). With ``monotonic`` set, a line marked earlier than its
    predecessor is clamped up so the emitted stream never goes backwards.
    """
    last = 0.0
    records: List[str] = []
    for line in lyrics:
        if line.start_time is not None:
            last = max(line.start_time, last) if monotonic else line.start_time
        records.append(f"[{format_lrc_time(last)}] {clean_line_text(line.text)}\n")
    return "".join(records)


def lines_to_json(lyrics: LyricSequence) -> List[dict]:
    """Convert lyric lines into JSON-serializable dicts."""
    return [{"start_time": line.start_time, "text": line.text} for line in lyrics]


def lines_from_json(data: List[dict]) -> LyricSequence:
    """Convert JSON data back into lyric lines."""
    lyrics: LyricSequence = []
    for item in data:
        start_time = item.get("start_time")
        lyrics.append(LyricLine(
            start_time=float(start_time) if start_time is not None else None,
            text=item.get("text", ""),
        ))
    return lyrics

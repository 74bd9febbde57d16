"""LRC parsing for the lyrics editor.

This module handles:
- LRC timestamp parsing
- Splitting a lyric line into its timestamp and display text
- Filtering header tags and decorative metadata lines
- Building a lyric sequence from raw or partially timed text
"""

import re
from typing import Optional, Tuple

from .models import LyricLine, LyricSequence
from .normalize import normalize
from ..utils.logging import get_logger

logger = get_logger(__name__)

# ----------------------
# LRC timestamp regex
# ----------------------
_LRC_TS_RE = re.compile(
    r"""
    ^\[                       # opening bracket
    (?P<min>\d{2,})           # minutes, two or more digits
    :
    (?P<sec>\d{2})            # seconds, exactly two digits
    (?:\.(?P<frac>\d{2}))?    # optional hundredths
    \]                        # closing bracket
    """,
    re.VERBOSE,
)

# ----------------------
# LRC header tags
# ----------------------
_HEADER_TAG_RE = re.compile(
    r"^\[(?:ar|ti|al|au|by|offset|length|re|ve|tool)\s*:[^\]]*\]\s*$",
    re.IGNORECASE,
)

_LINE_BREAK_RE = re.compile(r"\r?\n")


def parse_lrc_timestamp(ts: str) -> Optional[float]:
    """Convert a ``[mm:ss.xx]`` token to seconds, or ``None`` if malformed."""
    if not ts:
        return None
    match = _LRC_TS_RE.match(ts.strip())
    if not match:
        return None
    return _match_to_seconds(match)


def _match_to_seconds(match: "re.Match[str]") -> Optional[float]:
    minutes = int(match.group("min"))
    seconds = int(match.group("sec"))
    if seconds >= 60:
        return None
    frac = match.group("frac")
    frac_seconds = int(frac) / (10 ** len(frac)) if frac else 0.0
    return minutes * 60 + seconds + frac_seconds


def split_timestamp(line: str) -> Tuple[Optional[float], str]:
    """Split a lyric line into its leading timestamp and remaining text.

    A malformed token is not an error: lyric sources are free text, so the
    token simply stays part of the text and the line is reported untimed.
    """
    match = _LRC_TS_RE.match(line)
    if match:
        start_time = _match_to_seconds(match)
        if start_time is not None:
            return start_time, line[match.end():].strip()
    return None, line.strip()


def is_header_tag(line: str) -> bool:
    """Check if line is an LRC header tag such as ``[ar:Artist]``."""
    return _HEADER_TAG_RE.match(line.strip()) is not None


def is_metadata_line(text: str) -> bool:
    """Check if text carries no lyric content in any script."""
    return not any(c.isalnum() for c in text)


def parse_lyrics(
    text: str, clean_lyrics: bool = False, keep_plain_text: bool = False
) -> Optional[LyricSequence]:
    """Parse lyrics text into a sequence of lyric lines.

    Args:
        text: Raw or LRC-formatted lyrics
        clean_lyrics: Drop lines without any alphanumeric content
        keep_plain_text: Keep lines that have no timestamp, untimed

    Returns:
        The parsed lines, or None when nothing usable remains.
    """
    if not text:
        return None

    lyrics: LyricSequence = []
    dropped = 0
    for raw_line in _LINE_BREAK_RE.split(text):
        line = raw_line.strip()
        if not line or is_header_tag(line):
            continue

        start_time, line_text = split_timestamp(line)

        if start_time is None and not keep_plain_text:
            dropped += 1
            continue

        if clean_lyrics and is_metadata_line(line_text):
            dropped += 1
            continue

        lyrics.append(LyricLine(start_time=start_time, text=line_text))

    if dropped:
        logger.debug(f"Dropped {dropped} line(s) while parsing lyrics")

    if not lyrics:
        return None
    return lyrics


def init_lyrics(text: str) -> LyricSequence:
    """Build an editable sequence from raw, pasted or imported text."""
    lyrics = parse_lyrics(normalize(text), clean_lyrics=True, keep_plain_text=True)
    return lyrics or []

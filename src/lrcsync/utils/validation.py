"""Validation utilities."""

import logging
import math
import re
from pathlib import Path

from ..config import LRC_EXTENSION, MAX_FILENAME_LENGTH, PLAYBACK_RATES
from ..exceptions import IncompleteTimingError, ValidationError

logger = logging.getLogger(__name__)


def validate_playback_rate(rate: float) -> float:
    """Validate playback rate parameter."""
    if rate not in PLAYBACK_RATES:
        allowed = ", ".join(f"{r:g}" for r in PLAYBACK_RATES)
        raise ValidationError(f"Playback rate must be one of: {allowed}")
    return float(rate)


def validate_start_time(start_time):
    """Validate a line start time; ``None`` clears the timestamp."""
    if start_time is None:
        return None
    if isinstance(start_time, bool) or not isinstance(start_time, (int, float)):
        raise ValidationError(f"Start time must be a number, got {start_time!r}")
    if math.isnan(start_time) or math.isinf(start_time):
        raise ValidationError("Start time must be finite")
    if start_time < 0:
        raise ValidationError("Start time must be non-negative")
    return float(start_time)


def validate_complete_timing(lyrics) -> None:
    """Validate that every line carries a timestamp before saving."""
    untimed = [idx for idx, line in enumerate(lyrics) if not line.is_timed]
    if untimed:
        logger.debug(
            "Refusing to save: %d untimed line(s), first at %d",
            len(untimed),
            untimed[0],
        )
        raise IncompleteTimingError(len(untimed), untimed[0])


def validate_output_path(path: str) -> Path:
    """Validate and normalize an LRC output path."""
    output_path = Path(path)

    # Check if parent directory exists or can be created
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ValidationError(f"Cannot create output directory: {e}")

    if output_path.suffix.lower() not in [LRC_EXTENSION, ".txt", ".json"]:
        raise ValidationError("Output file must have .lrc, .txt, or .json extension")

    return output_path


def sanitize_filename(name: str) -> str:
    """Remove invalid characters from filename."""
    # Remove invalid characters
    sanitized = re.sub(r'[<>:"/\\|?*]', "", name)
    # Limit length
    return sanitized[:MAX_FILENAME_LENGTH].strip()

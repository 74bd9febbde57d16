"""Configuration settings for lrcsync."""

import os
from pathlib import Path

from .exceptions import ConfigError

# Directories
DEFAULT_LYRICS_DIR = Path.home() / ".local" / "share" / "lrcsync"

# Text encoding for imported and downloaded lyrics files
DEFAULT_ENCODING = os.getenv("LRCSYNC_ENCODING", "utf-8")

# Playback rates offered while editing
PLAYBACK_RATES = (0.5, 0.75, 1.0, 1.25, 1.5)
DEFAULT_PLAYBACK_RATE = 1.0

# Output files
LRC_EXTENSION = ".lrc"
MAX_FILENAME_LENGTH = 100

def validate_config() -> None:
    """Validate configuration values."""
    if DEFAULT_PLAYBACK_RATE not in PLAYBACK_RATES:
        raise ConfigError("Default playback rate must be one of the offered rates")

    if any(rate <= 0 for rate in PLAYBACK_RATES):
        raise ConfigError("Playback rates must be positive")

    try:
        "".encode(DEFAULT_ENCODING)
    except LookupError:
        raise ConfigError(f"Unknown text encoding: {DEFAULT_ENCODING}")

def get_lyrics_dir() -> Path:
    """Get saved-lyrics directory from environment or default."""
    lyrics_dir = os.getenv("LRCSYNC_LYRICS_DIR")
    if lyrics_dir:
        return Path(lyrics_dir)
    return DEFAULT_LYRICS_DIR

# Validate config on import
validate_config()

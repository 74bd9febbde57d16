"""Custom exceptions for lrcsync."""

from typing import Optional


class LrcSyncError(Exception):
    """Base exception for lrcsync."""
    pass

class ConfigError(LrcSyncError):
    """Invalid configuration value."""
    pass

class LyricsError(LrcSyncError):
    """Error reading or importing lyrics."""
    pass

class ValidationError(LrcSyncError):
    """Invalid input parameters."""
    pass

class IncompleteTimingError(ValidationError):
    """Lyrics cannot be saved while some lines are still untimed."""

    def __init__(self, untimed_count: int, first_untimed_index: Optional[int] = None):
        self.untimed_count = untimed_count
        self.first_untimed_index = first_untimed_index
        message = f"{untimed_count} line(s) have no timestamp yet"
        if first_untimed_index is not None:
            message += f" (first is line {first_untimed_index + 1})"
        super().__init__(message)

class StoreError(LrcSyncError):
    """Error with lyrics store operations."""
    pass

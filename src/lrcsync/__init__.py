"""lrcsync - align plain lyrics to playback time and edit LRC timing."""

__version__ = "0.1.0"

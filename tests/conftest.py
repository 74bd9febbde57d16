"""Test configuration and fixtures.

Provides reusable fixtures for:
- Temporary files and directories
- A controllable playback source
- Sample raw and synced lyrics
- Editor sessions backed by an in-memory store
"""

import logging
import tempfile
from pathlib import Path

import pytest

from lrcsync.core.editor import EditorSession
from lrcsync.core.models import LyricLine, TrackInfo
from lrcsync.core.store import MemoryStore


# =============================================================================
# Basic Fixtures
# =============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class FakePlayback:
    """Playback source whose position the test sets directly."""

    def __init__(self, current_time=0.0):
        self.current_time = current_time
        self.playback_rate = 1.0
        self.loop = False


@pytest.fixture
def playback():
    return FakePlayback()


@pytest.fixture
def track():
    return TrackInfo(name="Song", artists="Artist")


@pytest.fixture
def store():
    return MemoryStore()


# =============================================================================
# Lyrics Fixtures
# =============================================================================


@pytest.fixture
def raw_lyrics():
    """Plain lyrics as pasted from a lyrics site."""
    return (
        "First line\n"
        "\n"
        "\n"
        "Second line\r\n"
        "\r\n"
        "\r\n"
        "♪ ♪ ♪\n"
        "Third line\n"
    )


@pytest.fixture
def synced_lyrics():
    """Fully timed LRC document with header tags."""
    return (
        "[ar:Artist]\n"
        "[ti:Song]\n"
        "[00:01.50] First line\n"
        "[00:04.00] Second line\n"
        "[01:02.25] Third line\n"
    )


@pytest.fixture
def make_session(playback, track, store):
    """Build an editor session over the given lines."""

    def _make(lines=None, text=""):
        session = EditorSession(playback, track, text=text, store=store)
        if lines is not None:
            session.reset_local([LyricLine(start_time=t, text=s) for t, s in lines])
        return session

    return _make


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attaches to streams that close after each invoke."""
    yield
    logger = logging.getLogger("lrcsync")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)

"""Playback position sources for the lyrics editor."""

import time
from typing import Callable, Optional, Protocol

from ..utils.logging import get_logger

logger = get_logger(__name__)


class PlaybackSource(Protocol):
    """Audio position provider the editor marks against and seeks."""

    current_time: float
    playback_rate: float
    loop: bool


class ClockPlayback:
    """Wall-clock stand-in for an audio element.

    Elapsed time is scaled by ``playback_rate``. With a known ``duration``
    the position wraps around when ``loop`` is set and stops at the end
    otherwise.
    """

    def __init__(
        self,
        duration: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.duration = duration
        self.loop = False
        self._clock = clock
        self._rate = 1.0
        self._offset = 0.0
        self._anchor = clock()
        self._paused = False

    def _elapsed(self) -> float:
        if self._paused:
            return self._offset
        return self._offset + (self._clock() - self._anchor) * self._rate

    @property
    def current_time(self) -> float:
        position = self._elapsed()
        if self.duration:
            if self.loop:
                position %= self.duration
            else:
                position = min(position, self.duration)
        return position

    @current_time.setter
    def current_time(self, value: float) -> None:
        self._offset = max(float(value), 0.0)
        self._anchor = self._clock()
        logger.debug(f"Seek to {self._offset:.2f}s")

    @property
    def playback_rate(self) -> float:
        return self._rate

    @playback_rate.setter
    def playback_rate(self, value: float) -> None:
        # Re-anchor so time already played keeps its old rate.
        self._offset = self._elapsed()
        self._anchor = self._clock()
        self._rate = float(value)

    @property
    def paused(self) -> bool:
        return self._paused

    def pause(self) -> None:
        if not self._paused:
            self._offset = self._elapsed()
            self._paused = True

    def play(self) -> None:
        if self._paused:
            self._anchor = self._clock()
            self._paused = False

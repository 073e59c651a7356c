"""
Game clock that follows the board's pause and end states
"""

import time
from typing import Optional

from game import GameState


class GameClock:
    """Tracks elapsed play time, excluding the spans spent paused"""

    def __init__(self):
        self.start_time: Optional[float] = None
        self.paused_at: Optional[float] = None
        self.stopped_at: Optional[float] = None
        self.paused_total = 0.0

    @property
    def running(self) -> bool:
        return self.start_time is not None and self.paused_at is None and self.stopped_at is None

    def start(self):
        self.start_time = time.monotonic()
        self.paused_at = None
        self.stopped_at = None
        self.paused_total = 0.0

    def pause(self):
        if self.running:
            self.paused_at = time.monotonic()

    def resume(self):
        if self.paused_at is not None and self.stopped_at is None:
            self.paused_total += time.monotonic() - self.paused_at
            self.paused_at = None

    def stop(self):
        if self.start_time is None or self.stopped_at is not None:
            return
        self.resume()
        self.stopped_at = time.monotonic()

    def reset(self):
        self.start_time = None
        self.paused_at = None
        self.stopped_at = None
        self.paused_total = 0.0

    def elapsed(self) -> int:
        """Whole seconds of play so far"""
        if self.start_time is None:
            return 0
        if self.stopped_at is not None:
            end = self.stopped_at
        elif self.paused_at is not None:
            end = self.paused_at
        else:
            end = time.monotonic()
        return int(end - self.start_time - self.paused_total)

    def sync(self, state: GameState):
        """Align the clock with the board state after a command"""
        if state == GameState.NOT_STARTED:
            return
        if self.start_time is None:
            self.start()

        if state == GameState.PAUSED:
            self.pause()
        elif state == GameState.IN_PROGRESS:
            self.resume()
        else:
            self.stop()

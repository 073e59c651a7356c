"""Type definitions shared by the board engine and its snapshots."""
from enum import Enum


class GameState(Enum):
    """Enumeration for different game states"""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    PAUSED = "paused"
    WON = "won"
    LOST = "lost"


class CellState(Enum):
    """Enumeration for cell states"""
    HIDDEN = "hidden"
    REVEALED = "revealed"
    FLAGGED = "flagged"


class Direction(Enum):
    """Cursor movement directions as (dx, dy) offsets"""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

"""
Read-only board views for the presentation layer
"""

from dataclasses import dataclass
from typing import Optional, Tuple, List

import numpy as np

from .types import GameState, CellState


# Visible values used by to_array()
HIDDEN_VALUE = -3
FLAG_VALUE = -2
MINE_VALUE = -1


@dataclass(frozen=True)
class TileView:
    """What the player is allowed to know about one cell"""
    x: int
    y: int
    state: CellState
    adjacent_mines: Optional[int] = None
    has_mine: Optional[bool] = None
    exploded: bool = False
    wrong_flag: bool = False

    @property
    def visible_value(self) -> int:
        """-3=hidden, -2=flag, -1=mine, 0-8=numbers"""
        if self.state == CellState.FLAGGED:
            return FLAG_VALUE
        if self.state == CellState.REVEALED:
            return MINE_VALUE if self.has_mine else self.adjacent_mines
        return HIDDEN_VALUE


@dataclass(frozen=True)
class BoardSnapshot:
    """Immutable view of the board taken once per render frame"""
    width: int
    height: int
    cursor: Tuple[int, int]
    state: GameState
    total_mines: int
    flags_used: int
    mines_remaining: int
    tiles: Tuple[TileView, ...]

    def tile(self, x: int, y: int) -> TileView:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Tile ({x}, {y}) not on a {self.width}x{self.height} board")
        return self.tiles[y * self.width + x]

    def rows(self) -> List[Tuple[TileView, ...]]:
        """Tiles grouped into rows, top to bottom"""
        return [self.tiles[y * self.width:(y + 1) * self.width] for y in range(self.height)]

    @property
    def is_over(self) -> bool:
        return self.state in (GameState.WON, GameState.LOST)

    def to_array(self) -> np.ndarray:
        """
        Get the board as a numpy array

        Encoding for solvers and agents driving the engine without a
        terminal; the game and UI do not call it.

        Returns:
            3D numpy array: [height, width, channels]
            Channels:
            0: Visible state (-3=hidden, -2=flag, -1=mine, 0-8=numbers)
            1: Is revealed (0 or 1)
            2: Is flagged (0 or 1)
        """
        visible = np.array([tile.visible_value for tile in self.tiles], dtype=np.float32)
        states = [tile.state for tile in self.tiles]
        revealed = np.array([state == CellState.REVEALED for state in states], dtype=np.float32)
        flagged = np.array([state == CellState.FLAGGED for state in states], dtype=np.float32)

        board_array = np.stack([visible, revealed, flagged], axis=-1)
        return board_array.reshape(self.height, self.width, 3)

"""
Pytest configuration and shared fixtures.
"""
import pytest

from game import GameBoard, GameState


def _rig(width, height, mines):
    board = GameBoard(width, height, len(mines))
    for x, y in mines:
        board.get_cell(x, y).place_mine()
    board._calculate_adjacent_mines()
    board.mines_placed = True
    board.game_state = GameState.IN_PROGRESS
    return board


@pytest.fixture
def rigged_board():
    """Factory for an in-progress board with mines at known (x, y) positions."""
    return _rig


@pytest.fixture
def corner_mine_board():
    """3x3 board with a single mine in the top-left corner."""
    return _rig(3, 3, [(0, 0)])


@pytest.fixture
def top_row_board():
    """3x3 board with the whole top row mined, the centre shows a 3."""
    return _rig(3, 3, [(0, 0), (1, 0), (2, 0)])


@pytest.fixture
def wall_board():
    """5x5 board split by a column of mines at x=2."""
    return _rig(5, 5, [(2, y) for y in range(5)])

"""
Unit tests for board snapshots
Tests what the presentation layer can see at each stage of a game
"""

import dataclasses

import numpy as np
import pytest
from game import GameBoard, GameState, CellState, BoardSnapshot


class TestSnapshotVisibility:
    """Test cases for hiding and exposing mines"""

    def test_fresh_board(self):
        """Test snapshot of a fresh board"""
        snapshot = GameBoard(4, 3, 2).snapshot()

        assert isinstance(snapshot, BoardSnapshot)
        assert snapshot.state == GameState.NOT_STARTED
        assert (snapshot.width, snapshot.height) == (4, 3)
        assert snapshot.cursor == (2, 1)
        assert len(snapshot.tiles) == 12
        for tile in snapshot.tiles:
            assert tile.state == CellState.HIDDEN
            assert tile.has_mine is None
            assert tile.adjacent_mines is None

    def test_in_progress_hides_mines(self, corner_mine_board):
        """Test that mines stay hidden during play"""
        corner_mine_board.dig(1, 1)
        corner_mine_board.toggle_flag(0, 0)

        snapshot = corner_mine_board.snapshot()

        flagged = snapshot.tile(0, 0)
        assert flagged.state == CellState.FLAGGED
        assert flagged.has_mine is None
        assert flagged.wrong_flag is False
        assert snapshot.tile(2, 2).has_mine is None

        revealed = snapshot.tile(1, 1)
        assert revealed.adjacent_mines == 1
        assert revealed.has_mine is False

    def test_lost_exposes_mines_and_wrong_flags(self, rigged_board):
        """Test that a lost game exposes mines and wrong flags"""
        board = rigged_board(3, 3, [(0, 0), (2, 2)])
        board.toggle_flag(1, 1)
        board.dig(2, 2)

        snapshot = board.snapshot()

        assert snapshot.state == GameState.LOST
        assert snapshot.is_over is True
        assert snapshot.tile(0, 0).has_mine is True
        assert snapshot.tile(0, 0).exploded is False
        assert snapshot.tile(2, 2).exploded is True
        assert snapshot.tile(1, 1).wrong_flag is True
        assert snapshot.tile(2, 0).has_mine is False

    def test_won_exposes_mines(self, rigged_board):
        """Test that a won game exposes mines"""
        board = rigged_board(2, 2, [(1, 1)])
        for x, y in [(0, 0), (1, 0), (0, 1)]:
            board.dig(x, y)

        snapshot = board.snapshot()

        assert snapshot.state == GameState.WON
        assert snapshot.tile(1, 1).has_mine is True
        assert snapshot.tile(1, 1).state == CellState.FLAGGED
        assert snapshot.mines_remaining == 0
        assert snapshot.flags_used == 1

    def test_counts(self, rigged_board):
        """Test snapshot flag and mine counts"""
        board = rigged_board(3, 3, [(0, 0), (2, 2)])
        board.toggle_flag(0, 0)

        snapshot = board.snapshot()

        assert snapshot.total_mines == 2
        assert snapshot.flags_used == 1
        assert snapshot.mines_remaining == 1

    def test_snapshot_is_immutable_copy(self, corner_mine_board):
        """Test that a snapshot does not change with the board"""
        snapshot = corner_mine_board.snapshot()

        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.state = GameState.WON
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.tiles[0].has_mine = True

        corner_mine_board.dig(1, 1)
        assert snapshot.tile(1, 1).state == CellState.HIDDEN


class TestSnapshotAccess:
    """Test cases for snapshot helpers"""

    def test_tile_lookup(self):
        """Test looking up a tile"""
        snapshot = GameBoard(4, 3, 2).snapshot()
        tile = snapshot.tile(3, 2)
        assert (tile.x, tile.y) == (3, 2)

    def test_tile_out_of_range(self):
        """Test looking up a tile outside the board"""
        snapshot = GameBoard(4, 3, 2).snapshot()
        with pytest.raises(IndexError):
            snapshot.tile(4, 0)
        with pytest.raises(IndexError):
            snapshot.tile(0, -1)

    def test_rows(self):
        """Test iterating snapshot rows"""
        rows = GameBoard(4, 3, 2).snapshot().rows()

        assert len(rows) == 3
        assert all(len(row) == 4 for row in rows)
        assert [tile.y for tile in rows[2]] == [2, 2, 2, 2]
        assert [tile.x for tile in rows[1]] == [0, 1, 2, 3]


class TestSnapshotArray:
    """Test cases for the numpy encoding"""

    def test_array_shape_and_values(self, corner_mine_board):
        """Test array shape and values"""
        corner_mine_board.dig(1, 1)
        corner_mine_board.toggle_flag(0, 0)

        array = corner_mine_board.snapshot().to_array()

        assert array.shape == (3, 3, 3)
        assert array.dtype == np.float32
        # indexed [y, x, channel]
        assert array[1, 1, 0] == 1
        assert array[1, 1, 1] == 1
        assert array[0, 0, 0] == -2
        assert array[0, 0, 2] == 1
        assert array[2, 2, 0] == -3
        assert array[2, 2, 1] == 0

    def test_array_marks_revealed_mine(self, corner_mine_board):
        """Test array marks a revealed mine"""
        corner_mine_board.dig(0, 0)

        array = corner_mine_board.snapshot().to_array()

        assert array[0, 0, 0] == -1
        assert array[0, 0, 1] == 1

    def test_array_non_square(self, wall_board):
        """Test array of a non-square board"""
        wall_board.dig(0, 0)
        board = GameBoard(6, 2, 1)

        assert board.snapshot().to_array().shape == (2, 6, 3)
        zeros = wall_board.snapshot().to_array()[:, 0, 0]
        np.testing.assert_array_equal(zeros, np.zeros(5, dtype=np.float32))

"""
Minesweeper Game - Core Game Logic
Implements the game mechanics and board management for minesweeper
"""

import logging
import random
from typing import List, Tuple, Optional, Iterator

from .config import DIFFICULTIES, InvalidConfiguration, validate_dimensions
from .snapshot import BoardSnapshot, TileView
from .types import GameState, CellState, Direction


logger = logging.getLogger(__name__)


class Cell:
    """Represents a single cell on the minesweeper board"""

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        self.is_mine = False
        self.state = CellState.HIDDEN
        self.adjacent_mines = 0

    def place_mine(self):
        """Place a mine in this cell"""
        self.is_mine = True

    def reveal(self) -> bool:
        """Reveal this cell, returns True if it was hidden"""
        if self.state == CellState.HIDDEN:
            self.state = CellState.REVEALED
            return True
        return False

    def toggle_flag(self):
        """Toggle flag state on this cell"""
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        elif self.state == CellState.FLAGGED:
            self.state = CellState.HIDDEN

    def is_revealed(self) -> bool:
        """Check if cell is revealed"""
        return self.state == CellState.REVEALED

    def is_flagged(self) -> bool:
        """Check if cell is flagged"""
        return self.state == CellState.FLAGGED

    def is_hidden(self) -> bool:
        """Check if cell is hidden"""
        return self.state == CellState.HIDDEN

    def __repr__(self):
        return f"Cell({self.x}, {self.y}, {self.state.value})"


class GameBoard:
    """Manages the minesweeper game board and game logic"""

    # Difficulty presets (width, height, mines)
    DIFFICULTIES = DIFFICULTIES

    # States in which the board accepts no tile mutation
    FROZEN_STATES = (GameState.PAUSED, GameState.WON, GameState.LOST)

    def __init__(self, width: int = 9, height: int = 9, mines: int = 10,
                 seed: Optional[int] = None):
        validate_dimensions(width, height, mines)

        self.width = width
        self.height = height
        self.total_mines = mines
        self.rng = random.Random(seed)
        self.cells: List[Cell] = []
        self.game_state = GameState.NOT_STARTED
        self.mines_placed = False
        self.flags_used = 0
        self.cells_revealed = 0
        self.exploded_pos: Optional[Tuple[int, int]] = None
        self.cursor = (width // 2, height // 2)

        self._initialize_board()

    def _initialize_board(self):
        """Initialize empty board without mines"""
        self.cells = [Cell(index % self.width, index // self.width)
                      for index in range(self.width * self.height)]

    def _index(self, x: int, y: int) -> int:
        """Position of (x, y) in the row-major cell list"""
        return y * self.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if (x, y) lies on the board"""
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at specified position, None when out of bounds"""
        if self.in_bounds(x, y):
            return self.cells[self._index(x, y)]
        return None

    def neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        """Yield the grid-bounded positions around (x, y)"""
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                nx, ny = x + dx, y + dy
                if self.in_bounds(nx, ny):
                    yield nx, ny

    def _place_mines(self, first_x: int, first_y: int):
        """
        Place mines randomly, avoiding the first dig.

        The first dig and its neighbours are kept clear when enough other
        cells remain for every mine; otherwise only the dug cell is kept clear.
        """
        safe_positions = {(first_x, first_y)}
        opening = safe_positions | set(self.neighbors(first_x, first_y))
        if self.width * self.height - len(opening) >= self.total_mines:
            safe_positions = opening

        candidates = [(cell.x, cell.y) for cell in self.cells
                      if (cell.x, cell.y) not in safe_positions]

        for x, y in self.rng.sample(candidates, self.total_mines):
            self.cells[self._index(x, y)].place_mine()

        self._calculate_adjacent_mines()
        self.mines_placed = True
        logger.info("Placed %d mines on %dx%d board, first dig at (%d, %d), safe area %d cells",
                    self.total_mines, self.width, self.height, first_x, first_y,
                    len(safe_positions))

    def _calculate_adjacent_mines(self):
        """Calculate the number of adjacent mines for each cell"""
        for cell in self.cells:
            cell.adjacent_mines = sum(
                1 for nx, ny in self.neighbors(cell.x, cell.y)
                if self.cells[self._index(nx, ny)].is_mine
            )

    def dig(self, x: int, y: int) -> bool:
        """
        Dig a cell and handle game logic

        Mines are placed on the first dig. Digging a cell with no adjacent
        mines cascades into its neighbours.

        Returns True if game should continue, False if game over
        """
        if self.game_state in (GameState.WON, GameState.LOST):
            return False
        if self.game_state == GameState.PAUSED:
            logger.debug("Ignoring dig at (%d, %d) while paused", x, y)
            return True

        cell = self.get_cell(x, y)
        if cell is None or not cell.is_hidden():
            logger.debug("Ignoring dig at (%d, %d)", x, y)
            return True

        if not self.mines_placed:
            self._place_mines(x, y)
            self.game_state = GameState.IN_PROGRESS

        if cell.is_mine:
            cell.reveal()
            self.exploded_pos = (x, y)
            self.game_state = GameState.LOST
            logger.info("Mine hit at (%d, %d), game lost", x, y)
            return False

        self._flood_reveal(x, y)

        if self._check_win_condition():
            self.game_state = GameState.WON
            self._flag_all_mines()
            logger.info("All safe cells revealed, game won")
            return False

        return True

    def _flood_reveal(self, x: int, y: int):
        """Reveal (x, y) and cascade through zero-count cells using a worklist"""
        stack = [self._index(x, y)]
        while stack:
            cell = self.cells[stack.pop()]
            if not cell.reveal():
                continue
            self.cells_revealed += 1

            if cell.adjacent_mines != 0:
                continue
            for nx, ny in self.neighbors(cell.x, cell.y):
                index = self._index(nx, ny)
                if self.cells[index].is_hidden():
                    stack.append(index)

    def toggle_flag(self, x: int, y: int):
        """Toggle flag on a cell"""
        if self.game_state in self.FROZEN_STATES:
            return

        cell = self.get_cell(x, y)
        if not cell or cell.is_revealed():
            return

        cell.toggle_flag()

        # Update flag count
        if cell.is_flagged():
            self.flags_used += 1
        else:
            self.flags_used -= 1

    def chord(self, x: int, y: int) -> bool:
        """
        Dig every hidden neighbour of a revealed number once it is
        surrounded by the same number of flags.

        Returns True if any neighbour was dug.
        """
        if self.game_state != GameState.IN_PROGRESS:
            return False

        cell = self.get_cell(x, y)
        if not cell or not cell.is_revealed() or cell.adjacent_mines == 0:
            return False

        around = [self.cells[self._index(nx, ny)] for nx, ny in self.neighbors(x, y)]
        flagged = sum(1 for neighbor in around if neighbor.is_flagged())
        if flagged != cell.adjacent_mines:
            logger.debug("Chord at (%d, %d) skipped: %d flags for %d mines",
                         x, y, flagged, cell.adjacent_mines)
            return False

        for neighbor in around:
            if neighbor.is_hidden() and not self.dig(neighbor.x, neighbor.y):
                break
        return True

    def toggle_pause(self):
        """Pause or resume a game in progress"""
        if self.game_state == GameState.IN_PROGRESS:
            self.game_state = GameState.PAUSED
        elif self.game_state == GameState.PAUSED:
            self.game_state = GameState.IN_PROGRESS

    def move_cursor(self, direction: Direction):
        """Move the cursor one cell, clamped to the board edges"""
        dx, dy = direction.value
        x, y = self.cursor
        self.cursor = (min(max(x + dx, 0), self.width - 1),
                       min(max(y + dy, 0), self.height - 1))

    def dig_at_cursor(self) -> bool:
        """Dig the cell under the cursor"""
        return self.dig(*self.cursor)

    def flag_at_cursor(self):
        """Toggle the flag under the cursor"""
        self.toggle_flag(*self.cursor)

    def chord_at_cursor(self) -> bool:
        """Chord the cell under the cursor"""
        return self.chord(*self.cursor)

    def _flag_all_mines(self):
        """Flag all mines when game is won"""
        for cell in self.cells:
            if cell.is_mine and cell.is_hidden():
                cell.state = CellState.FLAGGED
                self.flags_used += 1

    def _check_win_condition(self) -> bool:
        """Check if the player has won"""
        total_safe_cells = self.width * self.height - self.total_mines
        return self.cells_revealed == total_safe_cells

    def get_remaining_mines(self) -> int:
        """Get the number of remaining mines (total mines - flags used)"""
        return max(0, self.total_mines - self.flags_used)

    def is_game_over(self) -> bool:
        """Check if the game is won or lost"""
        return self.game_state in (GameState.WON, GameState.LOST)

    def snapshot(self) -> BoardSnapshot:
        """
        Build a read-only view of the board for rendering.

        Mine locations under hidden or flagged cells are only exposed once
        the game is won or lost.
        """
        exposed = self.is_game_over()
        lost = self.game_state == GameState.LOST

        tiles = []
        for cell in self.cells:
            revealed = cell.is_revealed()
            tiles.append(TileView(
                x=cell.x,
                y=cell.y,
                state=cell.state,
                adjacent_mines=cell.adjacent_mines if revealed and not cell.is_mine else None,
                has_mine=cell.is_mine if revealed or exposed else None,
                exploded=self.exploded_pos == (cell.x, cell.y),
                wrong_flag=lost and cell.is_flagged() and not cell.is_mine,
            ))

        return BoardSnapshot(
            width=self.width,
            height=self.height,
            cursor=self.cursor,
            state=self.game_state,
            total_mines=self.total_mines,
            flags_used=self.flags_used,
            mines_remaining=self.get_remaining_mines(),
            tiles=tuple(tiles),
        )

    def reset_game(self, difficulty: Optional[str] = None):
        """Reset the game to initial state"""
        if difficulty is not None:
            if difficulty not in self.DIFFICULTIES:
                raise InvalidConfiguration(
                    f"Unknown difficulty: {difficulty}. Use one of {list(self.DIFFICULTIES)}")
            preset = self.DIFFICULTIES[difficulty]
            self.width, self.height, self.total_mines = preset.width, preset.height, preset.mines
        self.game_state = GameState.NOT_STARTED
        self.mines_placed = False
        self.flags_used = 0
        self.cells_revealed = 0
        self.exploded_pos = None
        self.cursor = (self.width // 2, self.height // 2)
        self._initialize_board()

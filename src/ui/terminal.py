"""
Minesweeper Terminal UI
Renders the board with rich and drives it from raw keyboard input
"""

import contextlib
import logging
import os
import select
import sys
import termios
import tty
from typing import Dict, Optional

from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from game import GameBoard, GameState, CellState, Direction, BoardSnapshot, TileView
from .clock import GameClock


logger = logging.getLogger(__name__)

# Colours for the digits 1-8
NUMBER_COLORS = [
    'bright_blue',
    'green',
    'bright_red',
    'blue',
    'red',
    'cyan',
    'white',
    'bright_black',
]

MOVE_KEYS: Dict[str, Direction] = {
    'up': Direction.UP,
    'down': Direction.DOWN,
    'left': Direction.LEFT,
    'right': Direction.RIGHT,
    'k': Direction.UP,
    'j': Direction.DOWN,
    'h': Direction.LEFT,
    'l': Direction.RIGHT,
}

DIG_KEYS = (' ', '\r', '\n')
FLAG_KEY = 'f'
CHORD_KEY = 'd'
PAUSE_KEY = 'p'
NEW_GAME_KEY = 'r'
QUIT_KEY = 'q'

# Final byte of the ANSI cursor key sequences (ESC [ A / ESC O A)
ESCAPE_ARROWS = {'A': 'up', 'B': 'down', 'C': 'right', 'D': 'left'}

HELP_TEXT = "arrows/hjkl move  space dig  f flag  d chord  p pause  r new  q quit"


def tile_glyph(tile: TileView, state: GameState) -> Text:
    """Get the character representation of a tile"""
    if tile.state == CellState.FLAGGED:
        if tile.wrong_flag:
            return Text('!', style='bold red')
        return Text('~', style='bright_magenta')

    if tile.state == CellState.HIDDEN:
        if state == GameState.LOST and tile.has_mine:
            return Text('X', style='red')
        return Text('#')

    if tile.has_mine:
        return Text('X', style='bold white on red' if tile.exploded else 'bold red')
    if tile.adjacent_mines:
        return Text(str(tile.adjacent_mines), style=NUMBER_COLORS[tile.adjacent_mines - 1])
    return Text(' ')


class TerminalUI:
    """Main terminal class for the minesweeper game"""

    def __init__(self, board: GameBoard, console: Optional[Console] = None):
        self.board = board
        self.clock = GameClock()
        self.console = console or Console()

    def handle_key(self, key: str) -> bool:
        """
        Apply one key press to the board

        Returns False when the player asked to quit
        """
        if len(key) == 1:
            key = key.lower()

        if key == QUIT_KEY:
            logger.info("Quit requested in state %s", self.board.game_state.value)
            return False

        if key in MOVE_KEYS:
            self.board.move_cursor(MOVE_KEYS[key])
        elif key in DIG_KEYS:
            self.board.dig_at_cursor()
        elif key == FLAG_KEY:
            self.board.flag_at_cursor()
        elif key == CHORD_KEY:
            self.board.chord_at_cursor()
        elif key == PAUSE_KEY:
            self.board.toggle_pause()
        elif key == NEW_GAME_KEY:
            self.board.reset_game()
            self.clock.reset()
            logger.info("New %dx%d game with %d mines",
                        self.board.width, self.board.height, self.board.total_mines)
        else:
            logger.debug("Unbound key %r", key)

        self.clock.sync(self.board.game_state)
        return True

    def _render_field(self, snapshot: BoardSnapshot) -> Text:
        field = Text()
        for y, row in enumerate(snapshot.rows()):
            if y:
                field.append('\n')
            for tile in row:
                glyph = tile_glyph(tile, snapshot.state)
                if (tile.x, tile.y) == snapshot.cursor and not snapshot.is_over:
                    glyph.stylize('reverse')
                field.append_text(glyph)
                field.append(' ')
        return field

    def _status_message(self, snapshot: BoardSnapshot) -> Text:
        elapsed = self.clock.elapsed()
        if snapshot.state == GameState.NOT_STARTED:
            return Text("Dig anywhere to start")
        if snapshot.state == GameState.PAUSED:
            return Text("Paused! Press 'p' to unpause.", style='bold yellow')
        if snapshot.state == GameState.WON:
            return Text(f"Field cleared! You took {elapsed} seconds\n"
                        f"Press 'r' for a new game or 'q' to finish", style='bold green')
        if snapshot.state == GameState.LOST:
            return Text(f"Boom! You took {elapsed} seconds\n"
                        f"Press 'r' for a new game or 'q' to finish", style='bold red')
        return Text("")

    def render(self, snapshot: Optional[BoardSnapshot] = None) -> RenderableType:
        """Build the renderable for one frame"""
        if snapshot is None:
            snapshot = self.board.snapshot()

        side = Text()
        side.append(f"{snapshot.width}x{snapshot.height} field with {snapshot.total_mines} mines\n")
        side.append(f"{snapshot.flags_used} flags used, {snapshot.mines_remaining} mines left\n")
        side.append(f"Time: {self.clock.elapsed()}s\n\n")
        side.append_text(self._status_message(snapshot))

        layout = Table.grid(padding=(0, 3))
        layout.add_column()
        layout.add_column()
        layout.add_row(self._render_field(snapshot), side)

        return Align.center(Panel(
            Group(layout),
            title="Minesweeper",
            subtitle=HELP_TEXT,
            expand=False,
        ))

    @staticmethod
    def read_key(fd: int, timeout: Optional[float] = None) -> Optional[str]:
        """
        Read one key from a terminal in cbreak mode

        Returns 'up'/'down'/'left'/'right' for cursor keys, the character
        otherwise, or None if nothing was typed before the timeout.
        """
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None

        char = os.read(fd, 1).decode(errors='ignore')
        if char != '\x1b':
            return char

        # Cursor keys arrive as ESC [ X or ESC O X, Alt+key as ESC key
        if not select.select([fd], [], [], 0.05)[0]:
            return char
        prefix = os.read(fd, 1).decode(errors='ignore')
        if not prefix:
            return char
        if prefix not in '[O':
            return prefix
        if not select.select([fd], [], [], 0.05)[0]:
            return prefix
        final = os.read(fd, 1).decode(errors='ignore')
        return ESCAPE_ARROWS.get(final, prefix + final)

    @staticmethod
    @contextlib.contextmanager
    def cbreak_terminal(fd: int):
        """Put the terminal in cbreak mode, restoring it on exit"""
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setcbreak(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    def run(self):
        """Play until the player quits"""
        fd = sys.stdin.fileno()
        with self.cbreak_terminal(fd), Live(self.render(), console=self.console,
                                            auto_refresh=False, screen=True) as live:
            while True:
                # Wake up every second so the timer keeps ticking
                key = self.read_key(fd, timeout=1.0)
                if key is not None and not self.handle_key(key):
                    break
                live.update(self.render(), refresh=True)

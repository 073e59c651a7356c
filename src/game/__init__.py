"""
Game package initialization
"""

from .board import GameBoard, Cell
from .config import GameConfig, InvalidConfiguration, DIFFICULTIES, parse_config, resolve_config
from .snapshot import BoardSnapshot, TileView
from .types import GameState, CellState, Direction

__all__ = ['GameBoard', 'GameState', 'CellState', 'Cell', 'Direction',
           'GameConfig', 'InvalidConfiguration', 'DIFFICULTIES', 'parse_config', 'resolve_config',
           'BoardSnapshot', 'TileView']

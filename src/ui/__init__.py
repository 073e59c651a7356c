"""
UI package initialization
"""

from .clock import GameClock
from .terminal import TerminalUI

__all__ = ['GameClock', 'TerminalUI']

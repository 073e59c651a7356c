"""
Minesweeper Game - Main Entry Point
Terminal minesweeper played with the keyboard
"""

import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from ui.cli import main


if __name__ == "__main__":
    main()

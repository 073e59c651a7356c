"""
Command line entry point for terminal minesweeper
"""

import argparse
import logging
import sys
from typing import List, Optional

from game import GameBoard, GameConfig, InvalidConfiguration, DIFFICULTIES, resolve_config
from .terminal import TerminalUI


LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser"""
    parser = argparse.ArgumentParser(
        prog='minesweeper',
        description="Terminal Minesweeper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  minesweeper                    # beginner, 9x9 with 10 mines
  minesweeper expert             # 30x16 with 99 mines
  minesweeper custom 20x10_30    # 20 wide, 10 high, 30 mines

Controls:
  arrows / hjkl  move     space  dig      f  flag
  d  chord                p  pause        r  new game     q  quit
        """
    )
    parser.add_argument(
        'difficulty',
        nargs='?',
        default='beginner',
        choices=list(DIFFICULTIES) + ['custom'],
        help="Difficulty preset, or 'custom' followed by WxH_M (default: beginner)"
    )
    parser.add_argument(
        'board',
        nargs='?',
        metavar='WxH_M',
        help="Custom board: width x height _ mines, e.g. 20x10_30"
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help="Random seed for reproducible mine placement"
    )
    parser.add_argument(
        '--log-file',
        default=None,
        help="Write log messages to this file"
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help="Log level used with --log-file (default: INFO)"
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse arguments and resolve the board configuration into args.config"""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.config = resolve_config(args.difficulty, args.board)
    except InvalidConfiguration as e:
        parser.error(str(e))
    return args


def setup_logging(log_file: Optional[str], level: str = 'INFO'):
    """Send logs to a file, the screen belongs to the game"""
    if log_file:
        logging.basicConfig(filename=log_file, level=getattr(logging, level), format=LOG_FORMAT)
    else:
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)


def create_board(config: GameConfig, seed: Optional[int] = None) -> GameBoard:
    return GameBoard(config.width, config.height, config.mines, seed=seed)


def main(argv: Optional[List[str]] = None):
    """Main entry point for the minesweeper game"""
    args = parse_args(argv)
    setup_logging(args.log_file, args.log_level)
    logging.getLogger(__name__).info("Starting %s game (%s), seed=%s",
                                     args.difficulty, args.config, args.seed)

    try:
        game = TerminalUI(create_board(args.config, args.seed))
        game.run()
    except KeyboardInterrupt:
        print("\nGame interrupted by user")
        sys.exit(0)
    except Exception as e:
        logging.getLogger(__name__).exception("Minesweeper crashed")
        print(f"Error running minesweeper: {e}")
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()

"""
Game configuration: difficulty presets and custom board parsing
"""

from dataclasses import dataclass
from typing import Dict, Optional


class InvalidConfiguration(ValueError):
    """Raised for malformed or out-of-range board dimensions or mine counts"""


def validate_dimensions(width: int, height: int, mines: int):
    """Check that a board of width x height can hold the requested mines"""
    for name, value in (('Width', width), ('Height', height), ('Mines', mines)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")
        if value < 1:
            raise InvalidConfiguration(f"{name} must be a positive integer, got {value}")

    if mines >= width * height:
        raise InvalidConfiguration(
            f"Too many mines: {mines} mines do not fit on a {width}x{height} field "
            f"(at most {width * height - 1})")


@dataclass(frozen=True)
class GameConfig:
    """Board dimensions and mine count for one game"""
    width: int
    height: int
    mines: int

    def validate(self) -> 'GameConfig':
        validate_dimensions(self.width, self.height, self.mines)
        return self

    def __str__(self):
        return f"{self.width}x{self.height}_{self.mines}"


# Standard presets, custom boards use the same WxH_M form
DIFFICULTIES: Dict[str, GameConfig] = {
    'beginner': GameConfig(9, 9, 10),
    'intermediate': GameConfig(16, 16, 40),
    'expert': GameConfig(30, 16, 99),
}


def _parse_positive(text: str, name: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise InvalidConfiguration(f"{name} must be a positive integer, got {text!r}") from None
    if value < 1:
        raise InvalidConfiguration(f"{name} must be a positive integer, got {text!r}")
    return value


def parse_config(text: str) -> GameConfig:
    """
    Parse a custom board description of the form 'WxH_M'

    Args:
        text: e.g. '20x10_30' for a 20 wide, 10 high field with 30 mines

    Returns:
        Validated GameConfig

    Raises:
        InvalidConfiguration: if the text is malformed or out of range
    """
    parts = text.strip().split('_')
    if len(parts) != 2:
        raise InvalidConfiguration(f"Expected format: 'WxH_M', got {text!r}")

    geometry = parts[0].lower().split('x')
    if len(geometry) != 2:
        raise InvalidConfiguration(f"Expected format: 'WxH_M', got {text!r}")

    width = _parse_positive(geometry[0], 'Width')
    height = _parse_positive(geometry[1], 'Height')
    mines = _parse_positive(parts[1], 'Mines')

    return GameConfig(width, height, mines).validate()


def resolve_config(difficulty: str = 'beginner', custom: Optional[str] = None) -> GameConfig:
    """Map a difficulty name (or 'custom' plus a WxH_M string) to a GameConfig"""
    if difficulty == 'custom':
        if not custom:
            raise InvalidConfiguration("Custom games need a board description: 'WxH_M'")
        return parse_config(custom)

    if difficulty not in DIFFICULTIES:
        raise InvalidConfiguration(
            f"Unknown difficulty: {difficulty}. Use one of {list(DIFFICULTIES) + ['custom']}")
    if custom:
        raise InvalidConfiguration(f"A board description is only accepted for 'custom', not {difficulty!r}")
    return DIFFICULTIES[difficulty]

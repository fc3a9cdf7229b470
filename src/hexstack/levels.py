"""Level catalog: immutable per-level parameters and the tile palette."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from hexstack.errors import ConfigError

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

# Index in this tuple is the tile's color index.
TILE_COLORS: Tuple[Color, ...] = (
    (255, 107, 107),  # #ff6b6b red
    (78, 205, 196),   # #4ecdc4 teal
    (69, 183, 209),   # #45b7d1 blue
    (249, 202, 36),   # #f9ca24 yellow
    (165, 94, 234),   # #a55eea purple
    (255, 159, 243),  # #ff9ff3 pink
    (46, 213, 115),   # #2ed573 green
)


@dataclass(frozen=True, slots=True)
class LevelDef:
    id: int
    display_name: str
    cols: int
    rows: int
    num_colors: int
    target_score: int
    fill_interval_ms: float
    initial_rows: int
    accent_color: Color

    @property
    def palette(self) -> Tuple[Color, ...]:
        return TILE_COLORS[: self.num_colors]


LEVELS: Tuple[LevelDef, ...] = (
    LevelDef(1, "First Steps", 7, 9, 3, 300, 12000, 4, (78, 205, 196)),
    LevelDef(2, "Getting Warm", 7, 9, 3, 500, 11000, 4, (69, 183, 209)),
    LevelDef(3, "Color Burst", 7, 9, 4, 700, 10000, 5, (247, 220, 111)),
    LevelDef(4, "Wider World", 9, 9, 4, 1000, 10000, 5, (231, 76, 60)),
    LevelDef(5, "Speed Up", 9, 9, 4, 1300, 8000, 5, (155, 89, 182)),
    LevelDef(6, "Rainbow Rush", 9, 11, 5, 1800, 8000, 6, (230, 126, 34)),
    LevelDef(7, "Tall Order", 9, 11, 5, 2200, 7000, 6, (26, 188, 156)),
    LevelDef(8, "Hex Frenzy", 11, 11, 5, 2800, 6500, 6, (233, 30, 99)),
    LevelDef(9, "Chromatic", 11, 11, 6, 3500, 6000, 7, (0, 188, 212)),
    LevelDef(10, "Hex Master", 11, 13, 6, 4500, 5000, 7, (255, 87, 34)),
    LevelDef(11, "Overdrive", 11, 13, 7, 5500, 4500, 8, (205, 220, 57)),
    LevelDef(12, "Infinity", 13, 13, 7, 7000, 4000, 8, (255, 152, 0)),
)

MAX_LEVEL_ID = max(level.id for level in LEVELS)


def get_level(level_id: int) -> LevelDef:
    """Return the level with ``level_id``; unknown ids fall back to the first level."""
    for level in LEVELS:
        if level.id == level_id:
            return level
    return LEVELS[0]


def validate_level(level: LevelDef) -> LevelDef:
    """Reject definitions that cannot produce a valid grid."""
    problems: list[str] = []
    if level.cols < 1 or level.rows < 1:
        problems.append(f"grid must be at least 1x1 (got {level.cols}x{level.rows})")
    if level.num_colors < 1:
        problems.append(f"num_colors must be >= 1 (got {level.num_colors})")
    elif level.num_colors > len(TILE_COLORS):
        problems.append(f"num_colors exceeds palette size {len(TILE_COLORS)} (got {level.num_colors})")
    if level.initial_rows < 0 or level.initial_rows > level.rows:
        problems.append(f"initial_rows must be within 0..{level.rows} (got {level.initial_rows})")
    if level.fill_interval_ms <= 0:
        problems.append(f"fill_interval_ms must be positive (got {level.fill_interval_ms})")
    if problems:
        logger.warning("Rejected level %s: %s", level.id, "; ".join(problems))
        raise ConfigError(f"Invalid level {level.id}: " + "; ".join(problems))
    return level

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# ----- Grid -----
GRID_W, GRID_H = 16, 16
CELL_SIZE = 50
OFFSET = 50                     # margin between window edge and grid
BOARD_W, BOARD_H = GRID_W * CELL_SIZE, GRID_H * CELL_SIZE

# ----- Window -----
WIDTH, HEIGHT = BOARD_W + 2 * OFFSET, BOARD_H + 3 * OFFSET
CAPTION = "Snake"
FPS = 60

# ----- Colors (RGBA) -----
BG        = (73, 98, 58, 191)
GRID_LINE = (200, 200, 200, 50)
BORDER    = (0, 0, 0, 255)
SNAKE     = (200, 122, 255, 255)
TEXT      = (255, 161, 0, 255)
GAME_OVER = (255, 0, 0)

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)

# ----- Scoring -----
SCORE_PER_FOOD = 10
START_LENGTH = 2

# ----- Assets -----
ASSET_DIR = Path(__file__).resolve().parent / "assets"
FOOD_ICON = ASSET_DIR / "apple.bmp"


class Difficulty(Enum):
    """Tick period in milliseconds for each difficulty tier."""
    EASY = 500
    MEDIUM = 300
    HARD = 100

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        """Resolve "Easy" / "Medium" / "Hard"; anything else falls back to Easy."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            logger.warning("Unknown difficulty %r, falling back to Easy", name)
            return cls.EASY

    @property
    def interval_ms(self) -> int:
        return self.value


# ----- Tunables -----
@dataclass
class Config:
    difficulty: str = "Medium"
    seed: Optional[int] = None    # None -> OS entropy
    grid_w: int = GRID_W
    grid_h: int = GRID_H
    fps: int = FPS
    food_icon: Path = FOOD_ICON

    @property
    def interval_ms(self) -> int:
        return Difficulty.from_name(self.difficulty).interval_ms

CFG = Config()

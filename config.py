# config.py
import random
from dataclasses import dataclass
from typing import Optional, Tuple

# ----- Window & grid -----
WIDTH, HEIGHT = 800, 600
SEGMENT_SIZE = 10
TICK_MS = 100

# ----- Scoring -----
FOOD_REWARD = 10
START_CELL = (50, 50)

# ----- Colors -----
SNAKE_COLOR = (80, 200, 80)
FOOD_COLOR = (200, 50, 50)
BG_COLOR = (20, 20, 20)
TEXT_COLOR = (250, 250, 250)
OVERLAY_COLOR = (0, 0, 0, 170)


@dataclass(frozen=True)
class GameConfig:
    """
    Tunables for one game. Sizes and cells are in pixels on a grid whose
    pitch is `segment_size`.
    """

    width: int = WIDTH
    height: int = HEIGHT
    segment_size: int = SEGMENT_SIZE
    start: Tuple[int, int] = START_CELL
    food_reward: int = FOOD_REWARD
    allow_reversal: bool = False
    avoid_occupied_cells: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        if self.segment_size <= 0:
            raise ValueError(f"segment_size must be positive, got {self.segment_size}")
        if self.width < self.segment_size or self.height < self.segment_size:
            raise ValueError(
                f"board {self.width}x{self.height} is smaller than one segment "
                f"({self.segment_size})"
            )
        x, y = self.start
        if x % self.segment_size or y % self.segment_size:
            raise ValueError(f"start cell {self.start} is not on the grid")
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"start cell {self.start} is outside the board")

    @property
    def columns(self) -> int:
        return self.width // self.segment_size

    @property
    def rows(self) -> int:
        return self.height // self.segment_size

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)

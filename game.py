# game.py
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

import numpy as np

from config import GameConfig
from snake import Cell, Direction, Snake

logger = logging.getLogger(__name__)


class Status(Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


class GameTerminatedError(RuntimeError):
    """Raised when a finished game is ticked again."""


@dataclass(frozen=True)
class Food:
    cell: Cell


@dataclass(frozen=True)
class Running:
    pass


@dataclass(frozen=True)
class GameOver:
    score: int
    reason: str

    @property
    def message(self) -> str:
        return f"Game Over! Score: {self.score}"


TickResult = Union[Running, GameOver]


class Game:
    """
    One run of the simulation: the snake, the food on the board and the score.

    `tick()` advances everything by one step and returns either `Running()` or
    `GameOver(score)`. A finished game stays finished; `restart()` hands back a
    fresh one with the same configuration.
    """

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config if config is not None else GameConfig()
        self.rng = rng if rng is not None else self.config.make_rng()

        start_x, start_y = self.config.start
        self.snake = Snake(
            start_x,
            start_y,
            size=self.config.segment_size,
            allow_reversal=self.config.allow_reversal,
        )
        self._foods: List[Food] = []
        self._score = 0
        self._status = Status.RUNNING
        self.ticks = 0
        self.spawn_food()

    # ----- queries -----

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def score(self) -> int:
        return self._score

    @property
    def status(self) -> Status:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status is Status.TERMINATED

    @property
    def snake_body(self) -> Tuple[Cell, ...]:
        return self.snake.body

    @property
    def foods(self) -> Tuple[Food, ...]:
        return tuple(self._foods)

    @property
    def food_cells(self) -> Tuple[Cell, ...]:
        return tuple(food.cell for food in self._foods)

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def board(self) -> np.ndarray:
        """
        Returns the board as a grid: 0=empty, 1=snake, 2=food
        Shape: (rows, columns)
        """
        size = self.config.segment_size
        rows, columns = self.config.rows, self.config.columns
        grid = np.zeros((rows, columns), dtype=np.float32)
        # Cells past the last whole column/row (uneven board sizes) are left out
        for cells, value in ((self.snake.body, 1.0), (self.food_cells, 2.0)):
            for x, y in cells:
                col, row = x // size, y // size
                if 0 <= col < columns and 0 <= row < rows:
                    grid[row, col] = value
        return grid

    # ----- mutation -----

    def set_direction(self, direction: Direction):
        self.snake.set_direction(direction)

    def spawn_food(self) -> Optional[Food]:
        """
        Place one food on a random grid cell. Unless `avoid_occupied_cells` is
        set the cell may be under the snake.
        """
        size = self.config.segment_size
        if self.config.avoid_occupied_cells:
            taken = set(self.snake.body) | set(self.food_cells)
            available = [
                (x * size, y * size)
                for x in range(self.config.columns)
                for y in range(self.config.rows)
                if (x * size, y * size) not in taken
            ]
            if not available:
                logger.debug("No free cell left for food")
                return None
            cell = self.rng.choice(available)
        else:
            cell = (
                self.rng.randrange(self.config.columns) * size,
                self.rng.randrange(self.config.rows) * size,
            )

        food = Food(cell)
        self._foods.append(food)
        logger.debug("Spawned food at %s", cell)
        return food

    def _food_at(self, cell: Cell) -> Optional[Food]:
        for food in self._foods:
            if food.cell == cell:
                return food
        return None

    def tick(self) -> TickResult:
        if self.is_over:
            raise GameTerminatedError("tick() called on a finished game; use restart()")

        vacated = self.snake.move()
        self.ticks += 1

        eaten = self._food_at(self.snake.head)
        if eaten is not None:
            self._foods.remove(eaten)
            if vacated is None:
                self.snake.grow()
            else:
                self.snake.restore_tail(vacated)
            self._score += self.config.food_reward
            logger.debug("Ate food at %s, score=%d", eaten.cell, self._score)
            self.spawn_food()

        reason = None
        if self.snake.collides_with_itself():
            reason = "self"
        elif not self.in_bounds(self.snake.head):
            reason = "wall"

        if reason is not None:
            self._status = Status.TERMINATED
            logger.info("Game over (%s) after %d ticks, score=%d", reason, self.ticks, self._score)
            return GameOver(self._score, reason)
        return Running()

    def restart(self) -> "Game":
        return Game(self.config)

    def __repr__(self):
        return (
            f"<Game status={self._status.value} score={self._score} "
            f"snake={self.snake!r} foods={list(self.food_cells)}>"
        )

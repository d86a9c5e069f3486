# snake.py
from enum import Enum
from typing import Optional, Tuple

Cell = Tuple[int, int]


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]


_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """
    The player-controlled body.

    Cells are (x, y) in pixels, head first. Each move shifts the head by one
    segment. Turns are queued in `direction` and checked against `heading`,
    the direction of the last move. Growth is deferred: `grow()` only marks
    the next move to keep its tail.
    """

    def __init__(
        self,
        x: int,
        y: int,
        size: int = 10,
        direction: Direction = Direction.RIGHT,
        allow_reversal: bool = False,
    ):
        self.size = size
        self.heading = direction
        self.direction = direction
        self.allow_reversal = allow_reversal
        self._body = [(x, y)]
        self._grow_pending = False

    def __len__(self):
        return len(self._body)

    @property
    def head(self) -> Cell:
        return self._body[0]

    @property
    def body(self) -> Tuple[Cell, ...]:
        return tuple(self._body)

    @property
    def growth_pending(self) -> bool:
        return self._grow_pending

    def set_direction(self, new_dir: Direction):
        if not isinstance(new_dir, Direction):
            raise TypeError(f"expected a Direction, got {new_dir!r}")
        # Prevent 180° turns directly into the second segment
        if not self.allow_reversal and new_dir is self.heading.opposite:
            return
        self.direction = new_dir

    def next_head(self) -> Cell:
        head_x, head_y = self._body[0]
        dx, dy = self.direction.value
        return (head_x + dx * self.size, head_y + dy * self.size)

    def move(self) -> Optional[Cell]:
        """
        Advance one segment. Returns the tail cell given up by this move, or
        None when a pending growth kept it.
        """
        self._body.insert(0, self.next_head())
        self.heading = self.direction
        if self._grow_pending:
            self._grow_pending = False
            return None
        return self._body.pop()

    def grow(self):
        # Several calls before one move still add a single segment
        self._grow_pending = True

    def restore_tail(self, vacated: Cell):
        """
        Grow right away by putting back the tail the last move gave up. When
        the head has just moved into that cell the current tail is doubled
        instead, so the new segment never sits under the head.
        """
        if vacated == self._body[0]:
            self._body.append(self._body[-1])
        else:
            self._body.append(vacated)

    def collides_with_itself(self) -> bool:
        head = self._body[0]
        return head in self._body[1:]

    def __repr__(self):
        return f"<Snake head={self.head} len={len(self)} dir={self.direction.name}>"

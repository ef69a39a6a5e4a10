"""
Board state for 2048.

The grid lives in a single one-dimensional numpy array addressed by
`y * width + x`; the 2D accessors below are a thin layer on top of it.
`empty_count` always equals the number of zero cells: every mutator keeps it
in step instead of rescanning the grid.
"""

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from console2048.config import BOARD_HEIGHT, BOARD_WIDTH


@dataclass(frozen=True)
class Position:
    """A cell coordinate. `x` grows to the right, `y` grows downward."""

    x: int
    y: int

    def __add__(self, other):
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Position(self.x - other.x, self.y - other.y)


class Direction(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def vector(self) -> Position:
        return _DIRECTION_VECTORS[self]

    @property
    def horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @classmethod
    def from_name(cls, name):
        """Parses 'up', 'down', 'left' or 'right' (any case)."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Invalid direction: {name}. Must be 'up', 'down', 'left' or 'right'") from None


_DIRECTION_VECTORS = {
    Direction.UP: Position(0, -1),
    Direction.DOWN: Position(0, 1),
    Direction.LEFT: Position(-1, 0),
    Direction.RIGHT: Position(1, 0),
}


class Board:
    """
    The grid of tile values plus a running count of empty cells.

    Args:
        width (int): Number of columns.
        height (int): Number of rows.
    """

    def __init__(self, width=BOARD_WIDTH, height=BOARD_HEIGHT):
        if width < 1 or height < 1:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.size = width * height
        self.cells = np.zeros(self.size, dtype=np.int64)
        self.empty_count = self.size

    # --- Addressing ---
    def in_bounds(self, pos) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def index(self, pos) -> int:
        """Flat index of `pos`. Raises IndexError for a position off the grid."""
        if not self.in_bounds(pos):
            raise IndexError(f"Position ({pos.x}, {pos.y}) is outside the {self.width}x{self.height} board")
        return pos.y * self.width + pos.x

    def position(self, index) -> Position:
        if not 0 <= index < self.size:
            raise IndexError(f"Index {index} is outside the {self.width}x{self.height} board")
        return Position(index % self.width, index // self.width)

    # --- Cell access ---
    def get(self, pos) -> int:
        return int(self.cells[self.index(pos)])

    def set(self, pos, value):
        self.set_at(self.index(pos), value)

    def set_at(self, index, value):
        """
        Writes a value at a flat index and keeps `empty_count` in step.

        Filling an empty cell consumes one empty slot, emptying a tile frees
        one, and overwriting a tile with another tile leaves the count alone.
        """
        old = self.cells[index]
        self.cells[index] = value
        if old == 0 and value != 0:
            self.empty_count -= 1
        elif old != 0 and value == 0:
            self.empty_count += 1

    def clear(self):
        self.cells.fill(0)
        self.empty_count = self.size

    def load(self, rows):
        """
        Replaces the board contents with a 2D grid (list of rows or array).
        """
        grid = np.asarray(rows, dtype=np.int64)
        if grid.shape != (self.height, self.width):
            raise ValueError(f"Expected a {self.height}x{self.width} grid, got shape {grid.shape}")
        self.cells[:] = grid.reshape(-1)
        self.empty_count = self.count_empty()

    # --- Queries ---
    def count_empty(self) -> int:
        """Full scan; only used to verify the running `empty_count`."""
        return int(np.count_nonzero(self.cells == 0))

    def has_adjacent_pair(self) -> bool:
        """True if any cell equals its right or lower neighbour."""
        grid = self.snapshot()
        if np.any(grid[:, :-1] == grid[:, 1:]):
            return True
        return bool(np.any(grid[:-1, :] == grid[1:, :]))

    def max_tile(self) -> int:
        return int(self.cells.max())

    def total(self) -> int:
        return int(self.cells.sum())

    def snapshot(self):
        """A (height, width) copy of the grid."""
        return self.cells.reshape(self.height, self.width).copy()

    def __str__(self):
        return str(self.snapshot())

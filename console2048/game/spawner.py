"""
Random tile spawning and the full-board loss check.
"""

import logging

from console2048.config import SPAWN_VALUES, TWO_PROBABILITY

logger = logging.getLogger(__name__)


def weighted_tile_value(rng, two_probability=TWO_PROBABILITY):
    """Draws 2 with probability `two_probability`, otherwise 4."""
    return int(rng.choice(SPAWN_VALUES, p=[two_probability, 1.0 - two_probability]))


class Spawner:
    """
    Places new tiles into uniformly chosen empty cells.

    Empty positions are never materialised: a slot number `k` is drawn over
    the empty cells and the flat grid is walked until the (k+1)-th empty cell.

    Args:
        board (Board): The board to write into.
        rng (numpy.random.Generator): Source of randomness.
        two_probability (float): Chance that a new tile is a 2.
    """

    def __init__(self, board, rng, two_probability=TWO_PROBABILITY):
        if not 0.0 <= two_probability <= 1.0:
            raise ValueError(f"two_probability must be within [0, 1], got {two_probability}")
        self.board = board
        self.rng = rng
        self.two_probability = two_probability
        self.board_locked = False

    def spawn(self) -> bool:
        """
        Adds one tile.

        Returns:
            bool: False if the board had no empty cell.
        """
        board = self.board
        if board.empty_count == 0:
            self._check_locked()
            return False

        # Slots left over once this spawn has taken its own.
        remaining = board.empty_count - 1
        skip = int(self.rng.integers(0, remaining, endpoint=True))

        for index in range(board.size):
            if board.cells[index] != 0:
                continue
            if skip != 0:
                skip -= 1
                continue
            value = weighted_tile_value(self.rng, self.two_probability)
            board.set_at(index, value)
            logger.debug("spawned %d at %s", value, board.position(index))
            break

        if board.empty_count == 0:
            self._check_locked()
        return True

    def _check_locked(self):
        # Only meaningful on a full board: any empty cell still allows a move.
        self.board_locked = not self.board.has_adjacent_pair()
        if self.board_locked:
            logger.debug("board is full with no merges left")

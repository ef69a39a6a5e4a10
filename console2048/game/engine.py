"""
Tile movement and merging.

A move treats the board as independent lines: rows for Left/Right, columns
for Up/Down. Each line is scanned starting one cell in from the target edge
(the edge cell can never move further), and every tile walks toward the edge
until it is blocked.

Merge rule:
    A tile produced by a merge never takes part in a second merge during the
    same move. Each line carries a `merge_allowed` flag that a merge clears
    and a plain slide sets again, so:
    - [2, 2, 2, 2] -> [4, 4, 0, 0]
    - [2, 2, 4, 0] -> [4, 4, 0, 0]
"""

import logging

from console2048.config import WIN_TILE
from console2048.game.board import Direction, Position

logger = logging.getLogger(__name__)


class MoveEngine:
    """
    Slides and merges tiles on a Board in place.

    The outcome of the last move is kept on the instance:
    `reached_win_tile`, `merged_values` and `score_gained`.
    """

    def __init__(self, board, win_tile=WIN_TILE):
        self.board = board
        self.win_tile = win_tile
        self.reached_win_tile = False
        self.merged_values = []
        self.score_gained = 0

    def _line_scan(self, direction):
        """
        Returns (number of lines, inner index order) for a direction.

        Moving toward the negative axis (Up, Left) scans increasing indices
        from 1; moving toward the positive axis (Down, Right) scans decreasing
        indices from length - 2.
        """
        board = self.board
        if direction.horizontal:
            lines, length = board.height, board.width
        else:
            lines, length = board.width, board.height

        if direction in (Direction.UP, Direction.LEFT):
            inner = range(1, length)
        else:
            inner = range(length - 2, -1, -1)
        return lines, inner

    def move(self, direction) -> bool:
        """
        Executes one move on the board.

        Args:
            direction (Direction): Where the tiles slide.

        Returns:
            bool: True if at least one tile slid or merged.
        """
        direction = Direction(direction)
        self.reached_win_tile = False
        self.merged_values = []
        self.score_gained = 0

        lines, inner = self._line_scan(direction)
        step = direction.vector

        changed = False
        for outer in range(lines):
            # Lines never interact; every line starts with a fresh permission.
            merge_allowed = True
            for i in inner:
                source = Position(i, outer) if direction.horizontal else Position(outer, i)
                moved, merge_allowed = self._move_tile(source, step, merge_allowed)
                changed |= moved

        logger.debug("move %s changed=%s merges=%s", direction.name, changed, self.merged_values)
        return changed

    def _move_tile(self, source, step, merge_allowed):
        board = self.board
        value = board.get(source)
        if value == 0:
            return False, merge_allowed

        target = source
        while True:
            candidate = target + step
            if not board.in_bounds(candidate):
                break
            occupant = board.get(candidate)
            if occupant != 0:
                if merge_allowed and occupant == value:
                    # A merge target ends the walk.
                    target = candidate
                break
            target = candidate

        if target == source:
            return False, merge_allowed

        merged = board.get(target) == value
        # Adding works for both cases: an empty target holds 0.
        board.set(target, board.get(target) + value)
        board.set(source, 0)

        if merged:
            new_value = board.get(target)
            self.merged_values.append(new_value)
            self.score_gained += new_value
            # Checked on every merge: one move can produce several win tiles.
            if new_value == self.win_tile:
                self.reached_win_tile = True

        return True, not merged

"""
Core Game Logic for 2048.

`Game2048` owns the board and the status machine and wires together the two
halves of a turn:
1.  MoveEngine: deterministic slide/merge pass, which can win the game.
2.  Spawner: random tile placement, which can lose the game.

Status transitions:
    IN_GAME -> WON   (a merge reaches the win tile)
    IN_GAME -> LOST  (the board fills up with no merges left)
    WON | LOST -> IN_GAME only through `reset()`.
"""

import logging
from enum import Enum

import numpy as np

from console2048.config import BOARD_HEIGHT, BOARD_WIDTH, INITIAL_TILES, TWO_PROBABILITY, WIN_TILE
from console2048.game.board import Board, Direction
from console2048.game.engine import MoveEngine
from console2048.game.spawner import Spawner

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    IN_GAME = "in_game"
    WON = "won"
    LOST = "lost"


class Game2048:
    def __init__(self, seed=None, two_probability=TWO_PROBABILITY, win_tile=WIN_TILE,
                 width=BOARD_WIDTH, height=BOARD_HEIGHT):
        """
        The Game Engine. Manages state, moves, and win/loss conditions.

        Args:
            seed (int | None): Seed for the random generator; None draws one from the OS.
            two_probability (float): Chance that a spawned tile is a 2.
            win_tile (int): Tile value that wins the game.
        """
        self.board = Board(width, height)
        self.rng = np.random.default_rng(seed)
        self.engine = MoveEngine(self.board, win_tile)
        self.spawner = Spawner(self.board, self.rng, two_probability)
        self.status = GameStatus.IN_GAME
        self.score = 0
        self.reset()

    def reset(self, seed=None):
        """
        Starts a new game in place: empty board, two fresh tiles.

        Args:
            seed (int | None): If given, reseeds the random generator first.
        """
        if seed is not None:
            self.rng = np.random.default_rng(seed)
            self.spawner.rng = self.rng

        self.board.clear()
        self.spawner.board_locked = False
        self.status = GameStatus.IN_GAME
        self.score = 0

        for _ in range(INITIAL_TILES):
            self.spawn()
        logger.debug("new game\n%s", self.board)

    def move(self, direction) -> bool:
        """
        Slides and merges tiles without spawning.

        Returns:
            bool: True if the board changed. Always False once the game is over.
        """
        if self.status is not GameStatus.IN_GAME:
            return False

        changed = self.engine.move(direction)
        self.score += self.engine.score_gained
        if self.engine.reached_win_tile:
            self._set_status(GameStatus.WON)
        return changed

    def spawn(self) -> bool:
        if self.status is not GameStatus.IN_GAME:
            return False

        spawned = self.spawner.spawn()
        if self.spawner.board_locked:
            self._set_status(GameStatus.LOST)
        return spawned

    def process_move(self, direction) -> bool:
        """
        Plays one turn: the move, then exactly one spawn if anything moved.

        A winning move does not spawn.
        """
        changed = self.move(direction)
        if changed and self.status is GameStatus.IN_GAME:
            self.spawn()
        return changed

    def _set_status(self, status):
        logger.info("game status %s -> %s (score %d)", self.status.value, status.value, self.score)
        self.status = status

    @property
    def last_merged_tiles(self):
        return list(self.engine.merged_values)

    def has_won(self):
        return self.status is GameStatus.WON

    def is_over(self):
        return self.status is not GameStatus.IN_GAME

    def get_max_tile(self):
        return self.board.max_tile()

    def valid_moves(self):
        """Directions that would change the board, tried on a scratch copy."""
        moves = []
        for direction in Direction:
            scratch = Board(self.board.width, self.board.height)
            scratch.load(self.board.snapshot())
            if MoveEngine(scratch, self.engine.win_tile).move(direction):
                moves.append(direction)
        return moves

    def __str__(self):
        """String representation for printing the board."""
        score_str = "Score: {}\n".format(self.score)
        board_str = str(self.board)
        return score_str + board_str

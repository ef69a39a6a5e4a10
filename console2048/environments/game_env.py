import gymnasium
from gymnasium import spaces
import numpy as np

from console2048.config import TWO_PROBABILITY
from console2048.game.board import Direction
from console2048.game.game_2048 import Game2048


class Game2048Env(gymnasium.Env):
    """
    A headless Gymnasium environment over the console2048 engine.

    Actions follow `Direction`: 0 Up, 1 Down, 2 Left, 3 Right. One step is one
    game turn (move, then a spawn if anything moved), the same as a keypress
    in the terminal game.
    """

    metadata = {"render_modes": ["human", "ansi"]}

    def __init__(self, render_mode=None, two_probability=TWO_PROBABILITY):
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unknown render_mode: {render_mode}. Must be one of {self.metadata['render_modes']}.")

        self.game = Game2048(two_probability=two_probability)
        self.action_space = spaces.Discrete(len(Direction))

        # Raw tile values, 0 marks an empty cell
        self.observation_space = spaces.Box(low=0,
                                            high=np.iinfo(np.int64).max,
                                            shape=(self.game.board.height, self.game.board.width),
                                            dtype=np.int64)
        self.render_mode = render_mode

    def _get_episode_info(self):
        """Helper to safely get logging info."""
        return {
            "score": self.game.score,
            "max_tile": self.game.get_max_tile(),
            "status": self.game.status.value,
        }

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        # Derive the game's generator from the environment's seeded one.
        self.game.reset(seed=int(self.np_random.integers(2**32)))
        observation = self.game.board.snapshot()

        info = self._get_episode_info()

        if self.render_mode == "human":
            self.render()
        return observation, info

    def step(self, action):
        direction = Direction(int(action))
        score_before_move = self.game.score

        valid_move = self.game.process_move(direction)
        observation = self.game.board.snapshot()

        if not valid_move:
            reward = -1  # Punish invalid moves
        else:
            reward = self.game.score - score_before_move

        terminated = self.game.is_over()
        truncated = False
        info = {
            "num_empty_cells": self.game.board.empty_count,
            "merged_tiles": self.game.last_merged_tiles if valid_move else [],
            "raw_score_delta": self.game.score - score_before_move,
            "valid_move": valid_move,
        }

        if terminated:
            info.update(self._get_episode_info())

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, info

    def render(self):
        if self.render_mode == "human":
            print(self.game)
        elif self.render_mode == "ansi":
            return str(self.game)

import unittest
import numpy as np

from console2048.environments.game_env import Game2048Env
from console2048.game.board import Direction


def single_row(row):
    return [row, [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]


class TestGame2048Env(unittest.TestCase):

    def setUp(self):
        self.env = Game2048Env()

    def test_reset_observation(self):
        observation, info = self.env.reset(seed=1)
        self.assertEqual(observation.shape, (4, 4))
        self.assertEqual(np.count_nonzero(observation), 2)
        self.assertTrue(self.env.observation_space.contains(observation))
        self.assertEqual(info["score"], 0)

    def test_seeded_reset_is_reproducible(self):
        first, _ = self.env.reset(seed=5)
        second, _ = Game2048Env().reset(seed=5)
        np.testing.assert_array_equal(first, second)

    def test_invalid_move_is_punished(self):
        self.env.reset(seed=2)
        self.env.game.board.load(single_row([2, 0, 0, 0]))
        observation, reward, terminated, truncated, info = self.env.step(Direction.LEFT)
        self.assertEqual(reward, -1)
        self.assertFalse(info["valid_move"])
        self.assertEqual(np.count_nonzero(observation), 1)

    def test_merge_reward(self):
        self.env.reset(seed=2)
        self.env.game.board.load(single_row([2, 2, 0, 0]))
        _, reward, terminated, truncated, info = self.env.step(int(Direction.LEFT))
        self.assertEqual(reward, 4)
        self.assertEqual(info["merged_tiles"], [4])
        self.assertFalse(terminated)
        self.assertFalse(truncated)

    def test_win_terminates(self):
        self.env.reset(seed=2)
        self.env.game.board.load(single_row([1024, 1024, 0, 0]))
        _, reward, terminated, _, info = self.env.step(Direction.LEFT)
        self.assertTrue(terminated)
        self.assertEqual(reward, 2048)
        self.assertEqual(info["status"], "won")
        self.assertEqual(info["max_tile"], 2048)

    def test_bad_render_mode(self):
        with self.assertRaises(ValueError):
            Game2048Env(render_mode="rgb_array")


if __name__ == "__main__":
    unittest.main()

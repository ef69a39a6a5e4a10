import io
import unittest
from collections import deque

import numpy as np

from console2048.controller import GameController, MoveCommand, QuitCommand, RestartCommand, default_bindings
from console2048.game.board import Direction
from console2048.game.game_2048 import Game2048, GameStatus
from console2048.keyboard import keys
from console2048.keyboard.decoder import AnsiKeyDecoder, DecodeError
from console2048.keyboard.dispatch import Signal, wait_any_key
from console2048.keyboard.keys import ANSI_ARROWS, WINDOWS_ARROWS


def single_row(row):
    return [row, [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]


class RecordingRenderer:
    """Stands in for the terminal: records draws, answers prompts from a script."""

    def __init__(self, decoder, answers=()):
        self.decoder = decoder
        self.answers = deque(answers)
        self.draws = []
        self.prompts = []
        self.guides = 0

    def show_key_guide(self):
        self.guides += 1
        wait_any_key(self.decoder)

    def draw(self, board, origin=None, score=None):
        self.draws.append(board.snapshot())

    def present_prompt(self, message, question):
        self.prompts.append((message, question))
        return self.answers.popleft()


def make_controller(data=b"", answers=(), rows=None, seed=0):
    game = Game2048(seed=seed)
    if rows is not None:
        game.board.load(rows)
    decoder = AnsiKeyDecoder(io.BytesIO(data))
    renderer = RecordingRenderer(decoder, answers)
    controller = GameController(game, renderer, decoder, bindings=default_bindings("linux"))
    controller.register_keys()
    return controller, renderer


class TestBindings(unittest.TestCase):

    def test_default_bindings(self):
        bindings = default_bindings("linux")
        self.assertEqual(len(bindings), 16)
        for key in (keys.W, keys.SHIFT_W, ANSI_ARROWS.up):
            self.assertEqual(bindings[key], MoveCommand(Direction.UP))
        self.assertEqual(bindings[ANSI_ARROWS.left], MoveCommand(Direction.LEFT))
        self.assertEqual(bindings[keys.SHIFT_R], RestartCommand())
        self.assertEqual(bindings[keys.Q], QuitCommand())
        self.assertNotIn(keys.Y, bindings)

    def test_windows_arrows(self):
        bindings = default_bindings("win32")
        self.assertEqual(bindings[WINDOWS_ARROWS.down], MoveCommand(Direction.DOWN))
        self.assertNotIn(ANSI_ARROWS.down, bindings)


class TestExecute(unittest.TestCase):

    def test_move_command(self):
        controller, renderer = make_controller(rows=single_row([2, 2, 0, 0]))
        self.assertIs(controller.execute(MoveCommand(Direction.LEFT)), Signal.CHANGED)
        self.assertEqual(controller.game.get_max_tile(), 4)
        self.assertEqual(renderer.draws, [], "execute itself never draws a move")

    def test_noop_move_command(self):
        controller, _ = make_controller(rows=single_row([2, 4, 0, 0]))
        before = controller.game.board.snapshot()
        self.assertIs(controller.execute(MoveCommand(Direction.LEFT)), Signal.NO_CHANGE)
        np.testing.assert_array_equal(controller.game.board.snapshot(), before)

    def test_restart_confirmed(self):
        controller, renderer = make_controller(answers=[True], rows=single_row([2, 4, 8, 16]))
        self.assertIs(controller.execute(RestartCommand()), Signal.NO_CHANGE)
        self.assertEqual(renderer.prompts, [("You Press Restart Key!", "Restart?")])
        self.assertEqual(len(renderer.draws), 1, "A reset draws the new board itself")
        self.assertEqual(controller.game.board.empty_count, 14)

    def test_restart_declined(self):
        controller, renderer = make_controller(answers=[False], rows=single_row([2, 4, 8, 16]))
        self.assertIs(controller.execute(RestartCommand()), Signal.NO_CHANGE)
        self.assertEqual(renderer.draws, [])
        self.assertEqual(list(controller.game.board.snapshot()[0]), [2, 4, 8, 16])

    def test_quit(self):
        controller, renderer = make_controller(answers=[True, False])
        self.assertIs(controller.execute(QuitCommand()), Signal.QUIT)
        self.assertIs(controller.execute(QuitCommand()), Signal.NO_CHANGE)
        self.assertEqual(renderer.prompts, [("You Press Quit Key!", "Quit?")] * 2)

    def test_unknown_command(self):
        controller, _ = make_controller()
        with self.assertRaises(TypeError):
            controller.execute("left")


class TestStep(unittest.TestCase):

    def test_changed_move_draws_once(self):
        controller, renderer = make_controller(b"a", rows=single_row([0, 2, 0, 0]))
        self.assertTrue(controller.step())
        self.assertEqual(len(renderer.draws), 1)
        self.assertEqual(renderer.draws[0][0, 0], 2)

    def test_noop_move_does_not_draw(self):
        controller, renderer = make_controller(b"a", rows=single_row([2, 0, 0, 0]))
        self.assertTrue(controller.step())
        self.assertEqual(renderer.draws, [])

    def test_unregistered_keys_are_skipped(self):
        controller, renderer = make_controller(b"xy\x1b[D", rows=single_row([0, 0, 0, 2]))
        self.assertTrue(controller.step())
        self.assertEqual(len(renderer.draws), 1)
        self.assertEqual(renderer.draws[0][0, 0], 2)

    def test_quit_key(self):
        controller, _ = make_controller(b"Q", answers=[True])
        self.assertFalse(controller.step())

    def test_quit_declined_keeps_running(self):
        controller, renderer = make_controller(b"q", answers=[False])
        self.assertTrue(controller.step())
        self.assertEqual(renderer.draws, [])

    def test_win_then_stop(self):
        controller, renderer = make_controller(b"a", answers=[False], rows=single_row([1024, 1024, 0, 0]))
        self.assertFalse(controller.step())
        self.assertEqual(controller.game.status, GameStatus.WON)
        self.assertEqual(renderer.prompts, [("You Win!", "Restart?")])
        self.assertEqual(len(renderer.draws), 1)

    def test_win_then_restart(self):
        controller, renderer = make_controller(b"a", answers=[True], rows=single_row([1024, 1024, 0, 0]))
        self.assertTrue(controller.step())
        self.assertEqual(controller.game.status, GameStatus.IN_GAME)
        self.assertEqual(controller.game.board.empty_count, 14)
        self.assertEqual(len(renderer.draws), 2)

    def test_loss_prompt(self):
        controller, renderer = make_controller(b"a", answers=[False], rows=[
            [8, 16, 8, 16],
            [16, 8, 16, 8],
            [8, 16, 8, 16],
            [0, 16, 8, 32]
        ])
        self.assertFalse(controller.step())
        self.assertEqual(controller.game.status, GameStatus.LOST)
        self.assertEqual(renderer.prompts, [("You Lost...", "Restart?")])

    def test_end_of_input_propagates(self):
        controller, _ = make_controller(b"x")
        with self.assertRaises(DecodeError):
            controller.step()


class TestRunUntilQuit(unittest.TestCase):

    def test_session(self):
        game = Game2048(seed=3)
        decoder = AnsiKeyDecoder(io.BytesIO(b" wasdq"))
        renderer = RecordingRenderer(decoder, answers=[True])
        controller = GameController(game, renderer, decoder, bindings=default_bindings("linux"))

        controller.run_until_quit()

        self.assertEqual(renderer.guides, 1)
        self.assertGreaterEqual(len(renderer.draws), 1)
        self.assertEqual(renderer.prompts, [("You Press Quit Key!", "Quit?")])

    def test_keys_during_guide_do_not_move(self):
        game = Game2048(seed=3)
        decoder = AnsiKeyDecoder(io.BytesIO(b"a"))
        renderer = RecordingRenderer(decoder)
        controller = GameController(game, renderer, decoder)
        with self.assertRaises(DecodeError):
            controller.run_until_quit()
        # The 'a' went to the key guide; only the initial board was drawn.
        self.assertEqual(len(renderer.draws), 1)


if __name__ == "__main__":
    unittest.main()

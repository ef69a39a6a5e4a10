import io
import unittest

from console2048.game.board import Board
from console2048.keyboard.decoder import AnsiKeyDecoder
from console2048.renderer import CLEAR_SCREEN, HIDE_CURSOR, SHOW_CURSOR, AnsiRenderer


def make_renderer(data=b"", origin=(1, 1)):
    output = io.StringIO()
    renderer = AnsiRenderer(AnsiKeyDecoder(io.BytesIO(data)), output=output, origin=origin)
    return renderer, output


class TestAnsiRenderer(unittest.TestCase):

    def test_draw_positions_rows(self):
        board = Board()
        board.load([
            [2, 0, 0, 0],
            [0, 2048, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 4]
        ])
        renderer, output = make_renderer(origin=(3, 2))
        renderer.draw(board, score=12)
        text = output.getvalue()

        self.assertTrue(text.startswith(HIDE_CURSOR + "\033[2;3H"))
        self.assertIn("\033[3;3H|2   |    |    |    |", text)
        self.assertIn("\033[5;3H|    |2048|    |    |", text)
        self.assertIn("-" * 21, text)
        self.assertIn("Score: 12", text)

    def test_prompt_waits_for_confirmation_key(self):
        renderer, output = make_renderer(b"xq\x1b[AY")
        self.assertTrue(renderer.present_prompt("You Win!", "Restart?"))
        self.assertIn("You Win!", output.getvalue())
        self.assertIn("Restart? (Y/N)", output.getvalue())

    def test_prompt_no(self):
        renderer, _ = make_renderer(b"n")
        self.assertFalse(renderer.present_prompt("You Press Quit Key!", "Quit?"))

    def test_key_guide_waits_then_clears(self):
        renderer, output = make_renderer(b"z")
        renderer.show_key_guide()
        text = output.getvalue()
        self.assertIn("Press Any key To Start...", text)
        self.assertTrue(text.endswith(CLEAR_SCREEN))

    def test_close_shows_cursor(self):
        renderer, output = make_renderer()
        renderer.close()
        self.assertIn(SHOW_CURSOR, output.getvalue())


if __name__ == "__main__":
    unittest.main()

"""
ANSI terminal output for the game.

The controller only needs three things from a renderer:
    draw(board, origin)                  repaint the grid
    present_prompt(message, question)    ask a yes/no question, return the answer
    show_key_guide()                     print the controls and wait for a key
`AnsiRenderer` does this with cursor positioning sequences; the board is
always painted at the same console origin so redraws overwrite in place.
"""

import sys

from console2048.config import PRINT_ORIGIN
from console2048.keyboard.dispatch import wait_any_key, wait_for_keys
from console2048.keyboard.keys import CONFIRM_KEYS, CONFIRM_YES

HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
CLEAR_SCREEN = "\033[2J\033[H"
CLEAR_LINE = "\033[2K"

KEY_GUIDE = (
    "========2048 Game========",
    "--------Key Guide--------",
    " W / Up Arrow    -> Up",
    " S / Down Arrow  -> Down",
    " A / Left Arrow  -> Left",
    " D / Right Arrow -> Right",
    "-------------------------",
    " R -> Restart",
    " Q -> Quit",
    "-------------------------",
    "",
    "Press Any key To Start...",
)


def cursor_to(x, y):
    return f"\033[{y};{x}H"


class AnsiRenderer:
    """
    Args:
        decoder (KeyDecoder): Input used by the blocking prompts.
        output: Text stream to write to.
        origin (tuple[int, int]): 1-based (x, y) console position of the board.
    """

    def __init__(self, decoder, output=None, origin=PRINT_ORIGIN):
        self.decoder = decoder
        self.output = sys.stdout if output is None else output
        self.origin = origin
        self._board_rows = 0

    def _write(self, text):
        self.output.write(text)
        self.output.flush()

    def show_key_guide(self):
        x, y = self.origin
        lines = [cursor_to(x, y + offset) + text for offset, text in enumerate(KEY_GUIDE)]
        self._write("".join(lines))
        wait_any_key(self.decoder)
        self._write(CLEAR_SCREEN)

    def draw(self, board, origin=None, score=None):
        x, y = self.origin if origin is None else origin
        rule = "-" * (board.width * 5 + 1)

        # The cursor is hidden on every draw: resizing the window can bring it back.
        parts = [HIDE_CURSOR, cursor_to(x, y), rule]
        for row in board.snapshot():
            y += 1
            cells = "".join(f"|{int(value):<4}" if value else "|    " for value in row)
            parts.append(cursor_to(x, y) + cells + "|")
            y += 1
            parts.append(cursor_to(x, y) + rule)
        if score is not None:
            parts.append(cursor_to(x, y + 1) + CLEAR_LINE + f"Score: {score}")
        self._board_rows = board.height * 2 + 1
        self._write("".join(parts))

    def present_prompt(self, message, question) -> bool:
        x, y = self.origin
        # Below the board and the score line.
        row = y + (self._board_rows or 9) + 1
        self._write(cursor_to(x, row) + message + cursor_to(x, row + 1) + f"{question} (Y/N)")

        answer = wait_for_keys(self.decoder, CONFIRM_KEYS) in CONFIRM_YES

        self._write(cursor_to(x, row) + CLEAR_LINE + cursor_to(x, row + 1) + CLEAR_LINE)
        return answer

    def close(self):
        x, y = self.origin
        self._write(cursor_to(x, y + (self._board_rows or 9) + 3) + SHOW_CURSOR + "\n")

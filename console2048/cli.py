import argparse
import logging
import sys

from console2048.config import LOG_FORMAT, PRINT_ORIGIN, TWO_PROBABILITY
from console2048.controller import GameController
from console2048.game.game_2048 import Game2048
from console2048.keyboard import keys
from console2048.keyboard.decoder import DecodeError, KeyDecoder, console_stream
from console2048.keyboard.raw_mode import TerminalRawMode
from console2048.renderer import AnsiRenderer

logger = logging.getLogger("console2048")


def build_parser():
    parser = argparse.ArgumentParser(description="Plays 2048 in the terminal.")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for tile spawning (random if omitted)."
    )
    parser.add_argument(
        "--two-probability",
        type=float,
        default=TWO_PROBABILITY,
        help="Probability that a new tile is a 2 rather than a 4."
    )
    parser.add_argument(
        "--origin-x",
        type=int,
        default=PRINT_ORIGIN[0],
        help="1-based console column of the board."
    )
    parser.add_argument(
        "--origin-y",
        type=int,
        default=PRINT_ORIGIN[1],
        help="1-based console row of the board."
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write debug logs to this file (the terminal is used by the game)."
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="DEBUG",
        help="Level for --log-file."
    )
    parser.add_argument(
        "--keycodes",
        action="store_true",
        help="Print the decoded code of every key pressed until 'q', then exit."
    )
    return parser


def log_setup(log_file, level):
    if log_file:
        logging.basicConfig(
            level=getattr(logging, level),
            format=LOG_FORMAT,
            handlers=[logging.FileHandler(log_file, encoding="utf-8")],
        )
    else:
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)


def dump_keycodes(decoder, output):
    """Echoes each decoded key until a plain 'q' is pressed."""
    output.write("Press keys to see their codes, 'q' to stop.\r\n")
    output.flush()
    while True:
        key = decoder.decode()
        output.write(f"{str(key):>8}  code=0x{key.code:02X}  lead={key.lead.name}\r\n")
        output.flush()
        if key == keys.Q:
            return


def run_in_raw_mode(loop):
    """Runs `loop` with the terminal in raw mode and maps its outcome to an exit code."""
    try:
        with TerminalRawMode():
            loop()
    except DecodeError:
        logger.exception("input stream closed")
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    log_setup(args.log_file, args.log_level)

    decoder = KeyDecoder.for_platform(console_stream())
    if args.keycodes:
        return run_in_raw_mode(lambda: dump_keycodes(decoder, sys.stdout))

    game = Game2048(seed=args.seed, two_probability=args.two_probability)
    renderer = AnsiRenderer(decoder, origin=(args.origin_x, args.origin_y))
    controller = GameController(game, renderer, decoder)
    try:
        return run_in_raw_mode(controller.run_until_quit)
    finally:
        renderer.close()


if __name__ == "__main__":
    sys.exit(main())

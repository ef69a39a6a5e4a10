"""
Game controller: keys -> commands -> game, and the interactive loop.

Keys are bound to small command values rather than to closures over the
controller. Every registered key dispatches into `execute`, the single place
that turns a command into game actions and a Signal.
"""

import logging
from dataclasses import dataclass
from functools import partial

from console2048.game.board import Direction
from console2048.game.game_2048 import GameStatus
from console2048.keyboard import keys
from console2048.keyboard.dispatch import KeyDispatchTable, Signal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveCommand:
    direction: Direction


@dataclass(frozen=True)
class RestartCommand:
    pass


@dataclass(frozen=True)
class QuitCommand:
    pass


def default_bindings(platform=None):
    """Key -> command map: WASD in both cases, arrows, R to restart, Q to quit."""
    arrows = keys.arrow_keys(platform)
    groups = (
        (MoveCommand(Direction.UP), (keys.W, keys.SHIFT_W, arrows.up)),
        (MoveCommand(Direction.LEFT), (keys.A, keys.SHIFT_A, arrows.left)),
        (MoveCommand(Direction.DOWN), (keys.S, keys.SHIFT_S, arrows.down)),
        (MoveCommand(Direction.RIGHT), (keys.D, keys.SHIFT_D, arrows.right)),
        (RestartCommand(), (keys.R, keys.SHIFT_R)),
        (QuitCommand(), (keys.Q, keys.SHIFT_Q)),
    )
    return {key: command for command, group in groups for key in group}


class GameController:
    """
    Owns the dispatch table and drives a Game2048 from decoded keys.

    Args:
        game (Game2048): The game to play.
        renderer: Object with draw / present_prompt / show_key_guide.
        decoder (KeyDecoder): Source of keys.
        bindings (dict[Key, command] | None): Defaults to `default_bindings()`.
    """

    def __init__(self, game, renderer, decoder, bindings=None):
        self.game = game
        self.renderer = renderer
        self.decoder = decoder
        self.bindings = default_bindings() if bindings is None else dict(bindings)
        self.table = KeyDispatchTable()

    def register_keys(self):
        for key, command in self.bindings.items():
            self.table.register(key, partial(self._on_key, command))

    def _on_key(self, command, key):
        logger.debug("key %s -> %s", key, command)
        return self.execute(command)

    def execute(self, command) -> Signal:
        if isinstance(command, MoveCommand):
            if self.game.process_move(command.direction):
                return Signal.CHANGED
            return Signal.NO_CHANGE

        if isinstance(command, RestartCommand):
            if self.renderer.present_prompt("You Press Restart Key!", "Restart?"):
                self.reset()
            # The reset has drawn already; no redraw needed either way.
            return Signal.NO_CHANGE

        if isinstance(command, QuitCommand):
            if self.renderer.present_prompt("You Press Quit Key!", "Quit?"):
                return Signal.QUIT
            return Signal.NO_CHANGE

        raise TypeError(f"Unknown command: {command!r}")

    def draw(self):
        self.renderer.draw(self.game.board, score=self.game.score)

    def reset(self):
        self.game.reset()
        self.draw()

    def start(self):
        """Shows the key guide, deals the first board, then binds the keys."""
        self.renderer.show_key_guide()
        self.reset()
        # Keys are registered only now so nothing typed during the guide moves tiles.
        self.register_keys()

    def step(self) -> bool:
        """
        Handles one registered key.

        Returns:
            bool: False once the loop should end.
        """
        signal = self.table.dispatch_at_least_one(self.decoder)
        if signal is Signal.QUIT:
            logger.info("quit requested")
            return False
        if signal is Signal.NO_CHANGE:
            return True

        self.draw()

        if self.game.status is GameStatus.WON:
            message = "You Win!"
        elif self.game.status is GameStatus.LOST:
            message = "You Lost..."
        else:
            return True

        if not self.renderer.present_prompt(message, "Restart?"):
            return False
        self.reset()
        return True

    def run_until_quit(self):
        self.start()
        while self.step():
            continue

"""
Game Configuration for console2048.

Central place for the fixed rules of the game and the defaults the command
line can override. Everything here is a plain module-level constant so the
engine, the controller and the tests all read the same values.
"""

# --- Board ---
# The interactive game is always played on a 4x4 grid.
BOARD_WIDTH = 4
BOARD_HEIGHT = 4

# Reaching this tile through a merge wins the game.
WIN_TILE = 2048

# --- Spawning ---
SPAWN_VALUES = (2, 4)
TWO_PROBABILITY = 0.9   # 90% '2', 10% '4'
INITIAL_TILES = 2

# --- Rendering ---
# Console origin of the board, 1-based (row 1, column 1 is the top left corner).
PRINT_ORIGIN = (1, 1)

# --- Logging ---
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

"""
Canonical key values.

A logical keypress is a raw code plus the lead byte (if any) that introduced
it. Arrow keys arrive as multi-byte sequences whose final byte is often a
printable letter, so the lead is part of the identity: the Up arrow on an
ANSI terminal is `Key(ord('A'), LeadCode.ESC)` while Shift+A is
`Key(ord('A'))`.
"""

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple


class LeadCode(IntEnum):
    NONE = 0
    NUL = 1   # 0x00, Windows console function keys
    E0 = 2    # 0xE0, Windows console extended keys
    ESC = 3   # 0x1B, ANSI escape sequences


@dataclass(frozen=True)
class Key:
    code: int
    lead: LeadCode = LeadCode.NONE

    @classmethod
    def char(cls, ch):
        return cls(ord(ch))

    @property
    def escaped(self):
        return self.lead is not LeadCode.NONE

    def __str__(self):
        if self.escaped:
            return f"<{self.lead.name} 0x{self.code:02X}>"
        if 0x20 <= self.code < 0x7F:
            return chr(self.code)
        return f"<0x{self.code:02X}>"


# Letter keys: both cases are distinct keys.
W, SHIFT_W = Key.char("w"), Key.char("W")
A, SHIFT_A = Key.char("a"), Key.char("A")
S, SHIFT_S = Key.char("s"), Key.char("S")
D, SHIFT_D = Key.char("d"), Key.char("D")
Y, SHIFT_Y = Key.char("y"), Key.char("Y")
N, SHIFT_N = Key.char("n"), Key.char("N")
Q, SHIFT_Q = Key.char("q"), Key.char("Q")
R, SHIFT_R = Key.char("r"), Key.char("R")

CONFIRM_YES = frozenset({Y, SHIFT_Y})
CONFIRM_NO = frozenset({N, SHIFT_N})
CONFIRM_KEYS = CONFIRM_YES | CONFIRM_NO


class ArrowKeys(NamedTuple):
    up: Key
    down: Key
    left: Key
    right: Key


# ESC [ A / B / C / D
ANSI_ARROWS = ArrowKeys(
    up=Key(ord("A"), LeadCode.ESC),
    down=Key(ord("B"), LeadCode.ESC),
    left=Key(ord("D"), LeadCode.ESC),
    right=Key(ord("C"), LeadCode.ESC),
)

# 0xE0 followed by 0x48 / 0x50 / 0x4B / 0x4D
WINDOWS_ARROWS = ArrowKeys(
    up=Key(0x48, LeadCode.E0),
    down=Key(0x50, LeadCode.E0),
    left=Key(0x4B, LeadCode.E0),
    right=Key(0x4D, LeadCode.E0),
)


def arrow_keys(platform=None):
    """Arrow key table for the host terminal."""
    platform = sys.platform if platform is None else platform
    return WINDOWS_ARROWS if platform.startswith("win") else ANSI_ARROWS

"""
Raw keyboard decoding.

A decoder pulls one byte at a time from a binary stream and resolves it into
a `Key`. It has two states: idle, where a plain byte becomes a key on its
own, and awaiting-escaped-code, entered after a lead byte, where the
following byte(s) complete the key. Reads block until enough input is
available; a partial key is never returned.
"""

import logging
import sys

from console2048.keyboard.keys import Key, LeadCode

logger = logging.getLogger(__name__)

ESC = 0x1B
CSI_INTRODUCERS = (ord("["), ord("O"))


class DecodeError(RuntimeError):
    """The input stream ended before a complete key was read."""


class KeyDecoder:
    """
    Base decoder over a binary stream with a `read(n)` method.

    Subclasses implement `decode()` for one terminal family.
    """

    def __init__(self, stream):
        self.stream = stream

    @classmethod
    def for_platform(cls, stream, platform=None):
        platform = sys.platform if platform is None else platform
        if platform.startswith("win"):
            return WindowsKeyDecoder(stream)
        return AnsiKeyDecoder(stream)

    def read_unit(self) -> int:
        data = self.stream.read(1)
        if not data:
            raise DecodeError("Error: end of input while reading a key")
        return data[0]

    def decode(self) -> Key:
        raise NotImplementedError


class AnsiKeyDecoder(KeyDecoder):
    """
    Decoder for ANSI/VT terminals.

    ESC introduces an escape sequence:
        ESC [ A          -> Key('A', ESC)   (arrows, also ESC O A)
        ESC [ 1 ; 5 A    -> Key('A', ESC)   (modified arrows)
        ESC [ 3 ~        -> Key('3', ESC)   (Delete, PgUp 5~, PgDn 6~)
        ESC x            -> Key('x', ESC)   (Alt+x)

    A lone ESC is not a key: it always waits for the next byte. So ESC then
    `q` decodes as Alt+q and never reaches a binding for plain `q`.
    """

    def decode(self) -> Key:
        unit = self.read_unit()
        if unit != ESC:
            return Key(unit)

        introducer = self.read_unit()
        if introducer not in CSI_INTRODUCERS:
            key = Key(introducer, LeadCode.ESC)
            logger.debug("ESC %s -> %s", chr(introducer), key)
            return key

        # Parameter bytes (digits, ';') run until a final byte in 0x40-0x7E.
        params = []
        unit = self.read_unit()
        while 0x30 <= unit <= 0x3F:
            params.append(unit)
            unit = self.read_unit()

        if unit == ord("~") and params:
            key = Key(params[0], LeadCode.ESC)
        else:
            key = Key(unit, LeadCode.ESC)
        logger.debug(
            "ESC %s%s%s -> %s", chr(introducer), bytes(params).decode("ascii"), chr(unit), key
        )
        return key


class WindowsKeyDecoder(KeyDecoder):
    """Decoder for the Windows console, where 0x00 and 0xE0 lead extended keys."""

    LEADS = {
        0x00: LeadCode.NUL,
        0xE0: LeadCode.E0,
    }

    def decode(self) -> Key:
        unit = self.read_unit()
        lead = self.LEADS.get(unit)
        if lead is None:
            return Key(unit)
        return Key(self.read_unit(), lead)


class WindowsConsoleStream:
    """`read(n)` over msvcrt.getch, which returns one unbuffered byte per call."""

    def __init__(self):
        import msvcrt

        self._getch = msvcrt.getch

    def read(self, n=1):
        return b"".join(self._getch() for _ in range(n))


def console_stream():
    """The byte stream of the interactive console."""
    if sys.platform.startswith("win"):
        return WindowsConsoleStream()
    return sys.stdin.buffer


def input_waiting(stream) -> bool:
    """True if a key can be read from `stream` without blocking."""
    if isinstance(stream, WindowsConsoleStream):
        import msvcrt

        return bool(msvcrt.kbhit())

    import select

    readable, _, _ = select.select([stream], [], [], 0)
    return bool(readable)

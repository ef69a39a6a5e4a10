"""
Scoped raw terminal mode.

On POSIX terminals echo and canonical (line-buffered) input are switched off
so every keypress reaches the decoder immediately. The saved attributes are
restored on every exit path. The Windows console needs no setup because
`msvcrt.getch` already reads unbuffered, unechoed keys, and input that is not
a terminal (a pipe or a file) is read as it is.
"""

import sys


class TerminalRawMode:
    def __init__(self, stream=None):
        self.stream = sys.stdin if stream is None else stream
        self._fd = None
        self._saved = None

    def __enter__(self):
        try:
            import termios
        except ImportError:
            # Windows console
            return self

        if not self.stream.isatty():
            return self

        self._fd = self.stream.fileno()
        self._saved = termios.tcgetattr(self._fd)
        raw = termios.tcgetattr(self._fd)
        raw[3] &= ~(termios.ECHO | termios.ICANON)   # lflags
        raw[6][termios.VMIN] = 1
        raw[6][termios.VTIME] = 0
        termios.tcsetattr(self._fd, termios.TCSAFLUSH, raw)
        return self

    @property
    def active(self):
        """True while terminal attributes are saved and waiting to be restored."""
        return self._saved is not None

    def __exit__(self, exc_type, exc, tb):
        if self._saved is not None:
            import termios

            termios.tcsetattr(self._fd, termios.TCSAFLUSH, self._saved)
            self._saved = None
        return False

"""
Name: keys
Description: single keystroke reader for interactive cat
Author:
License: perl
"""

import sys
import os
from collections import namedtuple
from enum import Enum

# Terminal control is only available on Unix-like systems. Elsewhere the
# stream is read as-is, one character at a time.
try:
    import termios
except ImportError:
    termios = None

CTRL_C = '\x03'
SUBMIT_CHARS = ('\r', '\n')


class InterruptedRead(Exception):
    """The host cut the keystroke stream short (EOF, signal, closed tty)."""


class Key(Enum):
    CHAR = 0
    SUBMIT = 1
    INTERRUPT = 2


class KeyEvent(namedtuple('KeyEvent', ['key', 'char'])):
    __slots__ = ()

    @classmethod
    def from_char(cls, char):
        if char == CTRL_C:
            return cls(Key.INTERRUPT, char)
        if char in SUBMIT_CHARS:
            return cls(Key.SUBMIT, char)
        return cls(Key.CHAR, char)


class TerminalKeys:
    """
    Reads keystrokes from a stream one at a time.

    Used as a context manager: on a real terminal, echo, line buffering and
    signal generation are switched off on entry (so Ctrl-C arrives as a key)
    and the saved settings are put back on exit.
    """

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdin
        self._saved_settings = None
        self._fd = None

    def _terminal_fd(self):
        try:
            fd = self.stream.fileno()
        except (AttributeError, OSError, ValueError):
            return None
        return fd if os.isatty(fd) else None

    def __enter__(self):
        fd = self._terminal_fd()
        if termios is not None and fd is not None:
            self._fd = fd
            self._saved_settings = termios.tcgetattr(fd)
            new = termios.tcgetattr(fd)
            new[3] &= ~(termios.ECHO | termios.ICANON | termios.ISIG)  # lflags
            new[6][termios.VMIN] = 1
            new[6][termios.VTIME] = 0
            termios.tcsetattr(fd, termios.TCSADRAIN, new)
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._saved_settings is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_settings)
            self._saved_settings = None
        return False

    def read_key(self) -> KeyEvent:
        """Blocks until one key is available and returns it."""
        try:
            char = self.stream.read(1)
        except KeyboardInterrupt:
            raise InterruptedRead("interrupted") from None
        except OSError as e:
            raise InterruptedRead(str(e)) from e

        if char == '':
            raise InterruptedRead("end of input")
        return KeyEvent.from_char(char)

    def __iter__(self):
        while True:
            yield self.read_key()

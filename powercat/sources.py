"""
Name: sources
Description: input selection for cat (pipe, named files, or keyboard)
Author:
License: perl
"""

import sys
import os
import glob
import stat
import struct
from enum import Enum

# FIONREAD is only available on Unix-like systems. Elsewhere only
# redirected regular files are recognised as piped input.
try:
    import fcntl
    import termios
except ImportError:
    fcntl = None

from powercat.formatter import LINE_SEPARATOR
from powercat.keys import Key, TerminalKeys, InterruptedRead

DEBUG_ENV = 'POWERCAT_DEBUG'
GLOB_CHARS = '*?['


def debug_print(message):
    """Writes a trace line to stderr when POWERCAT_DEBUG is set."""
    if os.environ.get(DEBUG_ENV):
        print(f"powercat>>> {message}", file=sys.stderr)


class ResourceNotFound(Exception):
    """A named file could not be opened."""

    def __init__(self, name, reason):
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason


class ResourceReadError(Exception):
    """An opened file failed part way through reading."""

    def __init__(self, name, reason):
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason


def bytes_waiting(fd) -> int:
    """Number of bytes that can be read from fd right now without blocking."""
    try:
        st = os.fstat(fd)
        if stat.S_ISREG(st.st_mode):
            return max(0, st.st_size - os.lseek(fd, 0, os.SEEK_CUR))
        if fcntl is None:
            return 0
        buf = fcntl.ioctl(fd, termios.FIONREAD, struct.pack('i', 0))
    except OSError:
        # /dev/null and other devices don't answer FIONREAD
        return 0
    return struct.unpack('i', buf)[0]


def stdin_has_data(stream=None) -> bool:
    """True if the stream is redirected and already has input waiting."""
    stream = stream if stream is not None else sys.stdin
    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError):
        return False

    if os.isatty(fd):
        return False
    return bytes_waiting(fd) > 0


def resolve_resource(name: str, cwd: str) -> list:
    """
    Turns a file argument into the list of paths it names.

    '~' is expanded and relative names are taken from cwd. Names containing
    wildcards expand to their sorted matches, and matching nothing counts as
    not found. Plain names are returned unchecked; open() reports on them.
    """
    path = os.path.expanduser(name)
    is_pattern = any(c in name for c in GLOB_CHARS)

    if not os.path.isabs(path):
        # Wildcards in the working directory itself are literal.
        base = glob.escape(cwd) if is_pattern else cwd
        path = os.path.join(base, path)

    if is_pattern:
        matches = sorted(glob.glob(path))
        if not matches:
            raise ResourceNotFound(name, "No such file or directory")
        return matches
    return [path]


def split_lines(data: str) -> list:
    """Splits a block of text on the line separator, dropping trailing blank lines."""
    lines = data.split(LINE_SEPARATOR)
    while lines and lines[-1] == '':
        lines.pop()
    return lines


class PipedInput:
    """Everything already waiting on stdin, read in one go."""

    def __init__(self, stream):
        self.stream = stream

    def run(self, formatter, sink):
        data = self.stream.read()
        sink.println()
        for line in split_lines(data):
            sink.print(formatter.process(line))
        sink.flush()


class ResourceInput:
    """The files named on the command line, in order."""

    def __init__(self, names, cwd=None, encoding='utf-8'):
        self.names = list(names)
        self.cwd = cwd if cwd is not None else os.getcwd()
        self.encoding = encoding

    def run(self, formatter, sink):
        for name in self.names:
            paths = resolve_resource(name, self.cwd)
            debug_print(f"{name} -> {paths}")
            for path in paths:
                self._display_file(name, path, formatter, sink)

    def _display_file(self, name, path, formatter, sink):
        try:
            fh = open(path, 'r', encoding=self.encoding, errors='replace')
        except OSError as e:
            raise ResourceNotFound(name, e.strerror or str(e)) from e

        with fh:
            for line in self._read_lines(name, fh):
                sink.print(formatter.process(line))
        sink.flush()

    @staticmethod
    def _read_lines(name, fh):
        try:
            for line in fh:
                if line.endswith('\n'):
                    line = line[:-1]
                yield line
        except OSError as e:
            raise ResourceReadError(name, e.strerror or str(e)) from e


class ReadState(Enum):
    ACCUMULATING = 0
    FLUSH_LINE = 1
    TERMINATED = 2


class InteractiveInput:
    """
    Lines typed at the keyboard.

    Each key is echoed as it arrives. Enter formats and writes the line typed
    so far, Ctrl-C ends the session. If the host cuts the keystroke stream
    (EOF, a signal), the session ends the same quiet way.
    """

    def __init__(self, keys=None):
        self.keys = keys if keys is not None else TerminalKeys()
        self.state = ReadState.ACCUMULATING

    def run(self, formatter, sink):
        buffer = []
        self.state = ReadState.ACCUMULATING
        try:
            with self.keys as keys:
                while self.state is not ReadState.TERMINATED:
                    if self.state is ReadState.FLUSH_LINE:
                        sink.println()
                        sink.print(formatter.process(''.join(buffer)))
                        buffer = []
                        self.state = ReadState.ACCUMULATING
                    else:
                        event = keys.read_key()
                        if event.key is Key.INTERRUPT:
                            self.state = ReadState.TERMINATED
                        elif event.key is Key.SUBMIT:
                            self.state = ReadState.FLUSH_LINE
                        else:
                            buffer.append(event.char)
                            sink.print(event.char)
                    sink.flush()
        except InterruptedRead as e:
            debug_print(f"keyboard read ended: {e}")
        self.state = ReadState.TERMINATED


class SourceDispatcher:
    """Picks the input for a run: pipe first, then files, then the keyboard."""

    def __init__(self, files=None, cwd=None, stdin=None, keys=None, probe=stdin_has_data):
        self.files = list(files or [])
        self.cwd = cwd
        self.stdin = stdin if stdin is not None else sys.stdin
        self.keys = keys
        self.probe = probe

    def select(self):
        if self.probe(self.stdin):
            debug_print("reading piped input")
            return PipedInput(self.stdin)
        if self.files:
            debug_print(f"reading {len(self.files)} named resource(s)")
            return ResourceInput(self.files, self.cwd)
        debug_print("reading from the keyboard")
        return InteractiveInput(self.keys if self.keys is not None else TerminalKeys(self.stdin))

    def run(self, formatter, sink):
        self.select().run(formatter, sink)

"""
Name: formatter
Description: per-line display rules for cat (numbering, squeezing, ^I and $ markers)
Author:
License: perl
"""

from collections import namedtuple

# Text-mode streams translate '\n' to the platform separator on write.
LINE_SEPARATOR = '\n'
NUMBER_WIDTH = 6

_FLAG_NAMES = ['show_all', 'number_nonblank', 'show_ends', 'number',
               'squeeze_blank', 'show_tabs', 'help']


class FlagSet(namedtuple('FlagSet', _FLAG_NAMES)):
    """The display options for one run. Build it with FlagSet.resolve()."""
    __slots__ = ()

    @classmethod
    def resolve(cls, show_all=False, number_nonblank=False, show_ends=False,
                number=False, squeeze_blank=False, show_tabs=False, help=False):
        # -A is shorthand for -ET
        if show_all:
            show_ends = True
            show_tabs = True
        return cls(bool(show_all), bool(number_nonblank), bool(show_ends),
                   bool(number), bool(squeeze_blank), bool(show_tabs), bool(help))


class LineFormatterState:
    """Counter and blank-line memory carried from one line to the next."""

    def __init__(self, start=1):
        self.line_counter = start
        self.previous_line_was_suppressed_blank = False
        self.previous_line_was_blank = False

    def __repr__(self):
        return (f"LineFormatterState(line_counter={self.line_counter}, "
                f"previous_line_was_blank={self.previous_line_was_blank}, "
                f"previous_line_was_suppressed_blank={self.previous_line_was_suppressed_blank})")


def process(line: str, flags: FlagSet, state: LineFormatterState) -> str:
    """
    Renders a single line (without its terminator) according to the flags.

    Returns the exact text to write, terminator included. A blank line that
    is squeezed away comes back as the empty string, meaning nothing at all
    should be written for it.
    """
    is_blank = len(line) == 0

    # Handle -s (squeeze blank lines)
    if is_blank:
        suppressed = state.previous_line_was_blank and flags.squeeze_blank
        state.previous_line_was_suppressed_blank = suppressed
        state.previous_line_was_blank = True
    else:
        suppressed = False
        state.previous_line_was_blank = False
        state.previous_line_was_suppressed_blank = False

    if suppressed:
        return ''

    # Handle -b and -n. -b wins when both are given.
    prefix = ''
    if flags.number_nonblank:
        if not is_blank:
            prefix = f"{state.line_counter:{NUMBER_WIDTH}d} "
            state.line_counter += 1
    elif flags.number:
        prefix = f"{state.line_counter:{NUMBER_WIDTH}d} "
        state.line_counter += 1

    body = line
    if flags.show_tabs:
        body = body.replace('\t', '^I')

    end = '$' if flags.show_ends else ''

    return prefix + body + end + LINE_SEPARATOR


class LineFormatter:
    """Binds one FlagSet to one LineFormatterState for the length of a run."""

    def __init__(self, flags: FlagSet, state: LineFormatterState = None):
        self.flags = flags
        self.state = state if state is not None else LineFormatterState()

    def process(self, line: str) -> str:
        return process(line, self.flags, self.state)

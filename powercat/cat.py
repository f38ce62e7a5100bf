#!/usr/bin/env python3
"""
Name: cat
Description: concatenate files and print on the standard output
Author:
License: perl
"""

import sys
import os
import argparse

from powercat import __version__
from powercat.formatter import FlagSet, LineFormatter
from powercat.sinks import OutputSink
from powercat.sources import (SourceDispatcher, ResourceNotFound, ResourceReadError,
                              stdin_has_data, debug_print)

EX_SUCCESS = 0
EX_FAILURE = 1


def build_parser(prog='cat') -> argparse.ArgumentParser:
    """Builds the option parser. -h is an ordinary flag so it lands in the FlagSet."""
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Concatenate files and print on the standard output.",
        usage="%(prog)s [-AbEnsTh] [file ...]",
        add_help=False
    )
    parser.add_argument('-A', '--show-all', action='store_true', help='equivalent to -ET')
    parser.add_argument('-b', '--number-nonblank', action='store_true',
                        help='number nonempty output lines, overrides -n')
    parser.add_argument('-E', '--show-ends', action='store_true', help='display $ at end of each line')
    parser.add_argument('-n', '--number', action='store_true', help='number all output lines')
    parser.add_argument('-s', '--squeeze-blank', action='store_true',
                        help='suppress repeated empty output lines')
    parser.add_argument('-T', '--show-tabs', action='store_true', help='display TAB characters as ^I')
    parser.add_argument('-h', '--help', action='store_true', help='display this help and exit')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    parser.add_argument('files', nargs='*',
                        help='Files to print. Reads piped input or the keyboard if none are given.')
    return parser


def resolve_flags(args: argparse.Namespace) -> FlagSet:
    return FlagSet.resolve(
        show_all=args.show_all,
        number_nonblank=args.number_nonblank,
        show_ends=args.show_ends,
        number=args.number,
        squeeze_blank=args.squeeze_blank,
        show_tabs=args.show_tabs,
        help=args.help,
    )


def run(argv=None, stdin=None, stdout=None, stderr=None, cwd=None, keys=None,
        probe=None) -> int:
    """Runs one cat invocation and returns its exit status."""
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr
    program_name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else 'cat'
    if program_name == '__main__.py':
        program_name = 'powercat'

    parser = build_parser(program_name)
    args = parser.parse_args(argv)
    flags = resolve_flags(args)
    sink = OutputSink(stdout)

    if flags.help:
        sink.print(parser.format_help())
        sink.flush()
        return EX_SUCCESS

    debug_print(f"flags: {flags}")
    dispatcher = SourceDispatcher(args.files, cwd=cwd, stdin=stdin, keys=keys,
                                  probe=probe if probe is not None else stdin_has_data)
    # One formatter for the whole run: numbering and squeezing carry over
    # from one file to the next.
    formatter = LineFormatter(flags)

    try:
        dispatcher.run(formatter, sink)
    except (ResourceNotFound, ResourceReadError) as e:
        sink.flush()
        print(f"{program_name}: {e}", file=stderr)
        return EX_FAILURE

    return EX_SUCCESS


def main():
    """Parses arguments and runs the cat logic."""
    try:
        status = run()
    except BrokenPipeError:
        # The reader went away (e.g. `cat file | head`). Point stdout at
        # devnull so the interpreter's final flush stays quiet.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(EX_FAILURE)

    sys.exit(status)


if __name__ == "__main__":
    main()

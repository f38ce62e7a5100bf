"""
Name: sinks
Description: append-only output stream used by cat
Author:
License: perl
"""

import sys


class OutputSink:
    """Wraps a text stream with print/println/flush."""

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdout

    def print(self, text: str):
        if text:
            self.stream.write(text)

    def println(self, text: str = ''):
        self.stream.write(text + '\n')

    def flush(self):
        self.stream.flush()

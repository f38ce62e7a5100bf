"""Tests for the keystroke reader."""

import io

import pytest

from powercat.keys import Key, KeyEvent, TerminalKeys, InterruptedRead


class RaisingStream(io.StringIO):

    def __init__(self, exc):
        super().__init__()
        self.exc = exc

    def read(self, size=-1):
        raise self.exc


class TestKeyEvent:

    @pytest.mark.parametrize("char,key", [
        ("a", Key.CHAR),
        ("\t", Key.CHAR),
        ("\r", Key.SUBMIT),
        ("\n", Key.SUBMIT),
        ("\x03", Key.INTERRUPT),
    ])
    def test_from_char(self, char, key):
        event = KeyEvent.from_char(char)
        assert event.key is key
        assert event.char == char


class TestTerminalKeys:

    def test_reads_one_key_at_a_time(self):
        keys = TerminalKeys(io.StringIO("ab\r"))
        assert keys.read_key() == KeyEvent(Key.CHAR, "a")
        assert keys.read_key() == KeyEvent(Key.CHAR, "b")
        assert keys.read_key() == KeyEvent(Key.SUBMIT, "\r")

    def test_end_of_input_is_an_interrupted_read(self):
        keys = TerminalKeys(io.StringIO("x"))
        events = []
        with pytest.raises(InterruptedRead):
            for event in keys:
                events.append(event)
        assert events == [KeyEvent(Key.CHAR, "x")]

    def test_keyboard_interrupt_becomes_interrupted_read(self):
        keys = TerminalKeys(RaisingStream(KeyboardInterrupt()))
        with pytest.raises(InterruptedRead):
            keys.read_key()

    def test_os_error_becomes_interrupted_read(self):
        keys = TerminalKeys(RaisingStream(OSError(5, "Input/output error")))
        with pytest.raises(InterruptedRead):
            keys.read_key()

    def test_context_manager_without_terminal(self):
        keys = TerminalKeys(io.StringIO("q"))
        with keys as entered:
            assert entered is keys
            assert entered.read_key().char == "q"
        assert keys._saved_settings is None

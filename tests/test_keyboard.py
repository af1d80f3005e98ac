"""Test keyboard token parsing."""

import pytest

from minivim.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


@pytest.mark.parametrize("token,key_type,value", [
    ("a", KeyType.REGULAR, "a"),
    ("é", KeyType.REGULAR, "é"),
    ("<SPACE>", KeyType.REGULAR, " "),
    ("<TAB>", KeyType.REGULAR, "\t"),
    ("\t", KeyType.REGULAR, "\t"),
    ("<LEFT>", KeyType.SPECIAL, "left"),
    ("<PAGEUP>", KeyType.SPECIAL, "page_up"),
    ("<F1>", KeyType.SPECIAL, "f1"),
    ("<BACKSPACE>", KeyType.SPECIAL, "backspace"),
    ("\x7f", KeyType.SPECIAL, "backspace"),
    ("<ESC>", KeyType.SPECIAL, "escape"),
    ("\x1b", KeyType.SPECIAL, "escape"),
    ("<Ctrl-m>", KeyType.SPECIAL, "enter"),
    ("\r", KeyType.SPECIAL, "enter"),
    ("<Ctrl-j>", KeyType.CTRL, "j"),
    ("\n", KeyType.CTRL, "j"),
    ("<Ctrl-q>", KeyType.CTRL, "q"),
    ("\x13", KeyType.CTRL, "s"),
    ("<Esc+LEFT>", KeyType.ALT, "left"),
    ("<Meta-f>", KeyType.ALT, "f"),
])
def test_parse_key(handler, token, key_type, value):
    event = handler.parse_key(token)
    assert event.key_type == key_type
    assert event.value == value


def test_ctrl_flag(handler):
    event = handler.parse_key("<Ctrl-w>")
    assert event.is_ctrl
    assert not event.is_alt


def test_get_key_event_reads_from_terminal(handler):
    handler.terminal.add_key("<Ctrl-f>")
    event = handler.get_key_event(timeout=0)
    assert event == KeyEvent(key_type=KeyType.CTRL, value="f", raw="<Ctrl-f>", is_ctrl=True)
    assert handler.get_key_event(timeout=0) is None


def test_printable():
    assert KeyEvent(KeyType.REGULAR, "x", "x").is_printable()
    assert not KeyEvent(KeyType.REGULAR, "\x1f", "\x1f").is_printable()
    assert not KeyEvent(KeyType.SPECIAL, "left", "<LEFT>").is_printable()

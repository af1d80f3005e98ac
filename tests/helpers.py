"""Fakes and key builders shared by the tests."""

from unittest.mock import MagicMock

from minivim.buffer import TextBuffer
from minivim.editor import Editor
from minivim.errors import ClipboardFailure
from minivim.keyboard import KeyEvent, KeyType, ResizeEvent, ctrl_key


class FakeTerminal:
    """Stands in for TerminalInterface; records every frame drawn."""

    def __init__(self, width=80, height=24):
        self.width = width
        self.height = height
        self.term = MagicMock()
        self.frames = []
        self.invalidations = 0

    def setup(self):
        pass

    def cleanup(self):
        pass

    def get_key(self, timeout=None):
        return None

    def invalidate_frame(self):
        self.invalidations += 1

    def update_frame(self, model):
        self.frames.append(model)


class FakeClipboard:
    def __init__(self, content=""):
        self.content = content
        self.fail = False

    def copy_text(self, text):
        if self.fail:
            raise ClipboardFailure("Clipboard unavailable: no copy/paste mechanism")
        self.content = text

    def paste_text(self):
        if self.fail:
            raise ClipboardFailure("Clipboard unavailable: no copy/paste mechanism")
        return self.content


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_editor(content="", filename=None, width=80, height=24):
    editor = Editor(terminal=FakeTerminal(width, height), clipboard=FakeClipboard(),
                    clock=FakeClock())
    editor.buffer = TextBuffer(content, filename=filename)
    return editor


def key(ch):
    return KeyEvent(key_type=KeyType.REGULAR, value=ch, raw=ch)


def special(name):
    return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=name, is_sequence=True)


def ctrl(letter):
    return ctrl_key(letter)


def alt(name):
    return KeyEvent(key_type=KeyType.ALT, value=name, raw=name, is_alt=True)


def press(editor, *events):
    for event in events:
        editor.handle_event(event)


def type_text(editor, text):
    for ch in text:
        editor.handle_event(key(ch))


def resize(editor, width, height):
    editor.handle_event(ResizeEvent(width, height))

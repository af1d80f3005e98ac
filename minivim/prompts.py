"""Single-line prompt modes: save-as, jump-to-line and exit confirmation."""

from dataclasses import dataclass
from typing import ClassVar

from .buffer import split_graphemes
from .constants import EditorConstants
from .errors import InvalidInput
from .keyboard import KeyType
from .modes import ModeHandler, ModeKind


def parse_line_number(text: str) -> int:
    """Parse a 1-based line number typed at a prompt."""
    text = text.strip()
    if not text:
        raise InvalidInput("No line number given")
    if not (text.isascii() and text.isdigit()):
        raise InvalidInput(f"Not a line number: {text}")
    return int(text)


def validate_filename(text: str) -> str:
    name = text.strip()
    if not name:
        raise InvalidInput("Filename cannot be empty")
    if '\x00' in name:
        raise InvalidInput("Filename cannot contain NUL")
    return name


def _edit_field(text: str, key_event):
    """Apply a backspace or a typed character to a prompt field.

    Returns the new text, or None if the key does not edit the field.
    """
    if key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
        return ''.join(split_graphemes(text)[:-1])
    if key_event.is_printable():
        return text + key_event.value
    return None


@dataclass
class SaveAsMode:
    kind: ClassVar[ModeKind] = ModeKind.SAVE_AS
    text: str = ""
    quit_after: bool = False


class SaveAsHandler(ModeHandler):
    kind = ModeKind.SAVE_AS

    def handle_key(self, editor, mode, key_event):
        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            editor.finish_mode()
            editor.status_message = "Save cancelled"
            return
        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            try:
                filename = validate_filename(mode.text)
            except InvalidInput as e:
                editor.status_message = str(e)
                return
            # On failure save_to reports the error and we stay at the prompt
            if editor.save_to(filename):
                editor.finish_mode()
                if mode.quit_after:
                    editor.quit()
            return
        edited = _edit_field(mode.text, key_event)
        if edited is not None:
            mode.text = edited

    def prompt(self, editor, mode):
        return EditorConstants.SAVE_AS_PROMPT + mode.text

    def cursor_on_prompt(self, editor, mode):
        return True


@dataclass
class JumpToLineMode:
    kind: ClassVar[ModeKind] = ModeKind.JUMP_TO_LINE
    digits: str = ""


class JumpToLineHandler(ModeHandler):
    """Digits only; the target is 1-based and clamped to the buffer."""

    kind = ModeKind.JUMP_TO_LINE

    def handle_key(self, editor, mode, key_event):
        if key_event.key_type == KeyType.SPECIAL:
            if key_event.value == 'escape':
                editor.finish_mode()
            elif key_event.value == 'backspace':
                mode.digits = mode.digits[:-1]
            elif key_event.value == 'enter':
                editor.finish_mode()
                try:
                    number = parse_line_number(mode.digits)
                except InvalidInput as e:
                    editor.status_message = str(e)
                    return
                editor.jump_to_line(number)
        elif key_event.key_type == KeyType.REGULAR:
            if key_event.value.isascii() and key_event.value.isdigit():
                mode.digits += key_event.value
            else:
                editor.status_message = "Line numbers are digits only"

    def prompt(self, editor, mode):
        return EditorConstants.JUMP_PROMPT + mode.digits

    def cursor_on_prompt(self, editor, mode):
        return True


@dataclass
class ConfirmExitMode:
    kind: ClassVar[ModeKind] = ModeKind.CONFIRM_EXIT


class ConfirmExitHandler(ModeHandler):
    """Ctrl-Y leaves without saving, Ctrl-N saves first."""

    kind = ModeKind.CONFIRM_EXIT

    def handle_key(self, editor, mode, key_event):
        if key_event.key_type == KeyType.CTRL and key_event.value == 'y':
            editor.quit()
        elif key_event.key_type == KeyType.CTRL and key_event.value == 'n':
            editor.finish_mode()
            editor.request_save(quit_after=True)
        # Every other key is ignored until one of the two answers arrives

    def prompt(self, editor, mode):
        return EditorConstants.CONFIRM_EXIT_MESSAGE

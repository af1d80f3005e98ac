"""Vim mode: single-key motions, two-key sequences and ``:`` commands."""

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from .buffer import CursorPosition
from .constants import EditorConstants
from .keyboard import KeyType
from .modes import ModeHandler, ModeKind

# Motions usable alone and after d/y
MOTIONS = {
    'h': 'move_left',
    'j': 'move_down',
    'k': 'move_up',
    'l': 'move_right',
    '0': 'move_to_line_start',
    '$': 'move_to_line_end',
}

ARROWS = {'left': 'h', 'down': 'j', 'up': 'k', 'right': 'l'}

SEQUENCE_STARTERS = ('g', 'G', 'd', 'y')


@dataclass
class PendingVimSequence:
    """Keys typed so far of an incomplete sequence and when the first arrived."""
    keys: str = ""
    started_at: Optional[float] = None

    def push(self, key: str, now: float) -> None:
        if not self.keys:
            self.started_at = now
        self.keys += key

    def clear(self) -> None:
        self.keys = ""
        self.started_at = None

    def expired(self, now: float, timeout: float = EditorConstants.VIM_SEQUENCE_TIMEOUT) -> bool:
        return bool(self.keys) and self.started_at is not None and now - self.started_at > timeout


@dataclass
class VimMode:
    kind: ClassVar[ModeKind] = ModeKind.VIM
    pending: PendingVimSequence = field(default_factory=PendingVimSequence)
    command: Optional[str] = None  # Text after ':' while a command is being typed


class VimHandler(ModeHandler):
    """Key handling for Vim mode.

    A sequence key (g, G, d, y) waits for its second key. A second key that
    does not complete a sequence, or one that arrives after the timeout,
    drops the pending key and is handled on its own.
    """

    kind = ModeKind.VIM

    def handle_key(self, editor, mode, key_event):
        if mode.command is not None:
            self._handle_command_key(editor, mode, key_event)
            return

        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            editor.finish_mode()
            return

        key = self._key_name(key_event)
        now = editor.clock()
        if mode.pending.expired(now):
            mode.pending.clear()

        if mode.pending.keys:
            first = mode.pending.keys
            mode.pending.clear()
            if self._complete_sequence(editor, first, key):
                return
        self._dispatch(editor, mode, key, now)

    @staticmethod
    def _key_name(key_event) -> Optional[str]:
        if key_event.key_type == KeyType.REGULAR:
            return key_event.value
        if key_event.key_type == KeyType.SPECIAL and key_event.value in ARROWS:
            return ARROWS[key_event.value]
        return None

    def _dispatch(self, editor, mode, key, now):
        if key in MOTIONS:
            getattr(editor.cursor, MOTIONS[key])(editor.buffer)
            editor.follow_cursor()
        elif key == 'i':
            editor.finish_mode()
        elif key == 'o':
            self._open_line_below(editor)
            editor.finish_mode()
        elif key in SEQUENCE_STARTERS:
            mode.pending.push(key, now)
        elif key == ':':
            mode.command = ""
        # Anything else is not a Vim command and does nothing

    def _complete_sequence(self, editor, first, key) -> bool:
        """Run ``first`` + ``key`` if it is a known sequence."""
        if first == key == 'g':
            editor.cursor.move_to_buffer_start(editor.buffer)
        elif first == key == 'G':
            editor.cursor.move_to_buffer_end(editor.buffer)
        elif first == key and key in ('d', 'y'):
            self._line_operation(editor, first, editor.cursor.line, editor.cursor.line)
        elif first in ('d', 'y') and key in ('j', 'k'):
            line = editor.cursor.line
            other = line + 1 if key == 'j' else line - 1
            if not 0 <= other < editor.buffer.line_count():
                return True
            self._line_operation(editor, first, min(line, other), max(line, other))
        elif first in ('d', 'y') and key in MOTIONS:
            self._range_operation(editor, first, key)
        else:
            return False
        editor.follow_cursor()
        return True

    def _line_operation(self, editor, operator, first_line, last_line):
        """dd / yy and their j/k extensions: whole lines."""
        buffer = editor.buffer
        text = ''.join(buffer.line_text(i) + '\n' for i in range(first_line, last_line + 1))
        if operator == 'y':
            if editor.copy_to_clipboard(text):
                count = last_line - first_line + 1
                editor.status_message = f"{count} line{'s' if count > 1 else ''} yanked"
            return
        for _ in range(first_line, last_line + 1):
            buffer.remove_line(first_line)
        editor.cursor.move_to(buffer, CursorPosition(first_line, 0))

    def _range_operation(self, editor, operator, motion):
        """d/y with a horizontal motion: from the cursor to the motion target."""
        buffer = editor.buffer
        line, column = editor.cursor.line, editor.cursor.column
        length = buffer.line_length(line)
        target = {
            'h': max(column - 1, 0),
            'l': min(column + 1, length),
            '0': 0,
            '$': length,
        }[motion]
        start = CursorPosition(line, min(column, target))
        end = CursorPosition(line, max(column, target))
        if start == end:
            return
        if operator == 'y':
            editor.copy_to_clipboard(buffer.text_range(start, end))
        else:
            buffer.delete_range(start, end)
        editor.cursor.move_to(buffer, start)

    def _open_line_below(self, editor):
        line = editor.cursor.line
        end = CursorPosition(line, editor.buffer.line_length(line))
        editor.cursor.move_to(editor.buffer, editor.buffer.split_line(end))
        editor.follow_cursor()

    # --- ':' commands ---

    def _handle_command_key(self, editor, mode, key_event):
        if key_event.key_type == KeyType.SPECIAL:
            if key_event.value == 'escape':
                mode.command = None
            elif key_event.value == 'backspace':
                mode.command = mode.command[:-1] if mode.command else None
            elif key_event.value == 'enter':
                word = mode.command.strip()
                mode.command = None
                self.execute_command(editor, word)
        elif key_event.is_printable():
            mode.command += key_event.value

    def execute_command(self, editor, word: str) -> None:
        if not word:
            return
        if word == 'w':
            editor.request_save()
        elif word == 'wq':
            editor.request_save(quit_after=True)
        elif word == 'q':
            editor.request_quit()
        elif word == 'q!':
            editor.quit()
        elif word.isascii() and word.isdigit():
            editor.jump_to_line(int(word))
        else:
            editor.status_message = f"Not an editor command: {word}"

    def prompt(self, editor, mode):
        if mode.command is not None:
            return ':' + mode.command
        if mode.pending.keys:
            return "-- VIM -- " + mode.pending.keys
        return "-- VIM --"

    def cursor_on_prompt(self, editor, mode):
        return mode.command is not None

"""Highlight mode: select a range, then copy or delete it."""

from dataclasses import dataclass
from typing import ClassVar, Optional

from .buffer import CursorPosition, TextBuffer
from .errors import ClipboardFailure
from .keyboard import KeyType
from .modes import ModeHandler, ModeKind, ViewSnapshot
from .view import HighlightSpan


@dataclass
class SelectionRange:
    """Anchor fixed at mode entry, live end following the cursor.

    The selection covers every grapheme between the two ends, including the
    one under the later end.
    """
    anchor: CursorPosition
    live: CursorPosition

    def normalized(self) -> tuple[CursorPosition, CursorPosition]:
        start, end = self.anchor, self.live
        if end < start:
            start, end = end, start
        return start, end

    def bounds(self, buffer: TextBuffer) -> tuple[CursorPosition, CursorPosition]:
        """Half-open buffer range [start, end) covered by the selection."""
        start, end = self.normalized()
        end_column = min(end.column + 1, buffer.line_length(end.line))
        return start, CursorPosition(end.line, end_column)


@dataclass
class HighlightMode:
    selection: SelectionRange
    kind: ClassVar[ModeKind] = ModeKind.HIGHLIGHT
    snapshot: Optional[ViewSnapshot] = None


_MOTIONS = {
    (KeyType.SPECIAL, 'left'): 'move_left',
    (KeyType.SPECIAL, 'right'): 'move_right',
    (KeyType.SPECIAL, 'up'): 'move_up',
    (KeyType.SPECIAL, 'down'): 'move_down',
    (KeyType.REGULAR, 'h'): 'move_left',
    (KeyType.REGULAR, 'l'): 'move_right',
    (KeyType.REGULAR, 'k'): 'move_up',
    (KeyType.REGULAR, 'j'): 'move_down',
    (KeyType.REGULAR, '0'): 'move_to_line_start',
    (KeyType.REGULAR, '$'): 'move_to_line_end',
}

_DELETE_KEYS = {
    (KeyType.SPECIAL, 'backspace'),
    (KeyType.SPECIAL, 'delete'),
    (KeyType.REGULAR, 'd'),
}


class HighlightHandler(ModeHandler):
    kind = ModeKind.HIGHLIGHT

    def handle_key(self, editor, mode, key_event):
        key = (key_event.key_type, key_event.value)
        if key in _MOTIONS:
            getattr(editor.cursor, _MOTIONS[key])(editor.buffer)
            mode.selection.live = editor.cursor.position
            editor.follow_cursor()
        elif key == (KeyType.CTRL, 'c'):
            self._copy(editor, mode)
        elif key in _DELETE_KEYS:
            self._delete(editor, mode)
        elif key == (KeyType.SPECIAL, 'escape'):
            editor.cancel_mode()

    def _copy(self, editor, mode):
        start, end = mode.selection.bounds(editor.buffer)
        text = editor.buffer.text_range(start, end)
        try:
            editor.clipboard.copy_text(text)
        except ClipboardFailure as e:
            # Stay in Highlight with the selection intact so the user can retry
            editor.status_message = str(e)
            return
        editor.finish_mode()
        editor.status_message = "Copied selection"

    def _delete(self, editor, mode):
        start, end = mode.selection.bounds(editor.buffer)
        editor.buffer.delete_range(start, end)
        editor.cursor.move_to(editor.buffer, start)
        editor.finish_mode()
        editor.follow_cursor()

    def prompt(self, editor, mode):
        return "Highlight: Ctrl-C copy | d delete | Esc cancel"

    def highlights(self, editor, mode):
        start, end = mode.selection.bounds(editor.buffer)
        spans = []
        for line in range(start.line, end.line + 1):
            first = start.column if line == start.line else 0
            last = end.column if line == end.line else editor.buffer.line_length(line)
            spans.append(HighlightSpan(line, first, last))
        return spans

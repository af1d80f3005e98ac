"""Grapheme-indexed text buffer.

Lines are stored as lists of grapheme clusters so that a column always names
a user-perceived character, never a byte or a lone combining mark.
"""

from dataclasses import dataclass
from typing import Optional

import regex

from .errors import OutOfBounds

_GRAPHEME = regex.compile(r'\X')


def split_graphemes(text: str) -> list[str]:
    """Split text into extended grapheme clusters."""
    return _GRAPHEME.findall(text)


@dataclass(frozen=True, order=True)
class CursorPosition:
    """A (line, column) pair, both zero-based, ordered in document order."""
    line: int = 0
    column: int = 0


class TextBuffer:
    """The document: an ordered list of lines, each a list of graphemes.

    The buffer never clamps. Positional operations raise ``OutOfBounds``
    when addressed outside the current bounds; callers clamp through the
    cursor model first.
    """

    def __init__(self, content: str = "", filename: Optional[str] = None):
        self.filename = filename
        self._lines: list[list[str]] = [[]]
        self.dirty = False
        self.load(content)

    # --- Loading and serialization ---

    def load(self, content: str) -> None:
        """Replace the whole document; the result is clean."""
        self._lines = [split_graphemes(part) for part in content.split('\n')]
        self.dirty = False

    def serialize(self) -> str:
        return '\n'.join(''.join(line) for line in self._lines)

    def mark_saved(self) -> None:
        """Clear the dirty flag after a successful save."""
        self.dirty = False

    # --- Queries ---

    def line_count(self) -> int:
        return len(self._lines)

    def line(self, index: int) -> list[str]:
        """Return a copy of line ``index`` as a list of grapheme clusters."""
        self._check_line(index)
        return list(self._lines[index])

    def line_length(self, index: int) -> int:
        self._check_line(index)
        return len(self._lines[index])

    def line_text(self, index: int) -> str:
        self._check_line(index)
        return ''.join(self._lines[index])

    def is_empty(self) -> bool:
        return len(self._lines) == 1 and not self._lines[0]

    def text_range(self, start: CursorPosition, end: CursorPosition) -> str:
        """Return the text in the half-open range [start, end)."""
        self._check_range(start, end)
        if start.line == end.line:
            return ''.join(self._lines[start.line][start.column:end.column])
        parts = [''.join(self._lines[start.line][start.column:])]
        parts.extend(''.join(line) for line in self._lines[start.line + 1:end.line])
        parts.append(''.join(self._lines[end.line][:end.column]))
        return '\n'.join(parts)

    # --- Mutation ---

    def insert(self, position: CursorPosition, text: str) -> CursorPosition:
        """Insert text (which may contain newlines) at position.

        Returns the position just past the inserted text.
        """
        self._check_position(position)
        if not text:
            return position

        line = self._lines[position.line]
        before = ''.join(line[:position.column])
        after = ''.join(line[position.column:])

        parts = text.split('\n')
        parts[0] = before + parts[0]
        end_prefix = parts[-1]
        parts[-1] = parts[-1] + after

        # Re-segment whole lines: a combining mark typed after a base
        # character joins it into a single cluster.
        new_lines = [split_graphemes(part) for part in parts]
        self._lines[position.line:position.line + 1] = new_lines
        self.dirty = True

        end_column = min(len(split_graphemes(end_prefix)), len(new_lines[-1]))
        return CursorPosition(position.line + len(parts) - 1, end_column)

    def delete_range(self, start: CursorPosition, end: CursorPosition) -> str:
        """Delete the half-open range [start, end), joining boundary lines.

        Returns the removed text.
        """
        self._check_range(start, end)
        if start == end:
            return ""
        removed = self.text_range(start, end)
        head = ''.join(self._lines[start.line][:start.column])
        tail = ''.join(self._lines[end.line][end.column:])
        self._lines[start.line:end.line + 1] = [split_graphemes(head + tail)]
        self.dirty = True
        return removed

    def split_line(self, position: CursorPosition) -> CursorPosition:
        """Break the line at position (Enter); returns the start of the new line."""
        return self.insert(position, '\n')

    def join_line(self, index: int) -> CursorPosition:
        """Append line ``index + 1`` to line ``index``.

        Returns the join point.
        """
        self._check_line(index)
        if index + 1 >= len(self._lines):
            raise OutOfBounds(f"cannot join last line {index}")
        join_column = len(self._lines[index])
        merged = split_graphemes(''.join(self._lines[index]) + ''.join(self._lines[index + 1]))
        self._lines[index:index + 2] = [merged]
        self.dirty = True
        return CursorPosition(index, min(join_column, len(merged)))

    def remove_line(self, index: int) -> str:
        """Remove a whole line; the last remaining line is emptied instead."""
        self._check_line(index)
        text = ''.join(self._lines[index])
        if len(self._lines) == 1:
            self._lines[0] = []
        else:
            del self._lines[index]
        self.dirty = True
        return text

    # --- Bounds checking ---

    def _check_line(self, index: int) -> None:
        if not 0 <= index < len(self._lines):
            raise OutOfBounds(f"line {index} outside [0, {len(self._lines)})")

    def _check_position(self, position: CursorPosition) -> None:
        self._check_line(position.line)
        length = len(self._lines[position.line])
        if not 0 <= position.column <= length:
            raise OutOfBounds(
                f"column {position.column} outside [0, {length}] on line {position.line}"
            )

    def _check_range(self, start: CursorPosition, end: CursorPosition) -> None:
        self._check_position(start)
        self._check_position(end)
        if end < start:
            raise OutOfBounds(f"range end {end} precedes start {start}")

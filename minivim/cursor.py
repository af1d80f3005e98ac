"""Cursor movement with a sticky desired column."""

from typing import Optional

from .buffer import CursorPosition, TextBuffer


class CursorModel:
    """Tracks the cursor position and the column remembered across vertical moves.

    The model works in buffer coordinates only; every movement takes the
    buffer it should be clamped against.
    """

    def __init__(self, position: Optional[CursorPosition] = None):
        self.position = position or CursorPosition()
        self.desired_column = self.position.column

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def column(self) -> int:
        return self.position.column

    def _set(self, line: int, column: int) -> None:
        """Horizontal placement: the desired column follows the cursor."""
        self.position = CursorPosition(line, column)
        self.desired_column = column

    def _vertical(self, buffer: TextBuffer, line: int) -> None:
        """Vertical placement: honor the desired column without changing it."""
        column = min(self.desired_column, buffer.line_length(line))
        self.position = CursorPosition(line, column)

    # --- Horizontal ---

    def move_left(self, buffer: TextBuffer) -> None:
        line, column = self.position.line, self.position.column
        if column > 0:
            self._set(line, column - 1)
        elif line > 0:
            self._set(line - 1, buffer.line_length(line - 1))
        else:
            self._set(line, column)

    def move_right(self, buffer: TextBuffer) -> None:
        line, column = self.position.line, self.position.column
        if column < buffer.line_length(line):
            self._set(line, column + 1)
        elif line + 1 < buffer.line_count():
            self._set(line + 1, 0)
        else:
            self._set(line, column)

    def move_to_line_start(self, buffer: TextBuffer) -> None:
        self._set(self.position.line, 0)

    def move_to_line_end(self, buffer: TextBuffer) -> None:
        self._set(self.position.line, buffer.line_length(self.position.line))

    def move_to(self, buffer: TextBuffer, position: CursorPosition) -> None:
        """Place the cursor at an explicit position, clamped into the buffer."""
        line = min(max(position.line, 0), buffer.line_count() - 1)
        column = min(max(position.column, 0), buffer.line_length(line))
        self._set(line, column)

    # --- Vertical ---

    def move_up(self, buffer: TextBuffer) -> None:
        if self.position.line > 0:
            self._vertical(buffer, self.position.line - 1)

    def move_down(self, buffer: TextBuffer) -> None:
        if self.position.line + 1 < buffer.line_count():
            self._vertical(buffer, self.position.line + 1)

    def move_to_buffer_start(self, buffer: TextBuffer) -> None:
        self._vertical(buffer, 0)

    def move_to_buffer_end(self, buffer: TextBuffer) -> None:
        self._vertical(buffer, buffer.line_count() - 1)

    def move_to_line(self, buffer: TextBuffer, line: int) -> None:
        """Move to a zero-based line, clamped into [0, line_count - 1]."""
        self._vertical(buffer, min(max(line, 0), buffer.line_count() - 1))

    # --- Words ---

    def move_word_right(self, buffer: TextBuffer) -> None:
        """Move to the start of the next word, spilling onto the next line."""
        line = buffer.line(self.position.line)
        start = self.position.column
        pos = start
        length = len(line)

        while pos < length and not line[pos].isspace():
            pos += 1
        while pos < length and line[pos].isspace():
            pos += 1

        if pos < length:
            self._set(self.position.line, pos)
        elif start >= length and self.position.line + 1 < buffer.line_count():
            # Started at end of line: land on the first word of the next line
            next_index = self.position.line + 1
            next_line = buffer.line(next_index)
            first = 0
            while first < len(next_line) and next_line[first].isspace():
                first += 1
            self._set(next_index, first)
        else:
            self._set(self.position.line, length)

    def move_word_left(self, buffer: TextBuffer) -> None:
        """Move to the start of the previous word, spilling onto the previous line."""
        line = buffer.line(self.position.line)
        pos = self.position.column

        if pos > 0:
            pos -= 1
            while pos > 0 and line[pos].isspace():
                pos -= 1
            while pos > 0 and not line[pos - 1].isspace():
                pos -= 1
            self._set(self.position.line, pos)
        elif self.position.line > 0:
            previous = self.position.line - 1
            self._set(previous, buffer.line_length(previous))

    # --- Keeping the cursor inside the buffer ---

    def clamp(self, buffer: TextBuffer) -> None:
        """Pull the cursor back inside the buffer after a mutation."""
        line = min(self.position.line, buffer.line_count() - 1)
        column = min(self.position.column, buffer.line_length(line))
        self.position = CursorPosition(line, column)

"""Viewport scrolling and screen composition.

Everything in this module is pure: it maps buffer state to what should be
on screen without touching the terminal.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Sequence

from wcwidth import wcswidth

from .buffer import CursorPosition, TextBuffer


def grapheme_width(grapheme: str) -> int:
    """Number of terminal cells a grapheme occupies on screen (1 or 2)."""
    width = wcswidth(grapheme)
    if width <= 1:
        return 1
    return 2


def display_width(graphemes: Sequence[str]) -> int:
    return sum(grapheme_width(g) for g in graphemes)


def glyph(grapheme: str) -> str:
    """What to draw for a grapheme.

    Zero-width or unprintable clusters get a one-cell stand-in so the cursor
    never lands on an invisible column.
    """
    if grapheme == '\t':
        return ' '
    if wcswidth(grapheme) > 0:
        return grapheme
    if any(ord(ch) < 32 or ord(ch) == 127 for ch in grapheme):
        return '|'
    return '.'


@dataclass(frozen=True)
class Viewport:
    """The visible window onto the buffer.

    ``rows`` and ``columns`` are the dimensions of the text area, which
    excludes the prompt row and the status row.
    """
    first_line: int = 0
    rows: int = 22
    columns: int = 80
    first_column: int = 0

    def follow(self, cursor: CursorPosition, line: Sequence[str] = ()) -> "Viewport":
        """Scroll by the minimal amount that brings the cursor on screen.

        ``line`` is the cursor's line as graphemes, used for horizontal
        scrolling by display width.
        """
        rows = max(1, self.rows)
        first_line = self.first_line
        if cursor.line < first_line:
            first_line = cursor.line
        elif cursor.line >= first_line + rows:
            first_line = cursor.line - rows + 1

        first_column = self.first_column
        if cursor.column < first_column:
            first_column = cursor.column
        else:
            columns = max(1, self.columns)
            while (first_column < cursor.column
                   and display_width(line[first_column:cursor.column]) >= columns):
                first_column += 1

        if first_line == self.first_line and first_column == self.first_column:
            return self
        return replace(self, first_line=first_line, first_column=first_column)

    def resized(self, rows: int, columns: int) -> "Viewport":
        return replace(self, rows=max(1, rows), columns=max(1, columns))

    def contains(self, cursor: CursorPosition) -> bool:
        return self.first_line <= cursor.line < self.first_line + self.rows


@dataclass(frozen=True)
class HighlightSpan:
    """Half-open grapheme range [start, end) on one buffer line."""
    line: int
    start: int
    end: int


@dataclass
class RenderModel:
    """A complete frame for the display sink.

    ``highlights`` holds, per text row, the cell ranges to draw in reverse
    video.
    """
    lines: list[str]
    cursor_y: int
    cursor_x: int
    highlights: list[list[tuple[int, int]]] = field(default_factory=list)
    message: str = ""
    status: str = ""
    foreground: str = "white"
    background: str = "black"


def _cell_offsets(graphemes: Sequence[str], first_column: int, columns: int):
    """Lay out the visible part of a line.

    Returns the drawn text and the cell offset of each visible grapheme,
    with one trailing entry for the cell just past the last one.
    """
    pieces = []
    offsets = []
    x = 0
    for index in range(first_column, len(graphemes)):
        g = graphemes[index]
        width = grapheme_width(g)
        if x + width > columns:
            break
        offsets.append(x)
        pieces.append(glyph(g))
        x += width
    offsets.append(x)
    return ''.join(pieces), offsets


def _column_to_cell(column: int, first_column: int, offsets: list[int]) -> int:
    index = column - first_column
    if index <= 0:
        return 0
    if index >= len(offsets):
        return offsets[-1]
    return offsets[index]


def compose_text_area(
    buffer: TextBuffer,
    viewport: Viewport,
    cursor: CursorPosition,
    spans: Sequence[HighlightSpan] = (),
    welcome: Optional[str] = None,
):
    """Compose the visible text rows.

    Returns ``(lines, highlights, cursor_y, cursor_x)``. Rows past the end of
    the buffer show ``~``; the welcome banner, when given, is centered a
    third of the way down an empty buffer.
    """
    lines = []
    highlights = []
    cursor_x = 0
    by_line: dict[int, list[HighlightSpan]] = {}
    for span in spans:
        by_line.setdefault(span.line, []).append(span)

    for row in range(viewport.rows):
        index = viewport.first_line + row
        if index >= buffer.line_count():
            if welcome and buffer.is_empty() and row == viewport.rows // 3 and row > 0:
                padding = max(0, (viewport.columns - len(welcome)) // 2)
                lines.append(("~" + " " * max(0, padding - 1) + welcome)[:viewport.columns])
            else:
                lines.append("~")
            highlights.append([])
            continue

        graphemes = buffer.line(index)
        text, offsets = _cell_offsets(graphemes, viewport.first_column, viewport.columns)
        lines.append(text)

        row_ranges = []
        for span in by_line.get(index, []):
            start = _column_to_cell(span.start, viewport.first_column, offsets)
            end = _column_to_cell(span.end, viewport.first_column, offsets)
            if end > start:
                row_ranges.append((start, end))
        highlights.append(row_ranges)

        if index == cursor.line:
            cursor_x = _column_to_cell(cursor.column, viewport.first_column, offsets)

    cursor_y = max(0, cursor.line - viewport.first_line)
    return lines, highlights, cursor_y, cursor_x

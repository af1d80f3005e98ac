"""Incremental search over the buffer."""

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from .buffer import CursorPosition, TextBuffer, split_graphemes
from .constants import EditorConstants
from .keyboard import KeyType
from .modes import ModeHandler, ModeKind, ViewSnapshot
from .view import HighlightSpan


@dataclass(frozen=True)
class MatchSpan:
    line: int
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def position(self) -> CursorPosition:
        return CursorPosition(self.line, self.start)


def find_matches(buffer: TextBuffer, query: str) -> list[MatchSpan]:
    """All non-overlapping occurrences of query, in (line, start) order.

    Matching is case-sensitive and aligned to grapheme boundaries: a query
    never matches part of a cluster.
    """
    needle = split_graphemes(query)
    if not needle:
        return []
    size = len(needle)
    matches = []
    for index in range(buffer.line_count()):
        line = buffer.line(index)
        column = 0
        while column + size <= len(line):
            if line[column:column + size] == needle:
                matches.append(MatchSpan(index, column, size))
                column += size
            else:
                column += 1
    return matches


@dataclass
class SearchState:
    """The query, its matches, and which match (if any) the user is on."""
    query: str = ""
    matches: list[MatchSpan] = field(default_factory=list)
    current: Optional[int] = None

    def update_query(self, buffer: TextBuffer, query: str) -> None:
        """Recompute matches for a new query; no match is current afterwards."""
        self.query = query
        self.matches = find_matches(buffer, query)
        self.current = None

    def next_match(self) -> Optional[MatchSpan]:
        if not self.matches:
            return None
        self.current = 0 if self.current is None else (self.current + 1) % len(self.matches)
        return self.matches[self.current]

    def previous_match(self) -> Optional[MatchSpan]:
        if not self.matches:
            return None
        if self.current is None:
            self.current = len(self.matches) - 1
        else:
            self.current = (self.current - 1) % len(self.matches)
        return self.matches[self.current]

    @property
    def current_match(self) -> Optional[MatchSpan]:
        if self.current is None:
            return None
        return self.matches[self.current]


@dataclass
class SearchMode:
    kind: ClassVar[ModeKind] = ModeKind.SEARCH
    snapshot: Optional[ViewSnapshot] = None
    state: SearchState = field(default_factory=SearchState)


class SearchHandler(ModeHandler):
    """Typing edits the query; Ctrl-N / Ctrl-P cycle through the matches.

    Enter keeps the cursor where the search left it, Esc puts everything
    back the way it was on entry.
    """

    kind = ModeKind.SEARCH

    def handle_key(self, editor, mode, key_event):
        state = mode.state
        if key_event.key_type == KeyType.SPECIAL:
            if key_event.value == 'escape':
                editor.cancel_mode()
            elif key_event.value == 'enter':
                editor.finish_mode()
            elif key_event.value == 'backspace':
                self._set_query(editor, mode, ''.join(split_graphemes(state.query)[:-1]))
        elif key_event.key_type == KeyType.CTRL and key_event.value in ('n', 'p'):
            span = state.next_match() if key_event.value == 'n' else state.previous_match()
            if span is None:
                editor.status_message = "No matches"
                return
            editor.cursor.move_to(editor.buffer, span.position)
            editor.follow_cursor()
        elif key_event.is_printable():
            self._set_query(editor, mode, state.query + key_event.value)

    def _set_query(self, editor, mode, query: str) -> None:
        mode.state.update_query(editor.buffer, query)
        if not mode.state.matches and mode.snapshot is not None:
            mode.snapshot.restore(editor)

    def prompt(self, editor, mode):
        state = mode.state
        text = EditorConstants.SEARCH_PROMPT + state.query
        if state.query:
            if state.current is None:
                text += f"  ({len(state.matches)} matches)"
            else:
                text += f"  ({state.current + 1}/{len(state.matches)})"
        return text

    def cursor_on_prompt(self, editor, mode):
        return mode.state.current is None

    def highlights(self, editor, mode):
        return [HighlightSpan(span.line, span.start, span.end) for span in mode.state.matches]

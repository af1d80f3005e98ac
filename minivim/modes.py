"""Mode kinds, entry snapshots and the handler interface.

Each mode's state lives in a small dataclass next to its handler; the
editor holds exactly one of them at a time and dispatches every key to
the handler registered for that mode's kind.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .buffer import CursorPosition
from .view import HighlightSpan, Viewport

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent
    from .theme import ThemeColors


class ModeKind(Enum):
    """Editor modes; the value is the name shown in the status line."""
    NORMAL = "Normal"
    VIM = "Vim"
    SEARCH = "Search"
    SAVE_AS = "Save as"
    HIGHLIGHT = "Highlight"
    JUMP_TO_LINE = "Jump to line"
    THEME = "Theme"
    CONFIRM_EXIT = "Confirm exit"


@dataclass(frozen=True)
class ViewSnapshot:
    """Cursor and viewport captured on mode entry, restored on cancel."""
    cursor: CursorPosition
    desired_column: int
    viewport: Viewport

    @classmethod
    def capture(cls, editor: "Editor") -> "ViewSnapshot":
        return cls(editor.cursor.position, editor.cursor.desired_column, editor.viewport)

    def restore(self, editor: "Editor") -> None:
        editor.cursor.position = self.cursor
        editor.cursor.desired_column = self.desired_column
        editor.cursor.clamp(editor.buffer)
        # Keep the current dimensions in case the terminal was resized meanwhile
        current = editor.viewport
        editor.viewport = replace(self.viewport, rows=current.rows, columns=current.columns)
        editor.follow_cursor()


@dataclass(frozen=True)
class ThemeSnapshot:
    colors: "ThemeColors"

    @classmethod
    def capture(cls, editor: "Editor") -> "ThemeSnapshot":
        return cls(editor.theme)

    def restore(self, editor: "Editor") -> None:
        editor.theme = self.colors


class ModeHandler(ABC):
    """Handles keys for one mode and describes what that mode adds to the screen."""

    kind: ModeKind

    @abstractmethod
    def handle_key(self, editor: "Editor", mode, key_event: "KeyEvent") -> None:
        """Process one key while ``mode`` is the active mode."""

    def prompt(self, editor: "Editor", mode) -> Optional[str]:
        """Text for the prompt row, or None to show the status message."""
        return None

    def cursor_on_prompt(self, editor: "Editor", mode) -> bool:
        """Whether the terminal cursor belongs at the end of the prompt."""
        return False

    def highlights(self, editor: "Editor", mode) -> list[HighlightSpan]:
        return []

    def overlay(self, editor: "Editor", mode) -> Optional[tuple[list[str], int]]:
        """Lines that replace the text area, with the cursor row, or None."""
        return None

"""Color themes: the color catalog and the two-step Theme mode."""

from dataclasses import dataclass, replace
from typing import ClassVar, Optional

from .constants import EditorConstants
from .keyboard import KeyType
from .modes import ModeHandler, ModeKind, ThemeSnapshot

# (label shown to the user, blessed color name)
COLOR_CATALOG = [
    ("DarkGrey", "bright_black"),
    ("Red", "bright_red"),
    ("Green", "bright_green"),
    ("Yellow", "bright_yellow"),
    ("Blue", "bright_blue"),
    ("Magenta", "bright_magenta"),
    ("Cyan", "bright_cyan"),
    ("White", "bright_white"),
    ("Black", "black"),
    ("DarkRed", "red"),
    ("DarkGreen", "green"),
    ("DarkYellow", "yellow"),
    ("DarkBlue", "blue"),
    ("DarkMagenta", "magenta"),
    ("DarkCyan", "cyan"),
    ("Grey", "white"),
]


def catalog_index(color: str) -> int:
    """Position of a blessed color name in the catalog, 0 if absent."""
    for index, (_, name) in enumerate(COLOR_CATALOG):
        if name == color:
            return index
    return 0


@dataclass(frozen=True)
class ThemeColors:
    foreground: str = EditorConstants.DEFAULT_FOREGROUND
    background: str = EditorConstants.DEFAULT_BACKGROUND


FOREGROUND_STEP = 0
BACKGROUND_STEP = 1


@dataclass
class ThemeMode:
    """Step 0 picks the text color, step 1 the background."""
    kind: ClassVar[ModeKind] = ModeKind.THEME
    step: int = FOREGROUND_STEP
    index: int = 0
    snapshot: Optional[ThemeSnapshot] = None


class ThemeHandler(ModeHandler):
    """Up/Down preview a color, Enter accepts it, Esc restores the old theme."""

    kind = ModeKind.THEME

    def handle_key(self, editor, mode, key_event):
        if key_event.key_type != KeyType.SPECIAL:
            return
        if key_event.value == 'up':
            mode.index = max(0, mode.index - 1)
            self._preview(editor, mode)
        elif key_event.value == 'down':
            mode.index = min(len(COLOR_CATALOG) - 1, mode.index + 1)
            self._preview(editor, mode)
        elif key_event.value == 'enter':
            self._preview(editor, mode)
            if mode.step == FOREGROUND_STEP:
                mode.step = BACKGROUND_STEP
                mode.index = catalog_index(editor.theme.background)
            else:
                editor.finish_mode()
        elif key_event.value == 'escape':
            editor.cancel_mode()

    @staticmethod
    def _preview(editor, mode):
        color = COLOR_CATALOG[mode.index][1]
        if mode.step == FOREGROUND_STEP:
            editor.theme = replace(editor.theme, foreground=color)
        else:
            editor.theme = replace(editor.theme, background=color)

    def prompt(self, editor, mode):
        if mode.step == FOREGROUND_STEP:
            return "Select text color (Up/Down, Enter, Esc cancels)"
        return "Select background color (Up/Down, Enter, Esc cancels)"

    def overlay(self, editor, mode):
        rows = editor.viewport.rows
        first = max(0, mode.index - rows + 1)
        lines = []
        for index, (label, _) in enumerate(COLOR_CATALOG[first:first + rows], start=first):
            marker = '>' if index == mode.index else ' '
            lines.append(f"{marker} {label}")
        return lines, mode.index - first

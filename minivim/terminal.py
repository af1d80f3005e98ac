"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
from typing import Optional

import blessed

from .buffer import split_graphemes
from .errors import FatalStartup
from .view import RenderModel, grapheme_width

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        # Virtual screen state for minimal updates
        self._last_lines: Optional[list[str]] = None
        self._last_message: Optional[str] = None
        self._last_status: Optional[str] = None
        self._last_colors: Optional[tuple[str, str]] = None
        self._last_size: Optional[tuple[int, int]] = None

    def setup(self):
        """Enter fullscreen mode and put the keyboard into raw mode.

        Raises FatalStartup if input cannot be read key by key; the screen
        is left untouched in that case.
        """
        if not self.term.is_a_tty:
            raise FatalStartup("standard output is not a terminal")
        if self._curtsies_input is None:
            try:
                from curtsies import Input
                self._curtsies_input = Input(keynames='curtsies')
                self._curtsies_input.__enter__()
            except Exception as e:
                self._curtsies_input = None
                raise FatalStartup(f"cannot enable raw keyboard input: {e}") from e
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.normal + self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            except Exception:
                # Teardown must finish restoring the terminal
                logger.warning("Failed to leave raw keyboard mode", exc_info=True)
            finally:
                self._curtsies_input = None

    def invalidate_frame(self) -> None:
        """Forget the cached frame so the next update repaints everything."""
        self._last_lines = None
        self._last_message = None
        self._last_status = None
        self._last_colors = None
        self._last_size = None

    def _colors(self, foreground: str, background: str) -> str:
        """Blessed sequence for the theme, e.g. ``term.white_on_black``."""
        try:
            return getattr(self.term, f"{foreground}_on_{background}")
        except AttributeError:
            logger.warning("Unknown color pair %s on %s", foreground, background)
            return ''

    def _compose_display_line(self, line: str, view_width: int,
                              ranges: Optional[list[tuple[int, int]]], base: str) -> str:
        """Compose a display line with reverse-video ranges, padded to width.

        Ranges are in terminal cells; the line is walked grapheme by grapheme
        so wide characters keep their cells.
        """
        out = []
        x = 0
        active_rev = False
        for g in split_graphemes(line):
            width = grapheme_width(g)
            if x + width > view_width:
                break
            rev = bool(ranges) and any(start <= x < end for start, end in ranges)
            if rev != active_rev:
                out.append(self.term.normal + base + (self.term.reverse if rev else ''))
                active_rev = rev
            out.append(g)
            x += width
        if active_rev:
            out.append(self.term.normal + base)
        out.append(' ' * max(0, view_width - x))
        return ''.join(out)

    def update_frame(self, model: RenderModel) -> None:
        """Diff against last frame and write only changes.

        Falls back to a full clear on first paint or when geometry or
        colors change.
        """
        width = self.term.width
        height = self.term.height
        base = self._colors(model.foreground, model.background)
        colors = (model.foreground, model.background)

        need_full_clear = (
            self._last_lines is None
            or self._last_size != (width, height)
            or self._last_colors != colors
            or len(self._last_lines) != len(model.lines)
        )
        if need_full_clear:
            print(self.term.normal + base + self.term.home + self.term.clear, end='')
            self._last_lines = ["" for _ in model.lines]
            self._last_message = None
            self._last_status = None
            self._last_size = (width, height)
            self._last_colors = colors

        for y, line in enumerate(model.lines):
            ranges = model.highlights[y] if y < len(model.highlights) else None
            new_disp = self._compose_display_line(line, width, ranges, base)
            if new_disp != self._last_lines[y]:
                print(self.term.move(y, 0) + base + new_disp, end='')
                self._last_lines[y] = new_disp

        message_row = len(model.lines)
        message = self._compose_display_line(model.message, width, None, base)
        if message != self._last_message:
            print(self.term.move(message_row, 0) + base + message, end='')
            self._last_message = message

        # Status row in reverse video
        status = self._compose_display_line(model.status, width, [(0, width)], base)
        if status != self._last_status:
            print(self.term.move(message_row + 1, 0) + base + status, end='')
            self._last_status = status

        print(self.term.move(model.cursor_y, model.cursor_x) + self.term.normal_cursor,
              end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress token from curtsies.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, or None when no key is ready.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows, including prompt and status rows."""
        return self.term.height

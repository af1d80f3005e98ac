"""Main editor controller."""

import logging
import os
import select
import signal
import sys
import termios
import time
from typing import Callable, Optional, Union

from .buffer import TextBuffer, split_graphemes
from .clipboard import ClipboardManager
from .commands import NormalHandler, NormalMode
from .constants import EditorConstants
from .cursor import CursorModel
from .errors import ClipboardFailure, IOFailure
from .filestore import FileStore
from .keyboard import KeyboardHandler, KeyEvent, ResizeEvent, ctrl_key
from .modes import ModeHandler, ModeKind
from .prompts import (ConfirmExitHandler, ConfirmExitMode, JumpToLineHandler,
                      JumpToLineMode, SaveAsHandler, SaveAsMode)
from .search import SearchHandler, SearchMode
from .selection import HighlightHandler, HighlightMode
from .terminal import TerminalInterface
from .theme import ThemeColors, ThemeHandler, ThemeMode
from .version import get_version_string
from .view import RenderModel, Viewport, compose_text_area, display_width
from .vim import VimHandler, VimMode

logger = logging.getLogger(__name__)

Mode = Union[NormalMode, VimMode, SearchMode, SaveAsMode, HighlightMode,
             JumpToLineMode, ThemeMode, ConfirmExitMode]

HELP_LINES = [
    "MINIVIM HELP",
    "",
    "NORMAL MODE                     MODES",
    "  Arrows      Move              Ctrl-F     Search",
    "  Alt-←/→     Word left/right   Ctrl-S     Highlight",
    "  Ctrl-L/R    Line start/end    Ctrl-J     Jump to line",
    "  Ctrl-U/D    Buffer start/end  Ctrl-T     Theme",
    "  Tab         Four spaces       Esc        Vim mode",
    "  Ctrl-V      Paste",
    "  Ctrl-W      Save              VIM MODE",
    "  Ctrl-Q      Quit                h j k l 0 $  Move",
    "  Ctrl-H, F1  Help                gg GG        Buffer start/end",
    "                                  dd yy        Delete/yank line",
    "SEARCH                            d/y+motion   Delete/yank range",
    "  Ctrl-N/P    Next/previous       o            Open line below",
    "  Enter       Keep position       :w :wq :q :q! :N",
    "  Esc         Go back             i, Esc       Back to Normal",
    "",
    "Press any key to continue",
]


def default_handlers() -> dict[ModeKind, ModeHandler]:
    handlers = [NormalHandler(), VimHandler(), SearchHandler(), SaveAsHandler(),
                HighlightHandler(), JumpToLineHandler(), ThemeHandler(), ConfirmExitHandler()]
    return {handler.kind: handler for handler in handlers}


class Editor:
    """Owns the buffer, cursor, viewport and current mode, and runs the event loop."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 clipboard: Optional[ClipboardManager] = None,
                 file_store: Optional[FileStore] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.clipboard = clipboard or ClipboardManager()
        self.file_store = file_store or FileStore()
        self.clock = clock
        self.buffer = TextBuffer()
        self.cursor = CursorModel()
        self.viewport = Viewport()
        self.resize(self.terminal.width, self.terminal.height)
        self.theme = ThemeColors()
        self.mode: Mode = NormalMode()
        self.handlers = default_handlers()
        missing = set(ModeKind) - set(self.handlers)
        if missing:
            raise ValueError(f"No handler for modes: {sorted(kind.name for kind in missing)}")
        self.running = False
        self.status_message: Optional[str] = None
        self.help_visible = False
        # Resize and interrupt pipe, open only while run() is active
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None
        self._ctrl_c_pressed = False

    # --- Convenience accessors ---

    @property
    def filename(self) -> Optional[str]:
        return self.buffer.filename

    @property
    def modified(self) -> bool:
        return self.buffer.dirty

    # --- Signal plumbing ---

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT (Ctrl-C) by turning it into a key event."""
        del signum, frame  # Unused
        self._ctrl_c_pressed = True
        os.write(self._resize_pipe_w, EditorConstants.INTERRUPT_PIPE_MARKER)

    # --- Main loop ---

    def run(self):
        """Run the main editor loop.

        FatalStartup from terminal setup propagates before anything is drawn.
        """
        self.terminal.setup()
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        self.running = True
        self._ctrl_c_pressed = False

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)

        old_settings = None
        try:
            with self.terminal.term.cbreak():
                old_settings = self._disable_flow_control()
                self.handle_event(ResizeEvent(self.terminal.width, self.terminal.height))
                need_draw = True

                while self.running:
                    if need_draw:
                        self._draw()
                        need_draw = False

                    # Wait for input on stdin or the signal pipe
                    ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                    if self._resize_pipe_r in ready:
                        data = os.read(self._resize_pipe_r, 1024)
                        if self._ctrl_c_pressed:
                            self._ctrl_c_pressed = False
                            self.handle_event(ctrl_key('c'))
                        if EditorConstants.RESIZE_PIPE_MARKER in data:
                            # The terminal may have reflowed or cleared the screen
                            self.terminal.invalidate_frame()
                            self.handle_event(ResizeEvent(self.terminal.width, self.terminal.height))
                        need_draw = True
                    elif 0 in ready:
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event:
                            self.handle_event(key_event)
                            need_draw = True

                if old_settings:
                    try:
                        termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                    except (termios.error, OSError):
                        logger.warning("Could not restore terminal settings")
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None
            self.terminal.cleanup()

    @staticmethod
    def _disable_flow_control():
        """Let Ctrl-S, Ctrl-Q and Ctrl-V reach the editor instead of the tty.

        ICRNL is cleared too, so Enter arrives as CR and Ctrl-J as LF.
        """
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF | termios.ICRNL)
            new_settings[3] &= ~getattr(termios, 'IEXTEN', 0)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            return old_settings
        except (termios.error, AttributeError, OSError, ValueError):
            return None

    def _draw(self):
        self.terminal.update_frame(self.render_model())

    # --- Event handling ---

    def handle_event(self, event: Union[KeyEvent, ResizeEvent]) -> None:
        """Route one event: resizes are handled here, keys go to the mode handler."""
        if isinstance(event, ResizeEvent):
            self.resize(event.width, event.height)
            return

        # If help is visible, any key dismisses it
        if self.help_visible:
            self.help_visible = False
            return

        self.status_message = None
        handler = self.handlers[self.mode.kind]
        handler.handle_key(self, self.mode, event)

    def resize(self, width: int, height: int) -> None:
        rows = max(1, height - EditorConstants.RESERVED_ROWS)
        self.viewport = self.viewport.resized(rows, width)
        if self.viewport.first_line >= self.buffer.line_count():
            self.viewport = Viewport(0, self.viewport.rows, self.viewport.columns, 0)
        self.follow_cursor()

    # --- Mode transitions ---

    def enter_mode(self, mode: Mode) -> None:
        self.mode = mode
        logger.debug("Entered %s mode", mode.kind.value)

    def finish_mode(self) -> None:
        """Leave the current mode keeping its effects."""
        self.mode = NormalMode()

    def cancel_mode(self) -> None:
        """Leave the current mode, restoring whatever it captured on entry."""
        snapshot = getattr(self.mode, 'snapshot', None)
        if snapshot is not None:
            snapshot.restore(self)
        self.mode = NormalMode()

    # --- Operations shared by the modes ---

    def follow_cursor(self) -> None:
        self.viewport = self.viewport.follow(self.cursor.position,
                                             self.buffer.line(self.cursor.line))

    def insert_text(self, text: str) -> None:
        self.cursor.move_to(self.buffer, self.buffer.insert(self.cursor.position, text))
        self.follow_cursor()

    def jump_to_line(self, number: int) -> None:
        """Move to a 1-based line number, clamped into the buffer."""
        self.cursor.move_to_line(self.buffer, number - 1)
        self.follow_cursor()

    def copy_to_clipboard(self, text: str) -> bool:
        try:
            self.clipboard.copy_text(text)
        except ClipboardFailure as e:
            self.status_message = str(e)
            return False
        return True

    def show_help(self):
        self.help_visible = True

    def quit(self):
        self.running = False

    def request_quit(self):
        """Quit now if everything is saved, otherwise ask first."""
        if self.buffer.dirty:
            self.enter_mode(ConfirmExitMode())
        else:
            self.quit()

    def request_save(self, quit_after: bool = False) -> None:
        """Save to the current file, or prompt for a name if there is none."""
        if not self.buffer.filename:
            self.enter_mode(SaveAsMode(quit_after=quit_after))
            return
        if self.save_to(self.buffer.filename) and quit_after:
            self.quit()

    # --- Files ---

    def load_file(self, filename: str):
        """Load a file into the editor; a missing file starts an empty buffer with that name.

        Raises IOFailure if the file exists but cannot be read.
        """
        content = self.file_store.read(filename)
        self.buffer = TextBuffer(content or "", filename=filename)
        self.cursor = CursorModel()
        self.viewport = Viewport(0, self.viewport.rows, self.viewport.columns, 0)
        if content is None:
            self.status_message = f"New file: {filename}"

    def save_to(self, filename: str) -> bool:
        """Write the buffer to filename.

        Returns True on success. On failure the buffer stays dirty and the
        error is left in the status message.
        """
        try:
            self.file_store.write(filename, self.buffer.serialize())
        except IOFailure as e:
            self.status_message = str(e)
            return False
        self.buffer.filename = filename
        self.buffer.mark_saved()
        self.status_message = f"Saved to {filename}"
        return True

    # --- Rendering ---

    def status_line(self) -> str:
        return EditorConstants.STATUS_LINE.format(
            self.mode.kind.value,
            self.buffer.filename or "[No Name]",
            "modified" if self.buffer.dirty else "saved",
            self.cursor.line + 1,
            self.buffer.line_count(),
        )

    def render_model(self) -> RenderModel:
        """Describe the frame to draw for the current state."""
        rows = self.viewport.rows
        handler = self.handlers[self.mode.kind]

        if self.help_visible:
            lines = (HELP_LINES + [""] * rows)[:rows]
            return RenderModel(lines=lines, cursor_y=0, cursor_x=0,
                               highlights=[[] for _ in lines], message="",
                               status=self.status_line(),
                               foreground=self.theme.foreground,
                               background=self.theme.background)

        prompt = handler.prompt(self, self.mode)
        message = prompt if prompt is not None else (self.status_message or "")
        if prompt is not None and self.status_message:
            message = f"{prompt}  [{self.status_message}]"

        overlay = handler.overlay(self, self.mode)
        if overlay is not None:
            overlay_lines, cursor_y = overlay
            lines = (overlay_lines + ["~"] * rows)[:rows]
            highlights = [[] for _ in lines]
            if 0 <= cursor_y < rows:
                highlights[cursor_y] = [(0, display_width(split_graphemes(lines[cursor_y])))]
            cursor_x = 0
        else:
            welcome = EditorConstants.WELCOME_MESSAGE.format(
                EditorConstants.PROGRAM_NAME, get_version_string())
            if self.buffer.filename is not None or self.buffer.dirty:
                welcome = None
            lines, highlights, cursor_y, cursor_x = compose_text_area(
                self.buffer, self.viewport, self.cursor.position,
                handler.highlights(self, self.mode), welcome)

        if handler.cursor_on_prompt(self, self.mode):
            cursor_y = rows
            cursor_x = min(display_width(split_graphemes(prompt or "")),
                           max(0, self.viewport.columns - 1))

        return RenderModel(lines=lines, cursor_y=cursor_y, cursor_x=cursor_x,
                           highlights=highlights, message=message,
                           status=self.status_line(),
                           foreground=self.theme.foreground,
                           background=self.theme.background)

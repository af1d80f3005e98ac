"""Command pattern implementation for Normal-mode actions."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Dict, Optional, Tuple, TYPE_CHECKING

from .buffer import CursorPosition
from .constants import EditorConstants
from .errors import ClipboardFailure
from .keyboard import KeyType
from .modes import ModeHandler, ModeKind, ThemeSnapshot, ViewSnapshot
from .prompts import JumpToLineMode
from .search import SearchMode
from .selection import HighlightMode, SelectionRange
from .theme import ThemeMode, catalog_index
from .vim import VimMode

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


@dataclass
class NormalMode:
    """Plain editing: printable keys insert text."""
    kind: ClassVar[ModeKind] = ModeKind.NORMAL


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """Execute the command for the key that triggered it."""


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        self._move(editor, key_event)
        editor.follow_cursor()

    @abstractmethod
    def _move(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the movement."""


class LeftCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.move_left(editor.buffer)


class RightCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.move_right(editor.buffer)


class UpLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.move_up(editor.buffer)


class DownLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.move_down(editor.buffer)


class LeftWordCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.move_word_left(editor.buffer)


class RightWordCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.move_word_right(editor.buffer)


class BeginningOfLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.move_to_line_start(editor.buffer)


class EndOfLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.move_to_line_end(editor.buffer)


class BeginningOfBufferCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.move_to_buffer_start(editor.buffer)


class EndOfBufferCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.move_to_buffer_end(editor.buffer)


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        self._edit(editor, key_event)
        editor.cursor.clamp(editor.buffer)
        editor.follow_cursor()

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        position = editor.cursor.position
        if position.column > 0:
            start = CursorPosition(position.line, position.column - 1)
            editor.buffer.delete_range(start, position)
            editor.cursor.move_to(editor.buffer, start)
        elif position.line > 0:
            editor.cursor.move_to(editor.buffer, editor.buffer.join_line(position.line - 1))


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        position = editor.cursor.position
        if position.column < editor.buffer.line_length(position.line):
            end = CursorPosition(position.line, position.column + 1)
            editor.buffer.delete_range(position, end)
        elif position.line + 1 < editor.buffer.line_count():
            editor.buffer.join_line(position.line)


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        new_position = editor.buffer.split_line(editor.cursor.position)
        editor.cursor.move_to(editor.buffer, new_position)


class InsertTabCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.insert_text(' ' * EditorConstants.TAB_WIDTH)


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        # Control characters never reach the buffer
        if key_event.is_printable():
            editor.insert_text(key_event.value)


class PasteCommand(EditCommand):
    def _edit(self, editor, key_event):
        try:
            text = editor.clipboard.paste_text()
        except ClipboardFailure as e:
            editor.status_message = str(e)
            return
        if text:
            editor.insert_text(text)


class SystemCommand(EditorCommand):
    """Base class for commands that switch modes or talk to the outside world."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        self._execute_system(editor, key_event)

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.request_quit()


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.request_save()


class HelpCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.show_help()


class SearchCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.enter_mode(SearchMode(snapshot=ViewSnapshot.capture(editor)))


class HighlightCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        position = editor.cursor.position
        editor.enter_mode(HighlightMode(selection=SelectionRange(position, position),
                                        snapshot=ViewSnapshot.capture(editor)))


class JumpToLineCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.enter_mode(JumpToLineMode())


class ThemeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.enter_mode(ThemeMode(index=catalog_index(editor.theme.foreground),
                                    snapshot=ThemeSnapshot.capture(editor)))


class VimCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.enter_mode(VimMode())


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._insert_text = InsertTextCommand()
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the Normal-mode key bindings."""
        # Movement
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register((KeyType.SPECIAL, 'up'), UpLineCommand())
        self.register((KeyType.SPECIAL, 'down'), DownLineCommand())
        self.register((KeyType.ALT, 'left'), LeftWordCommand())
        self.register((KeyType.ALT, 'right'), RightWordCommand())
        self.register((KeyType.ALT, 'b'), LeftWordCommand())
        self.register((KeyType.ALT, 'f'), RightWordCommand())
        self.register((KeyType.CTRL, 'l'), BeginningOfLineCommand())
        self.register((KeyType.CTRL, 'r'), EndOfLineCommand())
        self.register((KeyType.SPECIAL, 'home'), BeginningOfLineCommand())
        self.register((KeyType.SPECIAL, 'end'), EndOfLineCommand())
        self.register((KeyType.CTRL, 'u'), BeginningOfBufferCommand())
        self.register((KeyType.CTRL, 'd'), EndOfBufferCommand())
        self.register((KeyType.SPECIAL, 'page_up'), BeginningOfBufferCommand())
        self.register((KeyType.SPECIAL, 'page_down'), EndOfBufferCommand())

        # Editing
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.REGULAR, '\t'), InsertTabCommand())
        self.register((KeyType.CTRL, 'v'), PasteCommand())

        # Modes and system
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 'w'), SaveCommand())
        self.register((KeyType.CTRL, 'f'), SearchCommand())
        self.register((KeyType.CTRL, 's'), HighlightCommand())
        self.register((KeyType.CTRL, 'j'), JumpToLineCommand())
        self.register((KeyType.CTRL, 't'), ThemeCommand())
        self.register((KeyType.SPECIAL, 'escape'), VimCommand())
        self.register((KeyType.CTRL, 'h'), HelpCommand())
        self.register((KeyType.SPECIAL, 'f1'), HelpCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """Execute the command bound to key_event; unbound text is inserted."""
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            command.execute(editor, key_event)
        elif key_event.key_type == KeyType.REGULAR:
            self._insert_text.execute(editor, key_event)


class NormalHandler(ModeHandler):
    kind = ModeKind.NORMAL

    def __init__(self, registry: Optional[CommandRegistry] = None):
        self.registry = registry or CommandRegistry()

    def handle_key(self, editor, mode, key_event):
        self.registry.execute(editor, key_event)

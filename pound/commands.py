"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .constants import EditorConstants
from .cursor import Direction
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command
        """
        pass


class MoveCursorCommand(EditorCommand):
    def __init__(self, direction: Direction):
        self.direction = direction

    def execute(self, editor, key_event):
        editor.move_cursor(self.direction)


class PageUpCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.cursor.page_up(editor.document)


class PageDownCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.cursor.page_down(editor.document)


class InsertTextCommand(EditorCommand):
    def execute(self, editor, key_event):
        # Filter out control characters
        if key_event.is_printable:
            editor.insert_char(key_event.value)


class InsertNewlineCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.insert_newline()


class BackspaceCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.delete_char()


class DeleteCharCommand(EditorCommand):
    """Delete the character under the cursor: a right move, then backspace."""

    def execute(self, editor, key_event):
        editor.move_cursor(Direction.RIGHT)
        editor.delete_char()


class SaveCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.save()


class FindCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.find()


class QuitCommand(EditorCommand):
    """Marker command; the quit confirmation lives in InputDispatcher."""

    def execute(self, editor, key_event):
        editor.running = False


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        for direction in Direction:
            self.register((KeyType.SPECIAL, direction.value), MoveCursorCommand(direction))
        self.register((KeyType.SPECIAL, 'page_up'), PageUpCommand())
        self.register((KeyType.SPECIAL, 'page_down'), PageDownCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'f'), FindCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def lookup(self, key_event: 'KeyEvent') -> Optional[EditorCommand]:
        """Find the command for a key event; plain characters insert themselves."""
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None and key_event.is_printable:
            return InsertTextCommand()
        return command


class InputDispatcher:
    """Routes key events to commands and guards quitting with unsaved changes.

    Two states: normal, and confirming a quit with ``quit_times`` presses
    left. Quitting a dirty document takes ``initial_quit_times`` consecutive
    Ctrl-Q presses; any other key, recognized or not, starts the count over.
    """

    def __init__(self, quit_times: int = EditorConstants.QUIT_TIMES,
                 registry: Optional[CommandRegistry] = None):
        self.registry = registry or CommandRegistry()
        self.initial_quit_times = quit_times
        self.quit_times = quit_times

    @property
    def confirming_quit(self) -> bool:
        return self.quit_times < self.initial_quit_times

    def dispatch(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Handle one key event.

        Returns:
            False when the editor should exit, True otherwise.
        """
        command = self.registry.lookup(key_event)
        if isinstance(command, QuitCommand):
            return self._quit(editor, command, key_event)

        self.quit_times = self.initial_quit_times
        if command is not None:
            command.execute(editor, key_event)
        return True

    def _quit(self, editor: 'Editor', command: QuitCommand, key_event: 'KeyEvent') -> bool:
        if editor.document.is_dirty:
            self.quit_times -= 1
            if self.quit_times > 0:
                editor.set_message(EditorConstants.QUIT_WARNING.format(self.quit_times))
                return True
        command.execute(editor, key_event)
        return False

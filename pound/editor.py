"""Main editor controller."""

from __future__ import annotations

import dataclasses
import logging
import signal
from typing import Optional

from .commands import InputDispatcher
from .constants import EditorConstants
from .cursor import CursorController, Direction
from .document import Document
from .errors import NoPathError, WriteFailedError
from .highlight import SyntaxHighlight, select_syntax
from .keyboard import KeyboardHandler, KeyEvent
from .prompt import LinePrompt
from .screen import RenderPipeline
from .search import SearchEngine
from .settings import EditorSettings
from .status import StatusMessage
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


def _raise_system_exit(signum, frame):
    del frame  # Unused
    raise SystemExit(128 + signum)


class Editor:
    """One editing session: a document, its cursor, and the terminal it runs on."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 document: Optional[Document] = None,
                 settings: Optional[EditorSettings] = None,
                 window_size: Optional[tuple[int, int]] = None):
        """Initialize the editor components.

        Args:
            terminal: Terminal to draw on and read keys from.
            document: Document to edit; an empty one if omitted.
            settings: User settings; defaults if omitted.
            window_size: Fixed (columns, text rows). When omitted the size is
                taken from the terminal on every refresh.
        """
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.settings = settings or EditorSettings()
        self.screen = RenderPipeline(self.terminal.term)
        self.document = document or Document()
        self._fixed_size = window_size
        columns, rows = window_size or self._terminal_window_size()
        self.cursor = CursorController(screen_columns=columns, screen_rows=rows)
        self.status = StatusMessage(EditorConstants.HELP_MESSAGE,
                                    timeout=self.settings.message_timeout)
        self.dispatcher = InputDispatcher(quit_times=self.settings.quit_times)
        self.search = SearchEngine()
        self.syntax: Optional[SyntaxHighlight] = None
        self.prompt: Optional[LinePrompt] = None
        self.running = False
        self.select_syntax()

    def _terminal_window_size(self) -> tuple[int, int]:
        columns, rows = self.terminal.size()
        return max(columns, 1), max(rows - EditorConstants.STATUS_BAR_ROWS, 1)

    # --- Session loop ---

    def run(self):
        """Run the main editor loop until the user quits.

        The terminal is released on every way out of this method.
        """
        original_term_handler = signal.signal(signal.SIGTERM, _raise_system_exit)
        self.running = True
        try:
            with self.terminal:
                while self.running:
                    self.refresh_screen()
                    key_event = self.keyboard.read_key(EditorConstants.KEY_POLL_TIMEOUT)
                    self.process_keypress(key_event)
        finally:
            signal.signal(signal.SIGTERM, original_term_handler)
            self.running = False

    def refresh_screen(self):
        if self._fixed_size is None:
            self.cursor.resize(*self._terminal_window_size())
        if self.prompt is not None:
            self.status.set_message(self.prompt.message())
        self.screen.refresh_screen(self.document, self.cursor, self.syntax,
                                   self.status, self.terminal.write)

    def process_keypress(self, key_event: KeyEvent) -> bool:
        """Apply one key event.

        Returns:
            False once the editor should exit.
        """
        if self.prompt is not None:
            self.prompt.handle_key(key_event)
            return True
        if not self.dispatcher.dispatch(self, key_event):
            self.running = False
            return False
        return True

    def set_message(self, message: str):
        self.status.set_message(message)

    # --- Editing operations ---

    def update_syntax(self, at: int):
        if self.syntax is not None:
            self.syntax.update_syntax(at, self.document)

    def select_syntax(self):
        """Pick a highlighter from the document's extension and apply it to every row."""
        syntax = select_syntax(self.document.extension())
        if syntax is None:
            return
        self.syntax = syntax
        logger.info("Using %s highlighting", syntax.file_type())
        for i in range(self.document.row_count()):
            self.update_syntax(i)

    def move_cursor(self, direction: Direction):
        self.cursor.move_cursor(direction, self.document)

    def insert_char(self, ch: str):
        cursor = self.cursor
        document = self.document
        if cursor.cursor_y == document.row_count():
            document.insert_row(document.row_count(), "")
            document.mark_dirty()
        document.row_mut(cursor.cursor_y).insert_char(cursor.cursor_x, ch)
        self.update_syntax(cursor.cursor_y)
        cursor.cursor_x += 1
        document.mark_dirty()

    def insert_newline(self):
        cursor = self.cursor
        document = self.document
        if cursor.cursor_x == 0:
            document.insert_row(cursor.cursor_y, "")
            self.update_syntax(cursor.cursor_y)
        else:
            current_row = document.row_mut(cursor.cursor_y)
            new_row_content = current_row.raw[cursor.cursor_x:]
            current_row.truncate(cursor.cursor_x)
            document.insert_row(cursor.cursor_y + 1, new_row_content)
            self.update_syntax(cursor.cursor_y)
            self.update_syntax(cursor.cursor_y + 1)
        cursor.cursor_x = 0
        cursor.cursor_y += 1
        document.mark_dirty()

    def delete_char(self):
        """Backspace: remove the character left of the cursor or join with the row above."""
        cursor = self.cursor
        document = self.document
        if cursor.cursor_y == document.row_count():
            return
        if cursor.cursor_y == 0 and cursor.cursor_x == 0:
            return

        if cursor.cursor_x > 0:
            document.row_mut(cursor.cursor_y).delete_char(cursor.cursor_x - 1)
            cursor.cursor_x -= 1
        else:
            cursor.cursor_x = len(document.row(cursor.cursor_y - 1))
            document.join_row(cursor.cursor_y)
            cursor.cursor_y -= 1
        self.update_syntax(cursor.cursor_y)
        document.mark_dirty()

    # --- Prompts: save and find ---

    def _open_prompt(self, template: str, on_key=None, on_commit=None, on_cancel=None):
        def finished(callback):
            def wrapper(*args):
                self.prompt = None
                self.set_message("")
                if callback is not None:
                    callback(*args)
            return wrapper

        self.prompt = LinePrompt(template, on_key=on_key,
                                 on_commit=finished(on_commit),
                                 on_cancel=finished(on_cancel))
        self.set_message(self.prompt.message())

    def save(self):
        """Write the document, asking for a file name first if it has none."""
        if self.document.path:
            self._write_document()
            return
        self._open_prompt(EditorConstants.SAVE_PROMPT,
                          on_commit=self._save_as,
                          on_cancel=self._write_document)

    def _save_as(self, path: str):
        self.document.path = path
        self.select_syntax()
        self._write_document()

    def _write_document(self):
        try:
            written = self.document.save()
        except NoPathError:
            self.set_message(EditorConstants.SAVE_ABORTED)
        except WriteFailedError as e:
            self.set_message(EditorConstants.SAVE_FAILED.format(e.reason))
        else:
            self.set_message(EditorConstants.SAVE_SUCCESS.format(written))

    def find(self):
        """Start an incremental search; cancelling puts the cursor back."""
        saved_cursor = dataclasses.replace(self.cursor)

        def on_key(query: str, key_event: KeyEvent):
            self.search.on_key(query, key_event, self.document, self.cursor)

        def on_cancel():
            self.cursor = saved_cursor

        self.search.index.reset()
        self._open_prompt(EditorConstants.SEARCH_PROMPT, on_key=on_key, on_cancel=on_cancel)

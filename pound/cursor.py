"""Cursor movement and viewport scrolling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .document import Document


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"


@dataclass
class CursorController:
    """Cursor in raw coordinates plus the visible window in render space.

    ``cursor_y`` may equal the row count: that is the empty line after the
    last row, where typing appends a new row.
    """
    screen_columns: int
    screen_rows: int
    cursor_x: int = 0
    cursor_y: int = 0
    row_offset: int = 0
    column_offset: int = 0
    render_x: int = 0

    def _row_len(self, document: "Document", at: int) -> int:
        if at < document.row_count():
            return len(document.row(at))
        return 0

    def move_cursor(self, direction: Direction, document: "Document"):
        number_of_rows = document.row_count()

        if direction == Direction.UP:
            self.cursor_y = max(self.cursor_y - 1, 0)
        elif direction == Direction.LEFT:
            if self.cursor_x != 0:
                self.cursor_x -= 1
            elif self.cursor_y > 0:
                self.cursor_y -= 1
                self.cursor_x = self._row_len(document, self.cursor_y)
        elif direction == Direction.DOWN:
            if self.cursor_y < number_of_rows:
                self.cursor_y += 1
        elif direction == Direction.RIGHT:
            if self.cursor_y < number_of_rows:
                row_len = self._row_len(document, self.cursor_y)
                if self.cursor_x < row_len:
                    self.cursor_x += 1
                elif self.cursor_x == row_len:
                    self.cursor_x = 0
                    self.cursor_y += 1
        elif direction == Direction.HOME:
            self.cursor_x = 0
        elif direction == Direction.END:
            self.cursor_x = self._row_len(document, self.cursor_y)

        self.cursor_x = min(self.cursor_x, self._row_len(document, self.cursor_y))

    def page_up(self, document: "Document"):
        self.cursor_y = self.row_offset
        for _ in range(self.screen_rows):
            self.move_cursor(Direction.UP, document)

    def page_down(self, document: "Document"):
        self.cursor_y = min(document.row_count(), self.row_offset + self.screen_rows - 1)
        for _ in range(self.screen_rows):
            self.move_cursor(Direction.DOWN, document)

    def scroll(self, document: "Document"):
        """Recompute render_x and shift the window just enough to show the cursor."""
        self.render_x = 0
        if self.cursor_y < document.row_count():
            self.render_x = document.row(self.cursor_y).raw_to_render_x(self.cursor_x)

        self.row_offset = min(self.row_offset, self.cursor_y)
        if self.cursor_y >= self.row_offset + self.screen_rows:
            self.row_offset = self.cursor_y - self.screen_rows + 1

        self.column_offset = min(self.column_offset, self.render_x)
        if self.render_x >= self.column_offset + self.screen_columns:
            self.column_offset = self.render_x - self.screen_columns + 1

    def resize(self, screen_columns: int, screen_rows: int):
        self.screen_columns = max(screen_columns, 1)
        self.screen_rows = max(screen_rows, 1)

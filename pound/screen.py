"""Frame composition: content rows, status bar, message bar and cursor."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .constants import EditorConstants
from .highlight import PLAIN

if TYPE_CHECKING:
    from .cursor import CursorController
    from .document import Document
    from .highlight import SyntaxHighlight
    from .status import StatusMessage


class FrameBuffer:
    """Accumulates one frame so it can be written in a single call."""

    def __init__(self):
        self._parts: list[str] = []

    def push(self, ch: str):
        self._parts.append(ch)

    def push_str(self, text: str):
        self._parts.append(text)

    def getvalue(self) -> str:
        return ''.join(self._parts)

    def flush(self, write):
        """Hand the whole frame to ``write`` and start a new one."""
        data = self.getvalue()
        self._parts.clear()
        write(data)


class RenderPipeline:
    """Draws the editor state with one write per refresh."""

    def __init__(self, term):
        self.term = term
        self.contents = FrameBuffer()

    def refresh_screen(self, document: "Document", cursor: "CursorController",
                       syntax: Optional["SyntaxHighlight"], status: "StatusMessage", write):
        term = self.term
        out = self.contents
        cursor.scroll(document)

        out.push_str(term.hide_cursor)
        out.push_str(term.home)
        self.draw_rows(document, cursor, syntax)
        self.draw_status_bar(document, cursor, syntax)
        self.draw_message_bar(status, cursor.screen_columns)
        out.push_str(term.move_xy(cursor.render_x - cursor.column_offset,
                                  cursor.cursor_y - cursor.row_offset))
        out.push_str(term.normal_cursor)
        out.flush(write)

    def draw_rows(self, document: "Document", cursor: "CursorController",
                  syntax: Optional["SyntaxHighlight"]):
        out = self.contents
        screen_rows = cursor.screen_rows
        screen_columns = cursor.screen_columns
        number_of_rows = document.row_count()
        highlighter = syntax or PLAIN

        for i in range(screen_rows):
            file_row = i + cursor.row_offset
            if file_row >= number_of_rows:
                if number_of_rows == 0 and i == screen_rows // 3:
                    self.draw_welcome(screen_columns)
                else:
                    out.push(EditorConstants.EMPTY_ROW_MARKER)
            else:
                row = document.row(file_row)
                start = cursor.column_offset
                end = start + screen_columns
                highlighter.color_row(self.term, row.render[start:end],
                                      row.highlight[start:end], out)
            out.push_str(self.term.clear_eol)
            out.push_str("\r\n")

    def draw_welcome(self, screen_columns: int):
        out = self.contents
        welcome = EditorConstants.WELCOME_MESSAGE.format(EditorConstants.VERSION)
        welcome = welcome[:screen_columns]
        padding = (screen_columns - len(welcome)) // 2
        if padding:
            out.push(EditorConstants.EMPTY_ROW_MARKER)
            padding -= 1
        out.push_str(" " * padding)
        out.push_str(welcome)

    def draw_status_bar(self, document: "Document", cursor: "CursorController",
                        syntax: Optional["SyntaxHighlight"]):
        out = self.contents
        width = cursor.screen_columns
        out.push_str(self.term.reverse)

        info = "{} {} -- {} lines".format(
            document.display_name(),
            "(modified)" if document.is_dirty else "",
            document.row_count(),
        )[:width]
        line_info = "{} | {}/{}".format(
            syntax.file_type() if syntax else EditorConstants.NO_FILE_TYPE,
            cursor.cursor_y + 1,
            document.row_count(),
        )
        out.push_str(info)
        remaining = width - len(info)
        if remaining >= len(line_info):
            out.push_str(line_info.rjust(remaining))
        else:
            out.push_str(" " * remaining)

        out.push_str(self.term.normal)
        out.push_str("\r\n")

    def draw_message_bar(self, status: "StatusMessage", screen_columns: int):
        out = self.contents
        out.push_str(self.term.clear_eol)
        message = status.message()
        if message:
            out.push_str(message[:screen_columns])

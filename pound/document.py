"""Row store for the editor: raw text, rendered text and highlight tags."""

from __future__ import annotations

import logging
import os
from typing import Optional

from .constants import EditorConstants
from .errors import NoPathError, UnreadableFileError, WriteFailedError
from .highlight import HighlightType

logger = logging.getLogger(__name__)


def render_row(raw: str) -> str:
    """Expand tabs in ``raw`` to the next multiple of TAB_STOP.

    Non-tab characters are copied through unchanged.
    """
    tab_stop = EditorConstants.TAB_STOP
    out: list[str] = []
    for ch in raw:
        if ch == '\t':
            out.append(' ')
            while len(out) % tab_stop != 0:
                out.append(' ')
        else:
            out.append(ch)
    return ''.join(out)


class Row:
    """One line of the document.

    ``render`` is ``raw`` with tabs expanded and ``highlight`` holds one tag
    per rendered character. Every change to ``raw`` goes through
    :meth:`update`, which rebuilds both so their lengths always agree.
    """

    def __init__(self, raw: str = ""):
        self.raw = raw
        self.render = ""
        self.highlight: list = []
        self.update()

    def __len__(self) -> int:
        return len(self.raw)

    def __repr__(self) -> str:
        return f"Row({self.raw!r})"

    def update(self):
        """Re-render the row and reset its highlight to plain text."""
        self.render = render_row(self.raw)
        self.highlight = [HighlightType.NORMAL] * len(self.render)

    def insert_char(self, at: int, ch: str):
        self.raw = self.raw[:at] + ch + self.raw[at:]
        self.update()

    def delete_char(self, at: int):
        self.raw = self.raw[:at] + self.raw[at + 1:]
        self.update()

    def append(self, text: str):
        self.raw += text
        self.update()

    def truncate(self, at: int):
        self.raw = self.raw[:at]
        self.update()

    def raw_to_render_x(self, raw_x: int) -> int:
        """Column in ``render`` of the character at ``raw_x`` in ``raw``."""
        tab_stop = EditorConstants.TAB_STOP
        render_x = 0
        for ch in self.raw[:raw_x]:
            if ch == '\t':
                render_x += (tab_stop - 1) - (render_x % tab_stop)
            render_x += 1
        return render_x

    def render_to_raw_x(self, render_x: int) -> int:
        """Index in ``raw`` of the character drawn at ``render_x``."""
        tab_stop = EditorConstants.TAB_STOP
        current = 0
        for raw_x, ch in enumerate(self.raw):
            if ch == '\t':
                current += (tab_stop - 1) - (current % tab_stop)
            current += 1
            if current > render_x:
                return raw_x
        return len(self.raw)


class Document:
    """Ordered rows with an optional backing path and a dirty counter."""

    def __init__(self, rows: Optional[list[str]] = None, path: Optional[str] = None):
        self.rows: list[Row] = [Row(raw) for raw in (rows or [])]
        self.path = path
        self.dirty = 0

    @classmethod
    def load(cls, path: str) -> "Document":
        """Load ``path`` as UTF-8 text, one row per line.

        Raises:
            UnreadableFileError: the file cannot be read or is not UTF-8.
        """
        try:
            with open(path, 'rb') as f:
                data = f.read()
            text = data.decode('utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Could not load %s: %s", path, e)
            raise UnreadableFileError(path, e) from e

        lines = text.split('\n')
        if lines and lines[-1] == '':
            lines.pop()
        lines = [line[:-1] if line.endswith('\r') else line for line in lines]
        logger.info("Loaded %s (%d rows)", path, len(lines))
        return cls(rows=lines, path=path)

    def row_count(self) -> int:
        return len(self.rows)

    def row(self, at: int) -> Row:
        if not 0 <= at < len(self.rows):
            raise IndexError(f"row {at} out of range (0..{len(self.rows) - 1})")
        return self.rows[at]

    # Rows are mutable objects, so the same accessor serves both purposes
    row_mut = row

    def insert_row(self, at: int, content: str):
        if not 0 <= at <= len(self.rows):
            raise IndexError(f"cannot insert row at {at}")
        self.rows.insert(at, Row(content))

    def join_row(self, at: int):
        """Append row ``at`` onto row ``at - 1`` and remove row ``at``."""
        if at <= 0:
            raise IndexError("cannot join the first row")
        current = self.row(at)
        self.row(at - 1).append(current.raw)
        del self.rows[at]

    def mark_dirty(self):
        self.dirty += 1

    @property
    def is_dirty(self) -> bool:
        return self.dirty > 0

    def display_name(self) -> str:
        if not self.path:
            return EditorConstants.NO_NAME
        return os.path.basename(self.path) or EditorConstants.NO_NAME

    def extension(self) -> Optional[str]:
        if not self.path:
            return None
        ext = os.path.splitext(self.path)[1]
        return ext[1:] if ext else None

    def contents(self) -> str:
        return '\n'.join(row.raw for row in self.rows)

    def save(self) -> int:
        """Truncate and rewrite the backing file with the joined rows.

        Returns:
            Number of bytes written.

        Raises:
            NoPathError: the document has no path yet.
            WriteFailedError: the OS refused the write.
        """
        if not self.path:
            raise NoPathError()
        data = self.contents().encode('utf-8')
        try:
            with open(self.path, 'wb') as f:
                f.write(data)
        except OSError as e:
            logger.warning("Could not save %s: %s", self.path, e)
            raise WriteFailedError(self.path, e) from e
        self.dirty = 0
        logger.info("Saved %s (%d bytes)", self.path, len(data))
        return len(data)

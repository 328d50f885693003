"""Incremental directional search with a single highlight overlay."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .highlight import HighlightType
from .keyboard import KeyType

if TYPE_CHECKING:
    from .cursor import CursorController
    from .document import Document
    from .keyboard import KeyEvent

logger = logging.getLogger(__name__)


class SearchDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass
class SearchIndex:
    """Position of the last match plus the pending overlay to undo."""
    x_index: int = 0
    y_index: int = 0
    x_direction: Optional[SearchDirection] = None
    y_direction: Optional[SearchDirection] = None
    previous_highlight: Optional[tuple[int, list]] = None

    def reset(self):
        self.x_index = 0
        self.y_index = 0
        self.x_direction = None
        self.y_direction = None
        self.previous_highlight = None


_DIRECTION_KEYS = {
    'down': ('y_direction', SearchDirection.FORWARD),
    'up': ('y_direction', SearchDirection.BACKWARD),
    'right': ('x_direction', SearchDirection.FORWARD),
    'left': ('x_direction', SearchDirection.BACKWARD),
}


class SearchEngine:
    """Runs one search step per keystroke of the search prompt."""

    def __init__(self):
        self.index = SearchIndex()

    def restore_highlight(self, document: "Document"):
        """Put back the highlight saved before the last overlay, if any."""
        if self.index.previous_highlight is None:
            return
        row_index, highlight = self.index.previous_highlight
        self.index.previous_highlight = None
        if row_index < document.row_count():
            document.row(row_index).highlight = highlight

    def on_key(self, query: str, key_event: "KeyEvent", document: "Document",
               cursor: "CursorController") -> bool:
        """Advance the search for ``query`` after ``key_event``.

        Returns:
            True if a match was found and the cursor moved to it.
        """
        self.restore_highlight(document)

        is_special = key_event.key_type == KeyType.SPECIAL
        if is_special and key_event.value in ('escape', 'enter'):
            self.index.reset()
            return False

        self.index.x_direction = None
        self.index.y_direction = None
        if is_special and key_event.value in _DIRECTION_KEYS:
            attr, direction = _DIRECTION_KEYS[key_event.value]
            setattr(self.index, attr, direction)

        if not query:
            return False
        return self._scan(query, document, cursor)

    def _next_row(self, i: int) -> Optional[int]:
        index = self.index
        if index.y_direction is None:
            if index.x_direction is None:
                index.y_index = i
            return index.y_index
        if index.y_direction == SearchDirection.FORWARD:
            return index.y_index + i + 1
        if index.y_index - i <= 0:
            return None
        return index.y_index - i - 1

    def _scan(self, query: str, document: "Document", cursor: "CursorController") -> bool:
        index = self.index
        number_of_rows = document.row_count()

        for i in range(number_of_rows):
            row_index = self._next_row(i)
            if row_index is None or row_index > number_of_rows - 1:
                break

            row = document.row(row_index)
            if index.x_direction is None:
                found = row.render.find(query)
            else:
                if index.x_direction == SearchDirection.FORWARD:
                    start = min(len(row.render), index.x_index + 1)
                    found = row.render.find(query, start)
                else:
                    found = row.render.rfind(query, 0, index.x_index)
                if found == -1:
                    break

            if found == -1:
                continue

            index.previous_highlight = (row_index, list(row.highlight))
            for x in range(found, min(found + len(query), len(row.highlight))):
                row.highlight[x] = HighlightType.SEARCH_MATCH

            cursor.cursor_y = row_index
            cursor.cursor_x = row.render_to_raw_x(found)
            # Past the end, so the next scroll pass brings the match row to the top
            cursor.row_offset = number_of_rows
            index.y_index = row_index
            index.x_index = found
            logger.debug("Match for %r at row %d col %d", query, row_index, found)
            return True

        return False

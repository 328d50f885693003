"""Pound - a small terminal text editor with syntax highlighting and search."""

import logging

from .document import Document, Row, render_row
from .editor import Editor
from .highlight import HighlightType, Keyword, LANGUAGES, select_syntax

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Document',
    'Row',
    'render_row',
    'Editor',
    'HighlightType',
    'Keyword',
    'LANGUAGES',
    'select_syntax',
]

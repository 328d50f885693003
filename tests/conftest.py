"""Shared fixtures for the pound test suite."""

import io

import blessed
import pytest

from pound.document import Document
from pound.editor import Editor

from helpers import RecordingTerminal


@pytest.fixture(scope="session")
def term():
    """A styled blessed terminal writing to memory."""
    return blessed.Terminal(kind='xterm-256color', force_styling=True, stream=io.StringIO())


@pytest.fixture
def make_editor(term):
    """Build an editor over the given rows with a fixed 80x10 text window."""
    def factory(rows=None, path=None, window_size=(80, 10)):
        document = Document(rows=rows, path=path)
        return Editor(terminal=RecordingTerminal(term), document=document,
                      window_size=window_size)
    return factory

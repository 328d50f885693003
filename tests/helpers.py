"""Helpers for building key events and fake terminals in tests."""

from pound.keyboard import KeyEvent, KeyType
from pound.terminal import TerminalInterface


class RecordingTerminal(TerminalInterface):
    """Terminal interface that records writes instead of touching a tty."""

    def __init__(self, term, keys=None):
        super().__init__(term)
        self.writes = []
        self._keys = list(keys or [])

    def write(self, data):
        self.writes.append(data)

    def size(self):
        return 80, 24

    def get_key(self, timeout=None):
        if self._keys:
            return self._keys.pop(0)
        return None


def key(value):
    """A special key such as 'up', 'enter' or 'escape'."""
    return KeyEvent(key_type=KeyType.SPECIAL, value=value, raw=value)


def char(ch):
    return KeyEvent(key_type=KeyType.REGULAR, value=ch, raw=ch)


def ctrl(ch):
    return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=ch, is_ctrl=True)


def type_text(editor, text):
    for ch in text:
        editor.process_keypress(char(ch))

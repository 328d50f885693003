"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum

from .constants import EditorConstants


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key token from the terminal
    is_ctrl: bool = False

    @property
    def is_printable(self) -> bool:
        """True for a plain character (or Tab) that can be inserted."""
        return (self.key_type == KeyType.REGULAR and len(self.value) == 1
                and (self.value == '\t' or ord(self.value) >= 32))


# Curtsies key names (lowercased, without brackets) to editor key values
NAMED_KEYS = {
    'up': 'up',
    'down': 'down',
    'left': 'left',
    'right': 'right',
    'home': 'home',
    'end': 'end',
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'delete': 'delete',
    'backspace': 'backspace',
    'enter': 'enter',
    'return': 'enter',
    'esc': 'escape',
    'escape': 'escape',
}

# Ctrl-J and Ctrl-M are the bytes the Enter key sends
ENTER_CONTROLS = {'j', 'm'}


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event, or None if ``timeout`` expires first."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def read_key(self, timeout: float = EditorConstants.KEY_POLL_TIMEOUT) -> KeyEvent:
        """Block until a key arrives, polling every ``timeout`` seconds."""
        while True:
            event = self.get_key_event(timeout)
            if event is not None:
                return event

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key name or raw character into a KeyEvent.

        Names the editor has no use for (function keys, Alt combinations)
        come back as SPECIAL events that no command is bound to.
        """
        key_str = str(key)
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_name(key_str)
        if len(key_str) == 1 and (ord(key_str) < 32 or ord(key_str) == 127):
            return self._parse_control_byte(key_str)
        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    def _parse_name(self, token: str) -> KeyEvent:
        name = token[1:-1].lower()
        if name == 'space':
            return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
        if name == 'tab':
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
        if name.startswith('ctrl-') and len(name) == len('ctrl-') + 1:
            letter = name[-1]
            if letter in ENTER_CONTROLS:
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=token)
            return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=token, is_ctrl=True)
        return KeyEvent(key_type=KeyType.SPECIAL, value=NAMED_KEYS.get(name, name), raw=token)

    def _parse_control_byte(self, byte: str) -> KeyEvent:
        code = ord(byte)
        if byte == '\t':
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=byte)
        if byte in ('\r', '\n'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=byte)
        if code in (8, 127):
            return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=byte)
        if code == 27:
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=byte)
        if 1 <= code <= 26:
            letter = chr(ord('a') + code - 1)
            return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=byte, is_ctrl=True)
        # NUL and the remaining C0 bytes insert nothing
        return KeyEvent(key_type=KeyType.REGULAR, value=byte, raw=byte)

"""Modal single-line input shared by the save-as and search prompts."""

from __future__ import annotations

from typing import Callable, Optional

from .keyboard import KeyEvent, KeyType


class LinePrompt:
    """Collects one line of input from key events.

    Printable keys append, Backspace/Delete remove the last character.
    Enter with some input commits, Escape or Enter on empty input cancels.
    ``on_key`` sees the current input and the key after every keystroke,
    including the one that ends the prompt.
    """

    def __init__(self, template: str,
                 on_key: Optional[Callable[[str, KeyEvent], None]] = None,
                 on_commit: Optional[Callable[[str], None]] = None,
                 on_cancel: Optional[Callable[[], None]] = None):
        self.template = template
        self.input = ""
        self.active = True
        self.on_key = on_key
        self.on_commit = on_commit
        self.on_cancel = on_cancel

    def message(self) -> str:
        return self.template.format(self.input)

    def handle_key(self, key_event: KeyEvent):
        if not self.active:
            return
        special = key_event.value if key_event.key_type == KeyType.SPECIAL else None

        if special == 'enter':
            if self.input:
                self._finish(key_event, committed=True)
            else:
                self._finish(key_event, committed=False)
            return
        if special == 'escape':
            self.input = ""
            self._finish(key_event, committed=False)
            return

        if special in ('backspace', 'delete'):
            self.input = self.input[:-1]
        elif key_event.is_printable:
            self.input += key_event.value
        if self.on_key is not None:
            self.on_key(self.input, key_event)

    def _finish(self, key_event: KeyEvent, committed: bool):
        self.active = False
        if self.on_key is not None:
            self.on_key(self.input, key_event)
        if committed:
            if self.on_commit is not None:
                self.on_commit(self.input)
        elif self.on_cancel is not None:
            self.on_cancel()

"""Transient message shown in the message bar."""

import time
from typing import Callable, Optional

from .constants import EditorConstants


class StatusMessage:
    """A message that expires ``timeout`` seconds after it was set."""

    def __init__(self, initial_message: str = "",
                 timeout: float = EditorConstants.MESSAGE_TIMEOUT,
                 clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.timeout = timeout
        self._message: Optional[str] = None
        self._set_time = 0.0
        self.set_message(initial_message)

    def set_message(self, message: str):
        self._message = message
        self._set_time = self._clock()

    def message(self) -> Optional[str]:
        if self._message is None:
            return None
        if self._clock() - self._set_time >= self.timeout:
            self._message = None
            return None
        return self._message

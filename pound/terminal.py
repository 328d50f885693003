"""Terminal interface using Blessed for display and Curtsies for input."""

from __future__ import annotations

import logging
import sys
import termios
from typing import Optional

import blessed

from .errors import TerminalError

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Owns the terminal for the lifetime of an editing session.

    Use it as a context manager: raw mode is entered on ``__enter__`` and
    released on ``__exit__`` whichever way the block is left. ``cleanup``
    only does its work once, so calling it again from another exit path is
    harmless.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None, in_stream=None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.in_stream = in_stream or sys.stdin
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._old_settings = None
        self._active = False

    def __enter__(self) -> "TerminalInterface":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()
        return False

    def setup(self):
        """Enter fullscreen, switch the tty to raw input and clear the screen."""
        if self._active:
            return
        from curtsies import Input  # type: ignore

        self._active = True
        try:
            self._curtsies_input = Input(in_stream=self.in_stream, keynames='curtsies')
            self._curtsies_input.__enter__()
            self._disable_flow_control()
        except (termios.error, OSError) as e:
            self.cleanup()
            raise TerminalError(f"could not enter raw mode: {e}") from e

        self.write(self.term.enter_fullscreen + self.term.clear + self.term.home)
        self.is_fullscreen = True
        logger.debug("Terminal set up (%sx%s)", self.term.width, self.term.height)

    def _disable_flow_control(self):
        """Let Ctrl-S, Ctrl-Q, Ctrl-C and Ctrl-V reach us as ordinary keys."""
        self._old_settings = termios.tcgetattr(self.in_stream)
        new_settings = list(self._old_settings)
        new_settings[0] &= ~(termios.IXON | termios.IXOFF)
        if hasattr(termios, 'IEXTEN'):
            new_settings[3] &= ~(termios.ISIG | termios.IEXTEN)
        else:
            new_settings[3] &= ~termios.ISIG
        termios.tcsetattr(self.in_stream, termios.TCSANOW, new_settings)

    def cleanup(self):
        """Restore the terminal. Only the first call does anything."""
        if not self._active:
            return
        self._active = False
        errors = []
        if self._old_settings is not None:
            try:
                termios.tcsetattr(self.in_stream, termios.TCSANOW, self._old_settings)
            except (termios.error, OSError) as e:
                errors.append(e)
            self._old_settings = None
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except (termios.error, OSError) as e:
                errors.append(e)
            self._curtsies_input = None
        if self.is_fullscreen:
            self.write(self.term.clear + self.term.home + self.term.exit_fullscreen
                       + self.term.normal_cursor)
            self.is_fullscreen = False
        for e in errors:
            logger.error("Error while restoring terminal: %s", e)
        logger.debug("Terminal restored")

    @property
    def active(self) -> bool:
        return self._active

    def write(self, data: str):
        """Write ``data`` to the output stream with a single flush."""
        stream = self.term.stream
        stream.write(data)
        stream.flush()

    def size(self) -> tuple[int, int]:
        """Terminal size as (columns, rows)."""
        return self.term.width, self.term.height

    def get_key(self, timeout: Optional[float] = None) -> Optional[str]:
        """Wait up to ``timeout`` seconds for a key and return its name.

        Returns None when the timeout expires or input is not set up.

        Raises:
            TerminalError: polling or reading the input stream failed.
        """
        if self._curtsies_input is None:
            return None
        try:
            # Bytes curtsies already read ahead are served before the fd is polled
            evt = self._curtsies_input.send(timeout)  # type: ignore
        except (OSError, ValueError, termios.error) as e:
            raise TerminalError(f"could not read key: {e}") from e
        except StopIteration:
            return None
        return str(evt) if evt is not None else None

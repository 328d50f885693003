"""Exception types raised by the pound editor."""


class PoundError(Exception):
    """Base class for editor errors."""


class UnreadableFileError(PoundError):
    """A file could not be read or decoded at load time."""

    def __init__(self, path, reason):
        super().__init__(f"cannot open {path}: {reason}")
        self.path = path
        self.reason = reason


class NoPathError(PoundError):
    """Save was requested but the document has no file name."""

    def __init__(self):
        super().__init__("no file name specified")


class WriteFailedError(PoundError):
    """Writing the document to disk failed."""

    def __init__(self, path, reason):
        super().__init__(f"cannot write {path}: {reason}")
        self.path = path
        self.reason = reason


class TerminalError(PoundError):
    """Toggling terminal modes or reading key events failed."""

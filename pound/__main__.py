"""Pound CLI entry point.

Allows running via `python -m pound` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys

from .errors import TerminalError, UnreadableFileError

USAGE = "usage: pound [path]"
LOG_ENV = "POUND_LOG"


def configure_logging() -> None:
    """Send log records to the file named by $POUND_LOG, if set.

    The editor owns the screen, so nothing is logged to the terminal.
    """
    log_path = os.environ.get(LOG_ENV)
    if log_path:
        logging.basicConfig(
            filename=log_path,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1:
        print(USAGE, file=sys.stderr)
        return 2

    configure_logging()
    logger = logging.getLogger("pound")

    # Lazy import so usage errors do not need the terminal libraries
    from .document import Document
    from .editor import Editor
    from .settings import SettingsStore

    document = None
    if args:
        try:
            document = Document.load(args[0])
        except UnreadableFileError as e:
            print(f"pound: {e}", file=sys.stderr)
            return 1

    editor = Editor(document=document, settings=SettingsStore().load())
    try:
        editor.run()
    except TerminalError as e:
        logger.error("Terminal failure: %s", e)
        print(f"pound: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

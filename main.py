#!/usr/bin/env python3
"""Pound - a small terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Home/End, PageUp/PageDown: Move the cursor
    Ctrl-S: Save file (asks for a name the first time)
    Ctrl-Q: Quit (press repeatedly to discard unsaved changes)
    Ctrl-F: Incremental search (arrows step between matches)
"""

import sys

from pound.__main__ import main


if __name__ == "__main__":
    sys.exit(main())

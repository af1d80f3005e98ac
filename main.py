#!/usr/bin/env python3
"""minivim - a small modal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys: Move the cursor
    Ctrl-W: Save file
    Ctrl-Q: Quit (asks first if there are unsaved changes)
    Esc: Vim mode
    Ctrl-H or F1: Help
"""

import sys

from minivim.__main__ import main


if __name__ == "__main__":
    sys.exit(main())

"""minivim CLI entry point.

Allows running via `python -m minivim` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .errors import FatalStartup, IOFailure
from .version import get_version_string

logger = logging.getLogger(__name__)


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Print parsed key events until Esc is pressed."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyType

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                break
            flags = [name for name, on in (('alt', ev.is_alt), ('ctrl', ev.is_ctrl),
                                           ('seq', ev.is_sequence)) if on]
            line = f"type={ev.key_type.value} value={ev.value!r} raw='{_escape_bytes(ev.raw)}'"
            if flags:
                line += f" flags={'+'.join(flags)}"
            print(line + "\r")
    finally:
        term.cleanup()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="minivim", description="A small modal text editor.")
    parser.add_argument("filename", nargs="?", help="file to edit (created on first save)")
    parser.add_argument("-V", "--version", action="store_true", help="print the version and exit")
    parser.add_argument("--keytest", action="store_true", help="show parsed key events")
    parser.add_argument("--log-file", help="write debug logging to this file")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.version:
        print(get_version_string())
        return 0

    if args.log_file:
        logging.basicConfig(filename=args.log_file, level=logging.DEBUG,
                            format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        if args.keytest:
            run_keyboard_test()
            return 0

        # Lazy import to avoid importing UI deps for --version
        from .editor import Editor
        editor = Editor()
        if args.filename:
            editor.load_file(args.filename)
        editor.run()
    except (FatalStartup, IOFailure) as e:
        logger.error("Startup failed: %s", e)
        print(f"minivim: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

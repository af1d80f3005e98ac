"""System clipboard integration."""

import logging

import pyperclip

from .errors import ClipboardFailure

logger = logging.getLogger(__name__)


class ClipboardManager:
    """Plain-text access to the system clipboard through pyperclip.

    Failures (no clipboard mechanism on this system, a helper program
    exiting with an error) surface as ``ClipboardFailure`` so the caller can
    report them and keep its state.
    """

    @staticmethod
    def copy_text(text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.warning("Clipboard copy failed: %s", e)
            raise ClipboardFailure(f"Clipboard unavailable: {e}") from e

    @staticmethod
    def paste_text() -> str:
        try:
            content = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.warning("Clipboard paste failed: %s", e)
            raise ClipboardFailure(f"Clipboard unavailable: {e}") from e
        return content or ""

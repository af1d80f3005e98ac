"""Exception taxonomy for the minivim editor.

Only ``FatalStartup`` and ``OutOfBounds`` are allowed to escape the mode
handlers. Everything else is turned into a status message by the handler
that hit it, with buffer and cursor left exactly as they were.
"""


class EditorError(Exception):
    """Base class for all editor errors."""


class OutOfBounds(EditorError, IndexError):
    """A buffer operation addressed a position outside the current bounds.

    Handlers clamp positions through the cursor model before touching the
    buffer, so this only surfaces on programming errors.
    """


class IOFailure(EditorError):
    """Reading or writing a file failed."""


class ClipboardFailure(EditorError):
    """The system clipboard was unavailable or rejected the request."""


class InvalidInput(EditorError, ValueError):
    """Malformed prompt input (jump target, vim command word, filename)."""


class FatalStartup(EditorError):
    """The terminal could not be put into the required interaction mode."""

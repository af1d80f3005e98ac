"""Reading and atomically writing UTF-8 text files."""

import errno
import logging
import os
import tempfile
from typing import Optional

from .errors import IOFailure

logger = logging.getLogger(__name__)


class FileStore:
    """File access for the editor.

    Content is passed through verbatim: no newline translation on read or
    write, so a file that is loaded and saved unchanged keeps its bytes.
    """

    def read(self, filename: str) -> Optional[str]:
        """Return the file's content, or None if it does not exist yet."""
        try:
            with open(filename, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except FileNotFoundError:
            return None
        except PermissionError as e:
            raise IOFailure(f"Error: Permission denied reading {filename}") from e
        except UnicodeDecodeError as e:
            raise IOFailure(f"Error: {filename} is not valid UTF-8") from e
        except OSError as e:
            raise IOFailure(f"Error: Cannot read {filename}: {e.strerror}") from e

    def write(self, filename: str, content: str) -> None:
        """Save content to filename atomically.

        The data goes to a temporary file in the target's directory, which
        is then renamed over the target; a failed save leaves the original
        file untouched.
        """
        dir_name = os.path.dirname(filename) or '.'
        suffix = os.path.splitext(filename)[1]
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='',
                                             dir=dir_name, suffix=suffix,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())

            os.replace(temp_filename, filename)
        except PermissionError as e:
            self._discard(temp_filename)
            logger.warning("Save to %s failed: %s", filename, e)
            raise IOFailure(f"Error: Permission denied saving {filename}") from e
        except OSError as e:
            self._discard(temp_filename)
            logger.warning("Save to %s failed: %s", filename, e)
            if e.errno == errno.ENOSPC:
                raise IOFailure("Error: No space left on device") from e
            raise IOFailure(f"Error: Cannot save to {filename}") from e

    @staticmethod
    def _discard(temp_filename: Optional[str]) -> None:
        if temp_filename and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError:
                logger.warning("Could not remove temporary file %s", temp_filename)

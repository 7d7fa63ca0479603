"""Reading whole files and checking whether they can be opened."""

from pathlib import Path

from .errors import CWebError


def read_file(path):
    """Return the contents of the file at ``path`` as text.

    Raises CWebError when the file cannot be opened or is empty.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise CWebError(2, f"Failed to open file ({exc.errno}): {exc.strerror}") from exc
    if not data:
        raise CWebError(2, "File size is invalid.")
    return data.decode("utf-8", errors="replace")


def file_exists(path):
    """Return True if ``path`` can be opened for reading."""
    try:
        with open(path, "rb"):
            return True
    except OSError:
        return False
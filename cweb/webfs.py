"""Mapping request paths onto HTML files below a public directory."""

from .errors import CWebError
from .fileio import file_exists, read_file
from .headers import MAX_FILE_LEN
from .strings import truncate


def _join(fs_root, relative):
    return truncate(f"{fs_root}/{relative}", MAX_FILE_LEN)


def get_html(uri, fs_root):
    """Return the HTML served for ``uri`` from ``fs_root``, or None if absent.

    ``/`` maps to ``index.html``; ``/name`` maps to ``name.html`` or else
    ``name/index.html``. Raises CWebError for invalid paths, paths that
    climb out of the root, and files that cannot be read.
    """
    if not uri or not uri.startswith("/"):
        raise CWebError(1, "Invalid path (NULL or doesn't start with '/').")

    if uri == "/":
        return read_file(_join(fs_root, "index.html"))

    if ".." in uri:
        raise CWebError(
            3,
            "Found '..' (directory up). Somebody may be trying to exploit the file system!",
        )

    relative = uri[1:]
    for candidate in (f"{relative}.html", f"{relative}/index.html"):
        path = _join(fs_root, candidate)
        if file_exists(path):
            return read_file(path)
    return None
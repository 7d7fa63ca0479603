"""HTTP header collection and limits shared by requests and responses."""

from .errors import CWebError
from .strings import split_tokens, trim, truncate

MAX_FILE_LEN = 255
MAX_NAME_LEN = 255
MAX_IP_LEN = 24
MAX_DATE_LEN = 22
MAX_CFG_LEN = 4096

MAX_HEADERS = 256

MAX_ALLOWED_HOSTS = 30
MAX_ALLOWED_USER_AGENTS = 30

MAX_THREADS = 256

HTTP_HOST_MAX_LEN = 255
HTTP_DOMAIN_MAX_LEN = 255
HTTP_METHOD_MAX_LEN = 6
HTTP_PATH_MAX_LEN = 255
HTTP_VERSION_MAX_LEN = 12
HTTP_UA_MAX_LEN = 255

HEADER_VALUE_MAX_LEN = 4096


def is_header(line):
    """Return True if ``line`` looks like a ``name: value`` header."""
    return ":" in line


class Headers:
    """An ordered list of HTTP headers with a fixed maximum size."""

    def __init__(self):
        self._items = []

    def add(self, name, value):
        """Append a header; raises CWebError once the limit is reached."""
        if len(self._items) >= MAX_HEADERS:
            raise CWebError(
                1,
                f"Header count exceeds maximum headers ({len(self._items)} > {MAX_HEADERS})",
            )
        self._items.append((truncate(name, MAX_NAME_LEN), value))

    def get(self, name):
        """Return the trimmed value of the first header named ``name``, or None."""
        for header_name, value in self._items:
            if header_name == name:
                return trim(value)
        return None

    def parse_raw(self, line):
        """Parse a raw ``name: value`` line and add it.

        Colons delimit fields, so only the text up to the next colon
        after the name becomes the value.
        """
        tokens = split_tokens(line, ":")
        if not tokens:
            raise CWebError(2, f"Malformed header (colon is missing?): {line}")
        name = truncate(tokens[0], MAX_NAME_LEN)
        value = truncate(tokens[1], HEADER_VALUE_MAX_LEN) if len(tokens) > 1 else ""
        self.add(name, value)

    def __iter__(self):
        return iter(list(self._items))

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"Headers({self._items!r})"
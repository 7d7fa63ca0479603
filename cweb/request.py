"""Parsing and rendering of plain HTTP requests."""

import re
from dataclasses import dataclass, field

from .errors import CWebError
from .headers import MAX_FILE_LEN, MAX_NAME_LEN, Headers, is_header
from .strings import count_delim, split_tokens, truncate

_VERSION_MAX_LEN = 24
_HEADERS_END = "\r\n\r\n"


def parse_request_line(line):
    """Split a request line into ``(method, path, version)``."""
    if count_delim(line, " ") < 2:
        raise CWebError(2, "Space count under 2.")
    tokens = split_tokens(line, " ")
    if len(tokens) < 1:
        raise CWebError(4, "No method or malformed request.")
    if len(tokens) < 2:
        raise CWebError(5, "No path or malformed request.")
    if len(tokens) < 3:
        raise CWebError(6, "No HTTP version or malformed request.")
    return (
        truncate(tokens[0], MAX_NAME_LEN),
        truncate(tokens[1], MAX_FILE_LEN),
        truncate(tokens[2], _VERSION_MAX_LEN),
    )


@dataclass
class HttpRequest:
    """An HTTP request: request line, headers and optional body."""

    method: str = ""
    path: str = ""
    version: str = ""
    headers: Headers = field(default_factory=Headers)
    body: "str | None" = None

    @classmethod
    def parse(cls, buffer):
        """Parse a full raw request; raises CWebError when it is malformed."""
        end = buffer.find(_HEADERS_END)
        if end < 0:
            raise CWebError(
                2,
                "HTTP request malformed (missing '\\r\\n\\r\\n)' between headers and body if any).",
            )
        head, body = buffer[:end], buffer[end + len(_HEADERS_END):]
        request = cls()
        lines = (line for line in re.split(r"[\r\n]", head) if line)
        for number, line in enumerate(lines, start=1):
            if number == 1:
                request.method, request.path, request.version = parse_request_line(line)
            elif is_header(line):
                request.headers.parse_raw(line)
        request.body = body
        return request

    def render(self):
        """Return the raw text of the request."""
        parts = [f"{self.method} {self.path} {self.version}\r\n"]
        parts.extend(f"{name}: {value}\r\n" for name, value in self.headers)
        parts.append("\r\n")
        if self.body is not None:
            parts.append(self.body)
        return "".join(parts)
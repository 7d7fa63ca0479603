"""Rendering of plain HTTP responses."""

from dataclasses import dataclass, field

from .headers import Headers


@dataclass
class HttpResponse:
    """An HTTP response: status line, headers and optional body."""

    version: str = "HTTP/1.1"
    code: int = 200
    message: str = "OK"
    headers: Headers = field(default_factory=Headers)
    body: "str | None" = None

    def render(self):
        """Return the raw text of the response."""
        parts = [f"{self.version} {self.code} {self.message}\r\n"]
        parts.extend(f"{name}: {value}\r\n" for name, value in self.headers)
        parts.append("\r\n")
        if self.body is not None:
            parts.append(self.body)
        return "".join(parts)
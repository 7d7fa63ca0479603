"""Error type shared by the HTTP utilities, server and stress client."""


class CWebError(Exception):
    """An error carrying a numeric code and a human readable message."""

    def __init__(self, code, message):
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self):
        return f"CWebError(code={self.code!r}, message={self.message!r})"
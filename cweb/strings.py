"""Small string helpers used by the HTTP parsing code."""

# The characters C's isspace() treats as whitespace in the "C" locale.
_C_WHITESPACE = " \t\n\v\f\r"


def truncate(text, size):
    """Return ``text`` cut to fit a buffer of ``size`` (keeps ``size - 1`` characters)."""
    if size < 1:
        raise ValueError("size must be at least 1")
    return text[: size - 1]


def split_tokens(text, delim):
    """Split ``text`` on ``delim``, dropping empty tokens."""
    if len(delim) != 1:
        raise ValueError("delimiter must be a single character")
    return [token for token in text.split(delim) if token]


def count_delim(text, delim):
    """Return how many times the single character ``delim`` occurs in ``text``."""
    if len(delim) != 1:
        raise ValueError("delimiter must be a single character")
    return text.count(delim)


def trim(text):
    """Strip leading and trailing ASCII whitespace."""
    return text.strip(_C_WHITESPACE)
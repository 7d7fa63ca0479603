import pytest

from cweb.strings import count_delim, split_tokens, trim, truncate


def test_truncate_keeps_size_minus_one():
    text = "abcdefghij"
    result = truncate(text, 4)
    assert len(result) == 3
    assert text.startswith(result)


def test_truncate_short_text_unchanged():
    assert truncate("GET", 255) == "GET"


def test_truncate_invalid_size():
    with pytest.raises(ValueError):
        truncate("x", 0)


def test_split_request_line():
    assert split_tokens("GET / HTTP/1.1", " ") == ["GET", "/", "HTTP/1.1"]


def test_split_skips_empty_tokens():
    assert split_tokens("a  b ", " ") == ["a", "b"]


def test_split_empty_string():
    assert split_tokens("", " ") == []


def test_split_rejects_multi_char_delim():
    with pytest.raises(ValueError):
        split_tokens("a,b", ",,")


def test_count_delim():
    assert count_delim("GET / HTTP/1.1", " ") == 2
    assert count_delim("nospace", " ") == 0


def test_trim_whitespace():
    assert trim("  value \t\r\n") == "value"


def test_trim_all_whitespace():
    assert trim(" \t \v\f ") == ""


@pytest.mark.parametrize("text", ["", "x", " a b ", "\tlocalhost\r\n"])
def test_trim_idempotent(text):
    once = trim(text)
    assert trim(once) == once
    assert once in text
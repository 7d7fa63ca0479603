import pytest

from cweb.errors import CWebError
from cweb.headers import MAX_FILE_LEN
from cweb.request import HttpRequest, parse_request_line

RAW = (
    "GET /about HTTP/1.1\r\n"
    "Host: localhost\r\n"
    "User-Agent: tester\r\n"
    "\r\n"
    "payload"
)


def test_parse_full_request():
    request = HttpRequest.parse(RAW)
    assert request.method == "GET"
    assert request.path == "/about"
    assert request.version == "HTTP/1.1"
    assert request.headers.get("Host") == "localhost"
    assert request.headers.get("User-Agent") == "tester"
    assert request.body == "payload"


def test_parse_empty_body():
    request = HttpRequest.parse("GET / HTTP/1.1\r\nHost: localhost\r\n\r\n")
    assert request.body == ""
    assert len(request.headers) == 1


def test_lines_without_colon_ignored():
    request = HttpRequest.parse("GET / HTTP/1.1\r\nnot a header\r\nHost: localhost\r\n\r\n")
    assert [name for name, _ in request.headers] == ["Host"]


def test_missing_header_terminator():
    with pytest.raises(CWebError) as info:
        HttpRequest.parse("GET / HTTP/1.1\r\nHost: localhost\r\n")
    assert info.value.code == 2


def test_too_few_spaces():
    with pytest.raises(CWebError) as info:
        HttpRequest.parse("GET /\r\n\r\n")
    assert info.value.message == "Space count under 2."


def test_missing_version():
    with pytest.raises(CWebError) as info:
        parse_request_line("GET  /")
    assert info.value.code == 6


def test_parse_request_line():
    assert parse_request_line("POST /submit HTTP/1.0") == ("POST", "/submit", "HTTP/1.0")


def test_long_path_truncated():
    path = "/" + "a" * 400
    method, parsed, version = parse_request_line(f"GET {path} HTTP/1.1")
    assert len(parsed) == MAX_FILE_LEN - 1
    assert path.startswith(parsed)


def test_render_exact():
    request = HttpRequest(method="GET", path="/", version="HTTP/1.1")
    request.headers.add("Host", "localhost")
    assert request.render() == "GET / HTTP/1.1\r\nHost: localhost\r\n\r\n"


def test_render_parse_round_trip():
    request = HttpRequest(method="POST", path="/form", version="HTTP/1.1", body="a=1&b=2")
    request.headers.add("Host", "example.com")
    request.headers.add("User-Agent", "stress")
    parsed = HttpRequest.parse(request.render())
    assert (parsed.method, parsed.path, parsed.version) == ("POST", "/form", "HTTP/1.1")
    assert list(parsed.headers) == [("Host", " example.com"), ("User-Agent", " stress")]
    assert parsed.body == request.body
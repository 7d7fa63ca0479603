import pytest

from cweb.headers import HTTP_METHOD_MAX_LEN, MAX_IP_LEN
from cweb.stress_cli import BODY_MAX_LEN, StressOptions, parse_stress_args


def test_no_arguments_gives_defaults():
    assert parse_stress_args([]) == StressOptions()


def test_short_options():
    options = parse_stress_args(
        ["-z", "-i", "127.0.0.1", "-p", "8080", "-d", "example.com", "-m", "POST",
         "-r", "/index", "-v", "HTTP/1.0", "-u", "agent", "-b", "hello", "-t", "4",
         "-s", "250", "-l", "-h"]
    )
    assert options == StressOptions(
        details=True, host="127.0.0.1", port=8080, domain="example.com", method="POST",
        path="/index", http_version="HTTP/1.0", ua="agent", body="hello", threads=4,
        send_delay=250, list=True, help=True,
    )


def test_long_options():
    options = parse_stress_args(
        ["--host=localhost", "--port", "9000", "--domain", "example.com",
         "--http-version", "HTTP/1.1", "--send-delay=7", "--details"]
    )
    assert options.host == "localhost"
    assert options.port == 9000
    assert options.domain == "example.com"
    assert options.http_version == "HTTP/1.1"
    assert options.send_delay == 7
    assert options.details is True


def test_method_is_truncated_to_buffer():
    options = parse_stress_args(["-m", "OPTIONS"])
    assert len(options.method) == HTTP_METHOD_MAX_LEN - 1
    assert "OPTIONS".startswith(options.method)


def test_host_is_truncated_to_buffer():
    options = parse_stress_args(["-i", "h" * 100])
    assert options.host == "h" * (MAX_IP_LEN - 1)


def test_body_is_truncated_to_buffer():
    options = parse_stress_args(["-b", "x" * 5000])
    assert len(options.body) == BODY_MAX_LEN - 1


@pytest.mark.parametrize(
    "text,expected",
    [("0x10", 16), ("010", 8), ("42", 42), ("abc", 0)],
)
def test_send_delay_detects_base(text, expected):
    assert parse_stress_args(["-s", text]).send_delay == expected


def test_send_delay_never_negative():
    assert parse_stress_args(["-s", "-1"]).send_delay == 2**64 - 1


def test_port_that_is_not_a_number_is_zero():
    assert parse_stress_args(["-p", "http"]).port == 0


def test_missing_argument_is_reported(capsys):
    options = parse_stress_args(["-i"])
    assert options.host == ""
    assert "Missing argument option..." in capsys.readouterr().err


def test_unknown_option_is_reported_and_ignored(capsys):
    options = parse_stress_args(["-x", "-t", "3"])
    assert options.threads == 3
    assert "Missing argument option..." in capsys.readouterr().err
import os

from cweb.stress_app import main


def test_help_prints_usage(capsys):
    assert main(["-h"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Usage: cweb-stress [OPTIONS]\n\n")
    assert "  -s, --send-delay <val>" in out


def test_missing_host_fails(capsys):
    assert main(["-p", "80"]) == 1
    assert "No host specified. Please set --host or -i argument." in capsys.readouterr().err


def test_missing_port_fails(capsys):
    assert main(["-i", "127.0.0.1"]) == 1
    assert "Invalid port." in capsys.readouterr().err


def test_list_shows_defaults(capsys):
    assert main(["-i", "127.0.0.1", "-p", "8080", "-l"]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[0] == "Current Settings:"
    assert "Host: 127.0.0.1" in lines
    assert "Port: 8080" in lines
    assert "Domain: localhost" in lines
    assert "Method: GET" in lines
    assert "Path: /" in lines
    assert "HTTP Version: HTTP/1.1" in lines
    assert f"Threads: {os.cpu_count() or 1}" in lines
    assert "Send Delay: 0" in lines
    assert "Body:" not in out


def test_list_keeps_given_values_and_body(capsys):
    argv = ["-i", "localhost", "-p", "81", "-d", "example.com", "-m", "POST",
            "-t", "3", "-s", "5", "-b", "payload"]
    assert main(argv + ["-l"]) == 0
    out = capsys.readouterr().out
    assert "Domain: example.com\n" in out
    assert "Method: POST\n" in out
    assert "Threads: 3\n" in out
    assert "Send Delay: 5\n" in out
    assert out.endswith("\n\n\nBody:\npayload\n")
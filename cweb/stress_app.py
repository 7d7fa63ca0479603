"""Entry point of the HTTP stress client command."""

import dataclasses
import os
import signal
import sys
import threading

from .headers import MAX_THREADS
from .stress_cli import parse_stress_args
from .stress_client import run_worker

_USAGE = """\
Usage: cweb-stress [OPTIONS]

  -z, --details            If set, prints to stdout whenever an HTTP request is sent (will hurt performance, but useful for debugging).
  -i, --host <val>         The host to send HTTP requests to (supports hostnames and IPs).
  -p, --port <val>         The port to send HTTP requests to.
  -d, --domain <val>       The domain to use in the Host header (default: localhost).
  -m, --method <val>       The HTTP method to use (default: GET).
  -r, --path <val>         The HTTP path to use (default: /).
  -v, --http-version <val> The HTTP version to use (default: HTTP/1.1).
  -u, --ua <val>           The User-Agent to set (optional; skips header if unset).
  -b, --body <val>         The HTTP body to send.
  -t, --threads <val>      Number of threads to use (default: number of CPU cores).
  -s, --send-delay <val>   Delay in microseconds between each request per thread (default: 0).
  -l, --list               Print the current CLI values and exit.
  -h, --help               Show this help message and exit.
"""

_JOIN_TIMEOUT = 2.0


def _with_defaults(options):
    return dataclasses.replace(
        options,
        threads=options.threads if options.threads >= 1 else (os.cpu_count() or 1),
        domain=options.domain or "localhost",
        method=options.method or "GET",
        path=options.path or "/",
        http_version=options.http_version or "HTTP/1.1",
    )


def _describe(options):
    lines = [
        "Current Settings:",
        f"Host: {options.host}",
        f"Port: {options.port}",
        f"Domain: {options.domain}",
        f"Method: {options.method}",
        f"Path: {options.path}",
        f"HTTP Version: {options.http_version}",
        f"UA: {options.ua}",
        f"Threads: {options.threads}",
        f"Send Delay: {options.send_delay}",
    ]
    text = "\n".join(lines) + "\n"
    if options.body:
        text += f"\n\nBody:\n{options.body}\n"
    return text


def _spawn_workers(options, stop):
    workers = []
    for worker_id in range(1, min(options.threads, MAX_THREADS) + 1):
        worker = threading.Thread(
            target=run_worker,
            args=(worker_id, options, stop),
            name=f"cweb-stress-{worker_id}",
            daemon=True,
        )
        try:
            worker.start()
        except RuntimeError:
            print(f"Failed to create thread #{worker_id}.", file=sys.stderr)
            continue
        workers.append(worker)
    return workers


def main(argv=None):
    """Run the stress client; returns the process exit status."""
    options = parse_stress_args(argv)

    if options.help:
        print(_USAGE)
        return 0

    if not options.host:
        print("No host specified. Please set --host or -i argument.", file=sys.stderr)
        return 1

    if options.port < 1:
        print(
            "Invalid port. Please make sure you've set the port via --port or -p argument.",
            file=sys.stderr,
        )
        return 1

    options = _with_defaults(options)

    if options.list:
        print(_describe(options), end="")
        return 0

    print(
        f"Sending to {options.host}:{options.port}.. Domain={options.domain} "
        f"Method={options.method} Path={options.path} HTTP_Version={options.http_version} "
        f"UA={options.ua} Threads={options.threads} Send_Delay={options.send_delay}"
    )

    stop = threading.Event()
    workers = _spawn_workers(options, stop)

    previous = {
        signum: signal.signal(signum, lambda *_: stop.set())
        for signum in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        while not stop.is_set():
            stop.wait(1)
    finally:
        stop.set()
        for signum, handler in previous.items():
            signal.signal(signum, handler)

    for worker in workers:
        worker.join(_JOIN_TIMEOUT)

    print("Shutting down... Bye!")
    return 0
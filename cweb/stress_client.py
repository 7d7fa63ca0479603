"""Worker that repeatedly sends one HTTP request to a target host."""

import socket
import sys

from .headers import HTTP_VERSION_MAX_LEN, MAX_FILE_LEN, MAX_NAME_LEN
from .request import HttpRequest
from .strings import truncate

_RETRY_DELAY = 1.0
_CONNECT_TIMEOUT = 5.0


def build_request(options):
    """Return the raw HTTP request text the workers send for ``options``."""
    request = HttpRequest(
        method=truncate(options.method, MAX_NAME_LEN),
        path=truncate(options.path, MAX_FILE_LEN),
        version=truncate(options.http_version, HTTP_VERSION_MAX_LEN),
        body=options.body,
    )
    request.headers.add("Host", options.domain)
    if options.ua:
        request.headers.add("User-Agent", options.ua)
    return request.render()


def _resolve(worker_id, options):
    try:
        infos = socket.getaddrinfo(
            options.host, str(options.port), socket.AF_INET, socket.SOCK_STREAM
        )
    except (socket.gaierror, UnicodeError) as exc:
        reason = getattr(exc, "strerror", None) or str(exc)
        print(
            f"[T {worker_id}] Failed to resolve host '{options.host}': {reason}",
            file=sys.stderr,
        )
        return None
    if not infos:
        print(
            f"[T {worker_id}] Failed to resolve host '{options.host}': no address",
            file=sys.stderr,
        )
        return None
    return infos[0][4]


def _send_once(worker_id, address, payload):
    """Connect, send the payload once and close; return bytes sent or None."""
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    except OSError:
        return None
    with sock:
        sock.settimeout(_CONNECT_TIMEOUT)
        try:
            sock.connect(address)
        except OSError as exc:
            reason = exc.strerror or str(exc)
            print(
                f"[T {worker_id}] Failed to connect to host using connect(): "
                f"{reason} ({exc.errno})",
                file=sys.stderr,
            )
            return None
        try:
            sent = sock.send(payload)
        except OSError:
            sent = 0
        if sent < 1:
            print(f"[T {worker_id}] Failed to send data on socket using send().", file=sys.stderr)
            return None
        return sent


def run_worker(worker_id, options, stop_event):
    """Send the configured request over fresh connections until ``stop_event`` is set.

    Returns the number of requests sent.
    """
    payload = build_request(options).encode("utf-8")

    address = _resolve(worker_id, options)
    if address is None:
        return 0
    print(f"[T {worker_id}] Resolved '{options.host}' to '{address[0]}:{address[1]}'")

    count = 0
    while not stop_event.is_set():
        sent = _send_once(worker_id, address, payload)
        if sent is None:
            stop_event.wait(_RETRY_DELAY)
            continue
        count += 1
        if options.details:
            print(f"[T {worker_id}] Sent HTTP request ({sent} bytes)...")
        if options.send_delay > 0:
            stop_event.wait(options.send_delay / 1_000_000)
    return count
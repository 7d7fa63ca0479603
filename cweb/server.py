"""Multi-threaded HTTP server serving HTML files from a public directory."""

import socket
import threading

from .config import ThreadType
from .errors import CWebError
from .fileio import read_file
from .headers import MAX_FILE_LEN
from .logger import LogLevel, log
from .request import HttpRequest
from .response import HttpResponse
from .strings import split_tokens, truncate
from .webfs import get_html

_RECV_SIZE = 4095
_POLL_INTERVAL = 0.2
_CLIENT_TIMEOUT = 10.0
_JOIN_TIMEOUT = 5.0


def create_listen_socket(bind_addr, bind_port, reuse_port):
    """Create a TCP socket bound to ``bind_addr:bind_port`` and listening.

    Raises CWebError when the socket cannot be created, the address is not
    a valid IPv4 address, or binding or listening fails.
    """
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    except OSError as exc:
        raise CWebError(1, f"Failed to create socket ({exc.errno}): {exc.strerror}") from exc

    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        reuse_option = getattr(socket, "SO_REUSEPORT", None)
        if reuse_port and reuse_option is not None:
            try:
                sock.setsockopt(socket.SOL_SOCKET, reuse_option, 1)
            except OSError:
                pass

        try:
            socket.inet_pton(socket.AF_INET, bind_addr)
        except (OSError, TypeError) as exc:
            raise CWebError(
                2, f"Failed to convert bind address '{bind_addr}' to decimal: {exc}"
            ) from exc

        try:
            sock.bind((bind_addr, int(bind_port) & 0xFFFF))
        except OSError as exc:
            raise CWebError(3, f"Failed to bind socket ({exc.errno}): {exc.strerror}") from exc

        try:
            sock.listen(socket.SOMAXCONN)
        except OSError as exc:
            raise CWebError(
                4, f"Failed to listen on socket ({exc.errno}): {exc.strerror}"
            ) from exc
    except BaseException:
        sock.close()
        raise
    return sock


def _is_allowed(config, request):
    """Apply the allowed-hosts and allowed-user-agents filters."""
    if config.allowed_hosts:
        host_full = request.headers.get("Host")
        if host_full is None:
            log(config, LogLevel.NOTICE, "[ALLOWED_HOSTS] Failed to retrieve 'Host' header.")
            return False
        parts = split_tokens(host_full, ":")
        host = parts[0] if parts else None
        if host not in config.allowed_hosts:
            log(config, LogLevel.NOTICE, "[ALLOWED_HOSTS] Host not allowed.")
            return False

    if config.allowed_user_agents:
        agent = request.headers.get("User-Agent")
        if agent is None or agent not in config.allowed_user_agents:
            return False

    return True


def _fill_body(config, request, response):
    try:
        body = get_html(request.path, config.public_dir)
    except CWebError as exc:
        log(
            config,
            LogLevel.WARN,
            f"Failed to retrieve HTML contents from file system: {exc.message} ({exc.code})",
        )
        response.code, response.message = 500, "Internal Server Error"
        return

    if body is None:
        response.code, response.message = 404, "Not Found"
        try:
            body = read_file(truncate(f"{config.public_dir}/404.html", MAX_FILE_LEN))
        except CWebError:
            body = None
    else:
        response.code, response.message = 200, "OK"
    response.body = body


def build_response(config, raw):
    """Return the raw HTTP response text for the raw request ``raw``.

    Raises CWebError when the request cannot be parsed.
    """
    request = HttpRequest.parse(raw)
    log(
        config,
        LogLevel.NOTICE,
        f"Method => {request.method}. Path => {request.path}. Version => {request.version}",
    )

    response = HttpResponse(version="HTTP/1.1")
    if _is_allowed(config, request):
        _fill_body(config, request, response)
    else:
        response.code, response.message = 403, "Forbidden"

    response.headers.add("Server", config.server_name)
    response.headers.add("Content-Type", "text/html")
    response.headers.add("Cache-Control", "no-store")

    log(config, LogLevel.TRACE, f"Sending back code: {response.code}")
    return response.render()


class Server:
    """A pool of worker threads accepting and answering HTTP connections."""

    def __init__(self, config, threads):
        self.config = config
        self.threads = threads
        self._stop = threading.Event()
        self._workers = []
        self._global_sock = None

    def start(self):
        """Open the listening socket if shared and spawn the worker threads.

        Raises CWebError when the shared socket cannot be set up.
        """
        self._stop.clear()
        if self.config.thread_type == ThreadType.GLOBAL_SOCK:
            self._global_sock = create_listen_socket(
                self.config.bind_addr, self.config.bind_port, True
            )
            self._global_sock.settimeout(_POLL_INTERVAL)

        for worker_id in range(1, self.threads + 1):
            worker = threading.Thread(
                target=self._run_worker,
                args=(worker_id,),
                name=f"cweb-worker-{worker_id}",
                daemon=True,
            )
            self._workers.append(worker)
            worker.start()

    def shutdown(self):
        """Stop all workers and close the shared socket.

        Returns True when every worker thread has stopped.
        """
        self._stop.set()
        for worker in self._workers:
            worker.join(_JOIN_TIMEOUT)
        self._workers = [worker for worker in self._workers if worker.is_alive()]

        if self._global_sock is not None:
            self._global_sock.close()
            self._global_sock = None

        return not self._workers

    def _run_worker(self, worker_id):
        config = self.config
        owns_socket = config.thread_type == ThreadType.PER_SOCK

        if owns_socket:
            try:
                sock = create_listen_socket(config.bind_addr, config.bind_port, True)
            except CWebError as exc:
                log(
                    config,
                    LogLevel.ERROR,
                    f"Failed to create individual socket on thread #{worker_id} ({exc.code})",
                )
                return
            sock.settimeout(_POLL_INTERVAL)
        else:
            sock = self._global_sock
            if sock is None:
                log(config, LogLevel.ERROR, f"No listening socket for thread #{worker_id}.")
                return

        try:
            log(
                config,
                LogLevel.INFO,
                f"Spinning up web server thread #{worker_id} (socket FD => {sock.fileno()})...",
            )
            while (conn := self._accept(sock, worker_id)) is not None:
                with conn:
                    self._handle(conn)
        finally:
            if owns_socket:
                sock.close()

    def _accept(self, sock, worker_id):
        """Wait for a connection; return None once the server is stopping."""
        config = self.config
        log(config, LogLevel.TRACE, f"Waiting for new connections on thread #{worker_id}...")
        while not self._stop.is_set():
            try:
                conn, _ = sock.accept()
            except TimeoutError:
                continue
            except OSError:
                if self._stop.is_set():
                    return None
                log(config, LogLevel.ERROR, "Failed to accept connection.")
                self._stop.wait(_POLL_INTERVAL)
                continue
            log(config, LogLevel.TRACE, "Accepted new connection!")
            conn.settimeout(_CLIENT_TIMEOUT)
            return conn
        return None

    def _handle(self, conn):
        config = self.config
        try:
            data = conn.recv(_RECV_SIZE)
        except OSError:
            log(config, LogLevel.ERROR, "Failed to receive data.")
            return

        log(config, LogLevel.TRACE, f"Read {len(data)} bytes from request.")
        raw = data.decode("utf-8", errors="replace").split("\0", 1)[0]

        try:
            payload = build_response(config, raw)
        except CWebError as exc:
            log(config, LogLevel.ERROR, f"Failed to parse request: {exc.message} ({exc.code})")
            return

        try:
            conn.sendall(payload.encode("utf-8"))
        except OSError:
            log(config, LogLevel.ERROR, "Failed to send response.")
"""Entry point of the web server command."""

import os
import signal
import threading
import time

from .cli import parse_args
from .config import Config, load_config
from .errors import CWebError
from .headers import MAX_THREADS
from .logger import LogLevel, log
from .server import Server

_USAGE = """\
Usage: cweb [OPTIONS]

  -c, --cfg <val>          Path to the runtime config file (default: ./conf.json).
  -t, --time <val>         If set, runs the web server for this long in seconds before exiting.
  -l, --list               Print the contents of the runtime config and exit.
  -h, --help               Show this help message and exit.
  -r, --log-lvl <val>      Override the log level value from the config.
  -f, --log-file <val>     Override the log file path from the config.
  -b, --bind-addr <val>    Override the bind address from the config.
  -p, --bind-port <val>    Override the bind port from the config.
"""


def _run_until_stopped(config, run_time, stop):
    end_time = time.time() + run_time if run_time > 0 else None
    while not stop.is_set():
        if end_time is not None and time.time() > end_time:
            log(config, LogLevel.NOTICE, f"Exceeded {run_time} seconds of runtime...")
            break
        stop.wait(1)


def main(argv=None):
    """Run the web server; returns the process exit status."""
    options = parse_args(argv)

    if options.help:
        print(_USAGE)
        return 0

    try:
        config = load_config(options.cfg_path, True)
    except CWebError as exc:
        log(
            Config(),
            LogLevel.FATAL,
            f"Failed to load config '{options.cfg_path}': {exc.message} ({exc.code}).",
        )
        return 1

    log(config, LogLevel.NOTICE, "Config loaded...")

    if options.list:
        print(config.describe(), end="")
        return 0

    threads = config.threads if config.threads >= 1 else (os.cpu_count() or 1)
    threads = min(threads, MAX_THREADS)

    log(config, LogLevel.INFO, f"Setting up web server with {threads} threads...")

    server = Server(config, threads)
    try:
        server.start()
    except CWebError as exc:
        log(config, LogLevel.FATAL, f"Failed to setup web server: {exc.message} ({exc.code})")
        server.shutdown()
        return 1

    stop = threading.Event()
    previous = {
        signum: signal.signal(signum, lambda *_: stop.set())
        for signum in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        _run_until_stopped(config, options.time, stop)
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)

    log(config, LogLevel.NOTICE, "Found shutdown signal. Shutting down web server...")

    if not server.shutdown():
        log(config, LogLevel.ERROR, "Failed to shutdown all web server threads.")
        return 1

    log(config, LogLevel.INFO, "Successfully shut down web server. Bye!")
    return 0
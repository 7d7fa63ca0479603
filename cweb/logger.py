"""Levelled logging to the console and, optionally, to a log file."""

import sys
from datetime import datetime
from enum import IntEnum

from .errors import CWebError


class LogLevel(IntEnum):
    """Log levels; a lower value is more severe."""

    FATAL = 1
    ERROR = 2
    WARN = 3
    NOTICE = 4
    INFO = 5
    DEBUG = 6
    TRACE = 7


def level_name(level):
    """Return the display name of ``level``, or ``"N/A"`` for unknown values."""
    try:
        return LogLevel(int(level)).name
    except ValueError:
        return "N/A"


def log_raw(level, required, log_path, message):
    """Log ``message`` at level ``required`` if the current ``level`` allows it.

    The line goes to stderr when the current level is FATAL or ERROR and to
    stdout otherwise. When ``log_path`` is given the line is also appended to
    that file with a timestamp; CWebError is raised if the file cannot be
    written.
    """
    if int(required) > int(level):
        return

    stream = sys.stderr if int(level) in (LogLevel.FATAL, LogLevel.ERROR) else sys.stdout
    line = f"[{level_name(required)}] {message}"
    print(line, file=stream)

    if log_path is None:
        return

    try:
        with open(log_path, "a", encoding="utf-8") as log_file:
            stamp = datetime.now().strftime("%y-%m-%d %H:%M:%S")
            log_file.write(f"[{stamp}]{line}\n")
    except OSError as exc:
        raise CWebError(
            2, f"Failed to open log path '{log_path}' ({exc.errno}): {exc.strerror}"
        ) from exc


def log(config, required, message):
    """Log ``message`` using the level and log file of ``config``.

    Failures to write the log file are ignored.
    """
    try:
        log_raw(config.log_lvl, required, config.log_file, message)
    except CWebError:
        pass
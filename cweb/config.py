"""Runtime configuration of the web server, loaded from JSON."""

import json
import math
import re
from dataclasses import dataclass, field
from enum import IntEnum

from .errors import CWebError
from .fileio import read_file
from .headers import (
    MAX_ALLOWED_HOSTS,
    MAX_ALLOWED_USER_AGENTS,
    MAX_FILE_LEN,
    MAX_IP_LEN,
    MAX_NAME_LEN,
)
from .logger import LogLevel, level_name
from .strings import truncate

_USER_AGENT_LEN = 255
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class ThreadType(IntEnum):
    """How worker threads get their listening socket."""

    GLOBAL_SOCK = 0
    PER_SOCK = 1


def _as_int(value):
    """Convert a JSON value to a 32-bit integer the lenient way."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if math.isnan(value):
            return 0
        if math.isinf(value):
            return _INT_MAX if value > 0 else _INT_MIN
        number = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        number = int(match.group(1)) if match else 0
    else:
        return 0
    return max(_INT_MIN, min(_INT_MAX, number))


def _as_str(value):
    """Convert a JSON value to text; non-strings become their JSON form."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _as_str_list(value, limit, size):
    items = value[:limit] if isinstance(value, list) else [value]
    return [truncate(_as_str(item), size) for item in items]


@dataclass
class Config:
    """Web server settings; the field defaults are the built-in defaults."""

    log_lvl: int = LogLevel.NOTICE
    log_file: str = "/var/log/cweb.log"
    bind_addr: str = "127.0.0.1"
    bind_port: int = 80
    server_name: str = "CWeb"
    public_dir: str = "./public"
    threads: int = 0
    thread_type: int = ThreadType.GLOBAL_SOCK
    allowed_hosts: list = field(default_factory=list)
    allowed_user_agents: list = field(default_factory=list)

    def apply_json(self, data):
        """Override settings with those present in the JSON text ``data``.

        Raises CWebError when the text is not valid JSON.
        """
        try:
            root = json.loads(data)
        except ValueError as exc:
            raise CWebError(1, "Failed to parse JSON.") from exc
        if root is None:
            raise CWebError(1, "Failed to parse JSON.")

        values = root if isinstance(root, dict) else {}

        if (value := values.get("log_lvl")) is not None:
            self.log_lvl = _as_int(value)
        if (value := values.get("log_file")) is not None:
            self.log_file = truncate(_as_str(value), MAX_FILE_LEN)
        if (value := values.get("bind_addr")) is not None:
            self.bind_addr = truncate(_as_str(value), MAX_IP_LEN)
        if (value := values.get("bind_port")) is not None:
            self.bind_port = _as_int(value) & 0xFFFF
        if (value := values.get("server_name")) is not None:
            self.server_name = truncate(_as_str(value), MAX_NAME_LEN)
        if (value := values.get("public_dir")) is not None:
            self.public_dir = truncate(_as_str(value), MAX_FILE_LEN)
        if (value := values.get("threads")) is not None:
            self.threads = _as_int(value)
        if (value := values.get("thread_type")) is not None:
            self.thread_type = _as_int(value)

        self.allowed_hosts = []
        if (value := values.get("allowed_hosts")) is not None:
            self.allowed_hosts = _as_str_list(value, MAX_ALLOWED_HOSTS, MAX_IP_LEN)

        self.allowed_user_agents = []
        if (value := values.get("allowed_user_agents")) is not None:
            self.allowed_user_agents = _as_str_list(
                value, MAX_ALLOWED_USER_AGENTS, _USER_AGENT_LEN
            )

    def describe(self):
        """Return a human readable listing of the settings."""
        thread_type = "Per Socket" if self.thread_type == ThreadType.PER_SOCK else "Global Socket"
        lines = [
            "Config settings:",
            f"Log Level: {level_name(self.log_lvl)} ({int(self.log_lvl)})",
            f"Log File: {self.log_file or 'N/A'}",
            f"Bind Address: {self.bind_addr}",
            f"Bind Port: {int(self.bind_port)}",
            f"Server Name: {self.server_name}",
            f"Public Directory: {self.public_dir}",
            f"Threads: {int(self.threads)} (0 = auto)",
            f"Thread Type: {thread_type}",
        ]
        if self.allowed_hosts:
            lines.append("Allowed Hosts:")
            lines.extend(f"\t- {host}" for host in self.allowed_hosts)
        if self.allowed_user_agents:
            lines.append("Allowed User Agents:")
            lines.extend(f"\t- {agent}" for agent in self.allowed_user_agents)
        return "\n".join(lines) + "\n"


def _blank_config():
    return Config(
        log_lvl=0,
        log_file="",
        bind_addr="",
        bind_port=0,
        server_name="",
        public_dir="",
        threads=0,
        thread_type=ThreadType.GLOBAL_SOCK,
    )


def load_config(path, load_defaults=True):
    """Load the JSON config file at ``path``.

    Settings missing from the file keep the built-in defaults, or are
    empty when ``load_defaults`` is false. Raises CWebError on failure.
    """
    config = Config() if load_defaults else _blank_config()
    config.apply_json(read_file(path))
    return config
"""Command-line options of the HTTP stress client."""

import re
import sys
from dataclasses import dataclass

from .cli import _atoi, _iter_options
from .headers import (
    HTTP_DOMAIN_MAX_LEN,
    HTTP_METHOD_MAX_LEN,
    HTTP_PATH_MAX_LEN,
    HTTP_UA_MAX_LEN,
    HTTP_VERSION_MAX_LEN,
    MAX_IP_LEN,
)
from .strings import truncate

BODY_MAX_LEN = 4096

_ULLONG_MAX = 2**64 - 1
_UNSIGNED_PREFIX = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")

_SHORT_OPTIONS = "zi:p:d:m:r:v:u:b:t:s:lh"
_LONG_OPTIONS = {
    "details": ("z", False),
    "host": ("i", True),
    "port": ("p", True),
    "domain": ("d", True),
    "method": ("m", True),
    "path": ("r", True),
    "http-version": ("v", True),
    "ua": ("u", True),
    "body": ("b", True),
    "threads": ("t", True),
    "send-delay": ("s", True),
    "list": ("l", False),
    "help": ("h", False),
}


@dataclass
class StressOptions:
    """Options given to the stress client on the command line."""

    details: bool = False
    host: str = ""
    port: int = 0
    domain: str = ""
    method: str = ""
    path: str = ""
    http_version: str = ""
    ua: str = ""
    body: str = ""
    threads: int = 0
    send_delay: int = 0
    list: bool = False
    help: bool = False


def _parse_unsigned(text):
    """Parse an unsigned 64-bit integer with automatic base detection.

    ``0x`` selects hexadecimal and a leading ``0`` octal; negative values
    wrap around and values that do not fit saturate at the maximum.
    """
    match = _UNSIGNED_PREFIX.match(text)
    if not match:
        return 0
    sign, digits = match.groups()
    if digits[:2].lower() == "0x":
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    if value > _ULLONG_MAX:
        return _ULLONG_MAX
    if sign == "-":
        return (-value) % (_ULLONG_MAX + 1)
    return value


def parse_stress_args(argv=None):
    """Parse the stress client's command-line arguments (without the program name)."""
    if argv is None:
        argv = sys.argv[1:]
    options = StressOptions()
    for char, value in _iter_options(argv, _SHORT_OPTIONS, _LONG_OPTIONS, "cweb-stress"):
        match char:
            case "z":
                options.details = True
            case "i":
                options.host = truncate(value, MAX_IP_LEN)
            case "p":
                options.port = _atoi(value) & 0xFFFF
            case "d":
                options.domain = truncate(value, HTTP_DOMAIN_MAX_LEN)
            case "m":
                options.method = truncate(value, HTTP_METHOD_MAX_LEN)
            case "r":
                options.path = truncate(value, HTTP_PATH_MAX_LEN)
            case "v":
                options.http_version = truncate(value, HTTP_VERSION_MAX_LEN)
            case "u":
                options.ua = truncate(value, HTTP_UA_MAX_LEN)
            case "b":
                options.body = truncate(value, BODY_MAX_LEN)
            case "t":
                options.threads = _atoi(value)
            case "s":
                options.send_delay = _parse_unsigned(value)
            case "l":
                options.list = True
            case "h":
                options.help = True
            case "?":
                print("Missing argument option...", file=sys.stderr)
    return options
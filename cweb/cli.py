"""Command-line options of the web server."""

import re
import sys
from dataclasses import dataclass

from .headers import MAX_FILE_LEN, MAX_IP_LEN
from .strings import truncate

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_SHORT_OPTIONS = "c:t:lhr:f:b:p:"
_LONG_OPTIONS = {
    "cfg": ("c", True),
    "time": ("t", True),
    "list": ("l", False),
    "help": ("h", False),
    "log-lvl": ("r", True),
    "log-file": ("f", True),
    "bind-addr": ("b", True),
    "bind-port": ("p", True),
}


@dataclass
class CliOptions:
    """Options given to the web server on the command line."""

    cfg_path: str = "./conf.json"
    time: int = 0
    list: bool = False
    help: bool = False
    log_lvl: int = 0
    log_file: str = ""
    bind_addr: str = ""
    bind_port: int = 0


def _atoi(text):
    """Parse a leading decimal integer; 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _iter_options(argv, short_spec, long_options, prog):
    """Yield ``(option, argument)`` pairs in the manner of GNU getopt_long.

    Non-option arguments are skipped, ``--`` ends option processing and
    errors are reported on stderr and yielded as ``("?", None)``.
    """
    short = {char: bool(colon) for char, colon in re.findall(r"([^:])(:?)", short_spec)}
    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            return
        if token.startswith("--"):
            name, has_value, value = token[2:].partition("=")
            if name in long_options:
                matches = [name]
            else:
                matches = [option for option in long_options if option.startswith(name)]
            if not matches:
                print(f"{prog}: unrecognized option '--{name}'", file=sys.stderr)
                yield "?", None
                continue
            if len(matches) > 1:
                print(f"{prog}: option '--{name}' is ambiguous", file=sys.stderr)
                yield "?", None
                continue
            full = matches[0]
            char, takes_argument = long_options[full]
            if takes_argument:
                if not has_value:
                    value = next(tokens, None)
                    if value is None:
                        print(f"{prog}: option '--{full}' requires an argument", file=sys.stderr)
                        yield "?", None
                        continue
                yield char, value
            elif has_value:
                print(f"{prog}: option '--{full}' doesn't allow an argument", file=sys.stderr)
                yield "?", None
            else:
                yield char, None
        elif token.startswith("-") and token != "-":
            rest = token[1:]
            while rest:
                char, rest = rest[0], rest[1:]
                if char not in short:
                    print(f"{prog}: invalid option -- '{char}'", file=sys.stderr)
                    yield "?", None
                    continue
                if not short[char]:
                    yield char, None
                    continue
                value = rest or next(tokens, None)
                rest = ""
                if value is None:
                    print(f"{prog}: option requires an argument -- '{char}'", file=sys.stderr)
                    yield "?", None
                else:
                    yield char, value


def parse_args(argv=None):
    """Parse the server's command-line arguments (without the program name)."""
    if argv is None:
        argv = sys.argv[1:]
    options = CliOptions()
    for char, value in _iter_options(argv, _SHORT_OPTIONS, _LONG_OPTIONS, "cweb"):
        match char:
            case "c":
                options.cfg_path = truncate(value, MAX_FILE_LEN)
            case "t":
                options.time = _atoi(value)
            case "l":
                options.list = True
            case "h":
                options.help = True
            case "r":
                options.log_lvl = _atoi(value)
            case "f":
                options.log_file = truncate(value, MAX_FILE_LEN)
            case "b":
                options.bind_addr = truncate(value, MAX_IP_LEN)
            case "p":
                options.bind_port = _atoi(value)
    return options
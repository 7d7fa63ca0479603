# cweb

`cweb` is a small multi-threaded web server that serves HTML pages from a
directory. It comes with `cweb-stress`, a client that sends a steady stream
of HTTP requests to a server.

## Installation

```
pip install .
```

This installs two commands, `cweb` and `cweb-stress`.

## The web server

```
cweb [OPTIONS]
```

| Option | Meaning |
| --- | --- |
| `-c, --cfg <val>` | Path to the JSON config file (default: `./conf.json`). |
| `-t, --time <val>` | Run for this many seconds, then exit. |
| `-l, --list` | Print the loaded config and exit. |
| `-h, --help` | Show help and exit. |
| `-r, --log-lvl <val>` | Accepted and parsed, but not applied to the loaded config. |
| `-f, --log-file <val>` | Accepted and parsed, but not applied to the loaded config. |
| `-b, --bind-addr <val>` | Accepted and parsed, but not applied to the loaded config. |
| `-p, --bind-port <val>` | Accepted and parsed, but not applied to the loaded config. |

Options follow GNU conventions. Long options may be abbreviated when the
abbreviation is unambiguous, they may be written as `--name=value`, and `--`
ends option processing.

The server runs until it receives SIGINT or SIGTERM, or until the `--time`
limit has passed. It exits with status 1 in three cases: the config file
cannot be read or parsed, the listening socket cannot be set up, or a worker
thread fails to stop.

### Configuration

The config file is JSON and must exist. Every key in it is optional. A key
that is left out keeps its default value.

```json
{
    "log_lvl": 4,
    "log_file": "/var/log/cweb.log",
    "bind_addr": "127.0.0.1",
    "bind_port": 80,
    "server_name": "CWeb",
    "public_dir": "./public",
    "threads": 0,
    "thread_type": 0,
    "allowed_hosts": ["localhost"],
    "allowed_user_agents": []
}
```

- `log_lvl` sets which messages are logged: 1 fatal, 2 error, 3 warn,
  4 notice, 5 info, 6 debug, 7 trace. A message is logged when its level is
  at or below this value. Each message goes to the console. It is also
  appended, with a timestamp, to `log_file`. If the log file cannot be
  written, that failure is ignored.
- `bind_addr` must be an IPv4 address.
- `threads` sets the number of workers. `0` means one worker per CPU. The
  count is capped at 256.
- `thread_type` sets how workers listen. With `0`, all workers share one
  listening socket. With `1`, each worker opens its own socket, bound with
  `SO_REUSEPORT` where the platform has it.
- `server_name` is sent in the `Server` response header.
- `allowed_hosts` (at most 30 entries) and `allowed_user_agents` (at most 30
  entries) may each be a list or a single string. When one of them is set,
  a request gets `403 Forbidden` if its header does not match an entry. The
  header checked is `Host`, with any `:port` part ignored, or `User-Agent`.

Run `cweb --list` to see the settings the server would use.

### Serving pages

The server maps each request path to a file under `public_dir`:

- `/` is served from `<public_dir>/index.html`. If that file is missing or
  empty, the answer is `500 Internal Server Error`.
- Any other path `/name` is served from `<public_dir>/name.html` if that file
  exists, and otherwise from `<public_dir>/name/index.html`.
- If neither file exists, the answer is `404 Not Found`. The body is
  `<public_dir>/404.html` when that file exists.
- A path that contains `..` gets `500 Internal Server Error`.

Every response uses `HTTP/1.1`. Every response carries `Content-Type:
text/html` and `Cache-Control: no-store`. The server reads a single chunk of
at most 4095 bytes from each connection. It answers once and then closes the
connection. A request that cannot be parsed gets no answer, and its
connection is closed.

## The stress client

```
cweb-stress -i 127.0.0.1 -p 8080 -t 4
```

| Option | Meaning |
| --- | --- |
| `-z, --details` | Print a line for each request sent. |
| `-i, --host <val>` | Host to send requests to (name or IPv4 address). Required. |
| `-p, --port <val>` | Port to send requests to. Required. |
| `-d, --domain <val>` | Value of the `Host` header (default: `localhost`). |
| `-m, --method <val>` | HTTP method (default: `GET`; cut to 5 characters). |
| `-r, --path <val>` | Request path (default: `/`). |
| `-v, --http-version <val>` | HTTP version (default: `HTTP/1.1`). |
| `-u, --ua <val>` | `User-Agent` header. The header is left out when this is unset. |
| `-b, --body <val>` | Request body. |
| `-t, --threads <val>` | Number of workers (default: number of CPUs, at most 256). |
| `-s, --send-delay <val>` | Delay per worker between requests, in microseconds. Accepts decimal, `0x` hex and leading-`0` octal. |
| `-l, --list` | Print the settings and exit. |
| `-h, --help` | Show help and exit. |

Each worker resolves the host once. For every request it then opens a new
connection, sends the request, and closes the connection. If a connection
fails, the worker waits one second and tries again. Workers keep running
until the process receives SIGINT or SIGTERM.

## Using the package from Python

The building blocks can be imported directly:

- `cweb.request.HttpRequest`: `HttpRequest.parse(text)` parses a raw request,
  and `render()` writes one.
- `cweb.response.HttpResponse`: `render()` produces the raw response text.
- `cweb.headers.Headers`: an ordered header list with `add`, `get` and
  `parse_raw`.
- `cweb.config.load_config(path)` loads a config file.
  `Config.apply_json(text)` and `Config.describe()` act on a config.
- `cweb.server.build_response(config, raw)` returns the response text the
  server would send for a raw request.
- `cweb.server.Server(config, threads)` is the server itself, with `start()`
  and `shutdown()`.
- `cweb.stress_client.build_request(options)` returns the request text that
  the stress workers send.

Errors are raised as `cweb.errors.CWebError`. Each error has a numeric
`code` and a `message`.

## What it does not do

- It serves only HTML files, and it always sends `Content-Type: text/html`.
  It does not serve images, stylesheets or other static assets with their
  own types.
- It has no TLS, no keep-alive and no IPv6.
- It does not support request bodies larger than a single 4095-byte read.
- The stress client does not read or check the server's responses. It does
  not report request counts or timings.

## Running the tests

```
pip install .[test]
pytest
```
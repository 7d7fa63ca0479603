"""A small threaded static HTML web server and an HTTP stress client."""

__version__ = "0.1.0"
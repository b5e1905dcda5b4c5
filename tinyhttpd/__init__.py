"""A small HTTP/1.0 server with static files, CGI programs and a request log, plus a client."""

__version__ = "0.1.0"
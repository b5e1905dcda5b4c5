"""A minimal HTTP client that sends one request and prints the reply."""

from __future__ import annotations

import re
import socket
import sys

from tinyhttpd.rio import MAXBUF, RioReader, open_clientfd, write_all

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_CONTENT_LENGTH = re.compile(r"Content-Length:\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def build_request(filename, method, hostname) -> str:
    """Return the request line and host header."""
    return f"{method} {filename} HTTP/1.1\nhost: {hostname}\n\r\n"


def send_request(sock, filename, method) -> None:
    """Send a request for ``filename`` using ``method`` and echo it."""
    request = build_request(filename, method, socket.gethostname())
    print(f"Request:\n{request}")
    write_all(sock, request)


def print_response(sock) -> None:
    """Print the response headers, the content length and the body."""
    reader = RioReader(sock)
    out = sys.stdout
    line = reader.readline(MAXBUF)
    while line and line != b"\r\n":
        text = line.decode("latin-1")
        out.write(f"Header: {text}")
        match = _CONTENT_LENGTH.match(text)
        if match:
            out.write(f"Length = {int(match.group(1))}\n")
        line = reader.readline(MAXBUF)
    line = reader.readline(MAXBUF)
    while line:
        out.write(line.decode("latin-1"))
        line = reader.readline(MAXBUF)
    out.flush()


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 4:
        print("Usage: client <host> <port> <filename> <method>", file=sys.stderr)
        return 1
    host, port_text, filename, method = argv
    port = _atoi(port_text)
    try:
        sock = open_clientfd(host, port)
    except OSError:
        print(f"Error connecting to {host}:{port}", file=sys.stderr)
        return 1
    with sock:
        print(f"Connected to server. clientfd = {sock.fileno()}")
        send_request(sock, filename, method)
        print_response(sock)
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Buffered socket reading, reliable writes and connection helpers."""

from __future__ import annotations

import socket

MAXLINE = 8192
MAXBUF = 8192
LISTENQ = 1024
RIO_BUFSIZE = 8192


class RioReader:
    """Buffered reader over a connected socket."""

    def __init__(self, sock):
        self._sock = sock
        self._buf = bytearray()
        self._eof = False

    def _fill(self) -> bool:
        """Ensure the internal buffer holds data; return False at end of stream."""
        if self._buf:
            return True
        if self._eof:
            return False
        chunk = self._sock.recv(RIO_BUFSIZE)
        if not chunk:
            self._eof = True
            return False
        self._buf += chunk
        return True

    def readline(self, maxlen=MAXLINE) -> bytes:
        """Read one line, newline included, of at most ``maxlen - 1`` bytes.

        Returns ``b""`` when the stream ended before any byte was read.
        """
        limit = max(maxlen - 1, 0)
        line = bytearray()
        while len(line) < limit and self._fill():
            take = min(limit - len(line), len(self._buf))
            newline = self._buf.find(b"\n", 0, take)
            if newline >= 0:
                take = newline + 1
            line += self._buf[:take]
            del self._buf[:take]
            if newline >= 0:
                break
        return bytes(line)

    def readn(self, n) -> bytes:
        """Read up to ``n`` bytes; fewer only if the stream ends first."""
        data = bytearray()
        while len(data) < n and self._fill():
            take = min(n - len(data), len(self._buf))
            data += self._buf[:take]
            del self._buf[:take]
        return bytes(data)


def write_all(sock, data) -> None:
    """Write every byte of ``data`` to ``sock``."""
    if isinstance(data, str):
        data = data.encode()
    sock.sendall(data)


def open_clientfd(hostname, port) -> socket.socket:
    """Open a TCP connection to ``hostname:port``.

    Raises ``socket.gaierror`` when the name cannot be resolved and
    ``OSError`` when the connection fails.
    """
    address = socket.gethostbyname(hostname)
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.connect((address, int(port)))
    except OSError:
        sock.close()
        raise
    return sock


def open_listenfd(port) -> socket.socket:
    """Return a socket listening on ``port`` on every local address."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(("", int(port)))
        sock.listen(LISTENQ)
    except OSError:
        sock.close()
        raise
    return sock
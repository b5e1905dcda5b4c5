"""A small iterative web server that handles one connection at a time."""

from __future__ import annotations

import re
import sys

from tinyhttpd.log import ServerLog
from tinyhttpd.request import ThreadStats, handle_request
from tinyhttpd.rio import open_listenfd

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_args(argv) -> int:
    """Return the port given as the first argument.

    Prints a usage message and exits with status 1 when no port is given.
    """
    if not argv:
        print("Usage: server <port>", file=sys.stderr)
        raise SystemExit(1)
    return _atoi(argv[0])


def serve(port, max_requests=None) -> ServerLog:
    """Accept and handle connections on ``port``.

    Runs forever unless ``max_requests`` is given, in which case it stops
    after that many connections and returns the server log.
    """
    log = ServerLog()
    handled = 0
    with open_listenfd(port) as listener:
        while max_requests is None or handled < max_requests:
            conn, _ = listener.accept()
            with conn:
                stats = ThreadStats(id=0)
                arrival = dispatch = 0.0
                handle_request(conn, arrival, dispatch, stats, log)
            handled += 1
    return log


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    port = parse_args(argv)
    try:
        serve(port)
    except OSError as exc:
        print(f"Open_listenfd error: {exc.strerror or exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
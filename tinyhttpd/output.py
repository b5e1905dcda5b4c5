"""CGI program that sleeps for a while and reports how long it spun."""

from __future__ import annotations

import os
import re
import sys
import time

DEFAULT_SPIN = 5.0

_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _atof(text: str) -> float:
    match = _FLOAT.match(text)
    return float(match.group(1)) if match else 0.0


def parse_spin(query) -> float:
    """Return the number of seconds to spin for, taken from the query string."""
    if query is None:
        return DEFAULT_SPIN
    first = next((token for token in query.split("&") if token), None)
    if first is None:
        return DEFAULT_SPIN
    return _atof(first)


def render_body(elapsed) -> str:
    """Return the HTML body reporting the time spent."""
    return (
        "<p>Welcome to the CGI program</p>\r\n"
        "<p>My only purpose is to waste time on the server!</p>\r\n"
        f"<p>I spun for {elapsed:.2f} seconds</p>\r\n"
    )


def render_response(elapsed) -> str:
    """Return the CGI headers followed by the body."""
    body = render_body(elapsed)
    return (
        f"Content-length: {len(body.encode())}\r\n"
        "Content-type: text/html\r\n\r\n"
        f"{body}"
    )


def main(argv=None) -> int:
    spin = parse_spin(os.environ.get("QUERY_STRING"))
    start = time.time()
    time.sleep(max(spin, 0.0))
    elapsed = time.time() - start
    sys.stdout.write(render_response(elapsed))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Request handling for the web server: static files, CGI programs and the log."""

from __future__ import annotations

import os
import stat
import subprocess
import sys
from dataclasses import dataclass

from tinyhttpd.log import ServerLog
from tinyhttpd.rio import MAXLINE, RioReader, write_all

SERVER_NAME = "OS-HW3 Web Server"
PUBLIC_DIR = "./public/"


@dataclass
class ThreadStats:
    """Per-worker request counters."""

    id: int = 0
    stat_req: int = 0
    dynm_req: int = 0
    post_req: int = 0
    total_req: int = 0


def _format_time(seconds) -> str:
    total_us = round(float(seconds) * 1_000_000)
    sec, usec = divmod(total_us, 1_000_000)
    return f"{sec}.{usec:06d}"


def format_stats(stats, arrival, dispatch) -> str:
    """Render the statistics headers, ending with the blank line."""
    return (
        f"Stat-Req-Arrival:: {_format_time(arrival)}\r\n"
        f"Stat-Req-Dispatch:: {_format_time(dispatch)}\r\n"
        f"Stat-Thread-Id:: {stats.id}\r\n"
        f"Stat-Thread-Count:: {stats.total_req}\r\n"
        f"Stat-Thread-Static:: {stats.stat_req}\r\n"
        f"Stat-Thread-Dynamic:: {stats.dynm_req}\r\n"
        f"Stat-Thread-Post:: {stats.post_req}\r\n\r\n"
    )


def parse_uri(uri) -> tuple[bool, str, str]:
    """Map a URI to ``(is_static, filename, cgiargs)``."""
    if ".." in uri:
        return True, PUBLIC_DIR + "home.html", ""
    if "cgi" not in uri:
        filename = PUBLIC_DIR + uri
        if uri.endswith("/"):
            filename += "home.html"
        return True, filename, ""
    path, _, cgiargs = uri.partition("?")
    return False, PUBLIC_DIR + path, cgiargs


def get_filetype(filename) -> str:
    """Guess the content type from the file name."""
    if ".html" in filename:
        return "text/html"
    if ".gif" in filename:
        return "image/gif"
    if ".jpg" in filename:
        return "image/jpeg"
    return "text/plain"


def serve_error(sock, cause, errnum, shortmsg, longmsg, arrival, dispatch, stats) -> None:
    """Send an HTML error response."""
    body = (
        "<html><title>OS-HW3 Error</title>"
        "<body bgcolor=fffff>\r\n"
        f"{errnum}: {shortmsg}\r\n"
        f"<p>{longmsg}: {cause}\r\n"
        f"<hr>{SERVER_NAME}\r\n"
    )
    body_bytes = body.encode()
    status = f"HTTP/1.0 {errnum} {shortmsg}\r\n"
    content_type = "Content-Type: text/html\r\n"
    length = f"Content-Length: {len(body_bytes)}\r\n" + format_stats(stats, arrival, dispatch)
    for part in (status, content_type, length):
        write_all(sock, part)
        print(part, end="")
    write_all(sock, body_bytes)
    print(body, end="", flush=True)


def _ok_header(*lines) -> str:
    return "HTTP/1.0 200 OK\r\n" + f"Server: {SERVER_NAME}\r\n" + "".join(lines)


def serve_static(sock, filename, filesize, arrival, dispatch, stats) -> None:
    """Send the first ``filesize`` bytes of ``filename`` as the response body."""
    filetype = get_filetype(filename)
    with open(filename, "rb") as source:
        content = source.read(filesize)
    header = _ok_header(
        f"Content-Length: {filesize}\r\n",
        f"Content-Type: {filetype}\r\n",
    ) + format_stats(stats, arrival, dispatch)
    write_all(sock, header)
    write_all(sock, content)


def serve_dynamic(sock, filename, cgiargs, arrival, dispatch, stats) -> None:
    """Send a partial header and run the CGI program with its output on the socket."""
    write_all(sock, _ok_header() + format_stats(stats, arrival, dispatch))
    env = dict(os.environ, QUERY_STRING=cgiargs)
    try:
        subprocess.run([filename], env=env, stdout=sock.fileno(), check=False)
    except OSError as exc:
        print(f"Execve error: {exc.strerror}", file=sys.stderr)


def serve_post(sock, arrival, dispatch, stats, log) -> None:
    """Send the contents of the server log as plain text."""
    body = log.get().encode()
    header = _ok_header(
        f"Content-Length: {len(body)}\r\n",
        "Content-Type: text/plain\r\n",
    ) + format_stats(stats, arrival, dispatch)
    write_all(sock, header)
    write_all(sock, body)


def _skip_headers(reader: RioReader) -> None:
    while True:
        line = reader.readline(MAXLINE)
        if not line or line == b"\r\n":
            return


def handle_request(sock, arrival, dispatch, stats, log: ServerLog) -> None:
    """Read one request from ``sock`` and send the response."""
    reader = RioReader(sock)
    parts = reader.readline(MAXLINE).decode("latin-1").split()
    method = parts[0] if parts else ""
    uri = parts[1] if len(parts) > 1 else ""
    stats.total_req += 1

    if method.upper() == "GET":
        _skip_headers(reader)
        is_static, filename, cgiargs = parse_uri(uri)
        try:
            info = os.stat(filename)
        except OSError:
            serve_error(sock, filename, "404", "Not found",
                        "OS-HW3 Server could not find this file",
                        arrival, dispatch, stats)
            return
        regular = stat.S_ISREG(info.st_mode)
        if is_static:
            if not regular or not info.st_mode & stat.S_IRUSR:
                serve_error(sock, filename, "403", "Forbidden",
                            "OS-HW3 Server could not read this file",
                            arrival, dispatch, stats)
                return
            stats.stat_req += 1
            serve_static(sock, filename, info.st_size, arrival, dispatch, stats)
        else:
            if not regular or not info.st_mode & stat.S_IXUSR:
                serve_error(sock, filename, "403", "Forbidden",
                            "OS-HW3 Server could not run this CGI program",
                            arrival, dispatch, stats)
                return
            stats.dynm_req += 1
            serve_dynamic(sock, filename, cgiargs, arrival, dispatch, stats)
        log.append(format_stats(stats, arrival, dispatch))
    elif method.upper() == "POST":
        stats.post_req += 1
        serve_post(sock, arrival, dispatch, stats, log)
    else:
        serve_error(sock, method, "501", "Not Implemented",
                    "OS-HW3 Server does not implement this method",
                    arrival, dispatch, stats)
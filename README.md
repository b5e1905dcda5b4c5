# tinyhttpd

tinyhttpd is a small HTTP/1.0 web server. It comes with a minimal command-line
client and a CGI program for demonstrations.

The server does three things:

- **GET** requests for files under `./public/` return the file. The content
  type comes from the file name. Names containing `.html`, `.gif` or `.jpg`
  get the matching type. Anything else is sent as `text/plain`. A URI that
  ends in `/` serves `home.html` in that directory. Any URI that contains
  `..` serves `./public/home.html`.
- **GET** requests whose URI contains `cgi` run that program from
  `./public/`. The part of the URI after `?` is passed to the program in the
  `QUERY_STRING` environment variable. The server sends the status line and
  its own headers, and the program's output becomes the rest of the response.
- **POST** requests return the contents of the server's log as `text/plain`.
  After each successful GET, the server adds that request's statistics block
  to the log.

Every response carries statistics headers: `Stat-Req-Arrival::`,
`Stat-Req-Dispatch::`, `Stat-Thread-Id::`, `Stat-Thread-Count::`,
`Stat-Thread-Static::`, `Stat-Thread-Dynamic::` and `Stat-Thread-Post::`.

A missing file gets a `404`. A file that is not a regular file, or that cannot
be read (or run, for a CGI program), gets a `403`. Any method other than GET
or POST gets a `501`.

## Installation

```
pip install .
```

## Running the server

```
tinyhttpd 8080
```

The server listens on every interface at the given port. The files it serves
must be in `./public/`, relative to the directory you start the server from.
If you give no port, it prints a usage message and exits with status 1.

## Sending a request

```
tinyhttpd-client localhost 8080 /home.html GET
tinyhttpd-client localhost 8080 / POST
```

The four arguments are the host, the port, the file and the method. The client
prints a line confirming the connection and then the request it sent. It then
prints each response header prefixed with `Header:`, plus a `Length = n` line
for `Content-Length`, and finally the body.

## The spin program

`tinyhttpd-spin` is a CGI program that sleeps and then reports how long it
slept. It takes the first `&`-separated field of `QUERY_STRING` as the number
of seconds to sleep. With no query string, it sleeps 5 seconds. It then prints
`Content-length` and `Content-type` headers and a short HTML page with the
time it spent.

To serve it, place an executable in `./public/` whose name contains `cgi`, for
example `output.cgi`, and have it run `tinyhttpd-spin`. Then request it:

```
tinyhttpd-client localhost 8080 "/output.cgi?2" GET
```

## Library use

You can import the building blocks:

- `tinyhttpd.rio`: `RioReader` (buffered `readline` and `readn` over a
  socket), `write_all`, `open_clientfd` and `open_listenfd`.
- `tinyhttpd.log`: `ServerLog`, an append-only log with `append` and `get`.
  Many readers can read at once, but only one writer can write at a time. A
  waiting writer goes ahead of new readers.
- `tinyhttpd.request`: `handle_request`, `serve_static`, `serve_dynamic`,
  `serve_post`, `serve_error`, `parse_uri`, `get_filetype`, `format_stats` and
  the `ThreadStats` counters.
- `tinyhttpd.server`: `parse_args(argv)` and `serve(port, max_requests)`.
  `serve` runs forever, unless you give `max_requests`. In that case it stops
  after that many connections and returns the `ServerLog`.
- `tinyhttpd.client`: `build_request`, `send_request` and `print_response`.
- `tinyhttpd.output`: `parse_spin`, `render_body` and `render_response`.

## Limitations

- The server handles connections one at a time in a single thread. It has no
  pool of worker threads and no request queue.
- Each connection gets fresh counters with thread id 0, so the statistics
  headers do not add up across requests.
- The arrival and dispatch times are always reported as `0.000000`.
- Request bodies are not read. A POST only returns the log.

## Tests

```
pip install ".[test]"
pytest
```
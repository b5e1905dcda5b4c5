import socket
import threading

from tinyhttpd.client import build_request, main, print_response, send_request

RESPONSE = b"HTTP/1.0 200 OK\r\nContent-Length: 5\r\n\r\nhello"


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def test_build_request_format():
    assert build_request("/", "GET", "myhost") == "GET / HTTP/1.1\nhost: myhost\n\r\n"


def test_send_request_writes_request():
    left, right = socket.socketpair()
    with left, right:
        send_request(left, "/x", "POST")
        left.shutdown(socket.SHUT_WR)
        data = right.recv(4096)
    assert data.startswith(b"POST /x HTTP/1.1\nhost: ")
    assert data.endswith(b"\n\r\n")


def test_send_request_echoes(capsys):
    left, right = socket.socketpair()
    with left, right:
        send_request(left, "/page", "GET")
    out = capsys.readouterr().out
    assert out.startswith("Request:\nGET /page HTTP/1.1\n")


def test_print_response(capsys):
    left, right = socket.socketpair()
    with left, right:
        left.sendall(RESPONSE)
        left.shutdown(socket.SHUT_WR)
        print_response(right)
    out = capsys.readouterr().out
    assert "Header: HTTP/1.0 200 OK\r\n" in out
    assert "Length = 5\n" in out
    assert out.endswith("hello")
    assert "Header: \r\n" not in out


def test_print_response_empty_stream(capsys):
    left, right = socket.socketpair()
    with left, right:
        left.shutdown(socket.SHUT_WR)
        print_response(right)
    assert capsys.readouterr().out == ""


def test_main_wrong_arguments(capsys):
    assert main(["localhost", "80"]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_connection_refused(capsys):
    port = _free_port()
    assert main(["127.0.0.1", str(port), "/", "GET"]) == 1
    assert f"Error connecting to 127.0.0.1:{port}" in capsys.readouterr().err


def test_main_round_trip(capsys):
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]
    received = {}

    def respond():
        conn, _ = listener.accept()
        with conn:
            data = b""
            while not data.endswith(b"\n\r\n"):
                chunk = conn.recv(4096)
                if not chunk:
                    break
                data += chunk
            received["request"] = data
            conn.sendall(RESPONSE)

    thread = threading.Thread(target=respond, daemon=True)
    thread.start()
    try:
        status = main(["127.0.0.1", str(port), "/home.html", "GET"])
    finally:
        thread.join(timeout=5)
        listener.close()
    out = capsys.readouterr().out
    assert status == 0
    assert received["request"].startswith(b"GET /home.html HTTP/1.1\n")
    assert "Connected to server." in out
    assert "Length = 5" in out
    assert out.endswith("hello")
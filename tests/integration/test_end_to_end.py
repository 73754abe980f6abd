"""
End-to-end tests against a running server over real TCP sockets.
"""

import socket
import threading
import time
from datetime import date

from simplewebserver.handlers.static import HOME_PAGE


def today() -> str:
    return date.today().strftime("%m/%d/%Y")


class TestResponses:

    def test_serves_file_with_tags(self, test_server, site_dir):
        (site_dir / "index.html").write_text("Built on <cs371date> by <cs371server>\n")

        status, headers, body = test_server.get("/index.html")

        assert status == "HTTP/1.1 200 OK"
        assert body == f"Built on {today()} by Test Server\n".encode()

    def test_headers(self, test_server, site_dir):
        status, headers, _ = test_server.get("/")

        assert list(headers) == ["Date", "Server", "Connection", "Content-Type"]
        assert headers["Date"].endswith(" GMT")
        assert headers["Server"] == "Test Server"
        assert headers["Connection"] == "close"
        assert headers["Content-Type"] == "text/html"

    def test_missing_file_is_404(self, test_server, site_dir):
        status, _, body = test_server.get("/nope.html")

        assert status == "HTTP/1.1 404 NOT FOUND"
        assert b"ERROR 404" in body

    def test_missing_favicon_is_home(self, test_server, site_dir):
        status, _, body = test_server.get("/favicon.ico")

        assert status == "HTTP/1.1 200 OK"
        assert body == HOME_PAGE.encode()

    def test_root_is_home(self, test_server, site_dir):
        status, _, body = test_server.get("/")

        assert status == "HTTP/1.1 200 OK"
        assert body == HOME_PAGE.encode()

    def test_nested_file(self, test_server, site_dir):
        (site_dir / "docs").mkdir()
        (site_dir / "docs" / "page.html").write_text("<p><cs371server></p>\n")

        status, _, body = test_server.get("/docs/page.html")

        assert status == "HTTP/1.1 200 OK"
        assert body == b"<p>Test Server</p>\n"

    def test_same_file_twice(self, test_server, site_dir):
        (site_dir / "index.html").write_text("<cs371date>\n<cs371server>\n")

        _, _, first = test_server.get("/index.html")
        _, _, second = test_server.get("/index.html")

        assert first == second == f"{today()}\nTest Server\n".encode()

    def test_larger_file(self, test_server, site_dir):
        lines = [f"line {i} <cs371server>\n" for i in range(5000)]
        (site_dir / "big.html").write_text("".join(lines))

        status, _, body = test_server.get("/big.html")

        assert status == "HTTP/1.1 200 OK"
        assert body.decode().splitlines()[-1] == "line 4999 Test Server"
        assert body.count(b"\n") == 5000


class TestRequestHandling:

    def test_no_request_line_before_close(self, test_server, site_dir, response_parts):
        with socket.create_connection(("127.0.0.1", test_server.port), timeout=5.0) as s:
            s.shutdown(socket.SHUT_WR)
            raw = b""
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    break
                raw += chunk

        status, _, body = response_parts(raw)

        assert status == "HTTP/1.1 200 OK"
        assert body == HOME_PAGE.encode()

    def test_other_method_is_home(self, test_server, site_dir, response_parts):
        raw = test_server.request(b"POST /index.html HTTP/1.1\r\n\r\n")

        status, _, body = response_parts(raw)

        assert status == "HTTP/1.1 200 OK"
        assert body == HOME_PAGE.encode()

    def test_bare_newlines(self, test_server, site_dir, response_parts):
        (site_dir / "a.txt").write_text("a\n")

        raw = test_server.request(b"GET /a.txt HTTP/1.1\nHost: x\n\n")

        assert response_parts(raw)[2] == b"a\n"

    def test_request_arriving_in_pieces(self, test_server, site_dir, response_parts):
        (site_dir / "slow.html").write_text("slow\n")

        with socket.create_connection(("127.0.0.1", test_server.port), timeout=5.0) as s:
            for piece in (b"GET /sl", b"ow.html HTTP", b"/1.1\r\n", b"Host: x\r\n", b"\r\n"):
                s.sendall(piece)
                time.sleep(0.05)
            raw = b""
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    break
                raw += chunk

        status, _, body = response_parts(raw)

        assert status == "HTTP/1.1 200 OK"
        assert body == b"slow\n"


class TestConcurrency:

    def test_stalled_client_does_not_block_others(self, test_server, site_dir):
        (site_dir / "index.html").write_text("ok\n")

        # Opens a connection and never finishes its request
        stalled = socket.create_connection(("127.0.0.1", test_server.port), timeout=5.0)
        stalled.sendall(b"GET /index.html HTTP/1.1\r\n")
        try:
            status, _, body = test_server.get("/index.html")
        finally:
            stalled.close()

        assert status == "HTTP/1.1 200 OK"
        assert body == b"ok\n"

    def test_parallel_clients(self, test_server, site_dir):
        for i in range(10):
            (site_dir / f"page{i}.html").write_text(f"page {i} <cs371server>\n")

        results = {}

        def fetch(i):
            results[i] = test_server.get(f"/page{i}.html")

        threads = [threading.Thread(target=fetch, args=(i,)) for i in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10.0)

        assert len(results) == 10
        for i, (status, _, body) in results.items():
            assert status == "HTTP/1.1 200 OK"
            assert body == f"page {i} Test Server\n".encode()

    def test_server_survives_aborted_connection(self, test_server, site_dir):
        with socket.create_connection(("127.0.0.1", test_server.port), timeout=5.0) as s:
            s.sendall(b"GET /nope")
        # Client vanished mid-request; the next one is still served
        status, _, _ = test_server.get("/")

        assert status == "HTTP/1.1 200 OK"


class TestLifecycle:

    def test_reports_os_assigned_port(self, test_server, config):
        assert config.port == 0
        assert test_server.server.socket_server.bound_address == ("127.0.0.1", test_server.port)
        assert test_server.port != 0

    def test_shutdown_stops_accepting(self, test_server, site_dir):
        test_server.stop()

        assert not test_server.server.is_running
        assert test_server.server.socket_server.wait_for_shutdown(timeout=5.0)

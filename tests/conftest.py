"""
pytest configuration and fixtures.
"""

import socket
import threading
from pathlib import Path
from typing import Generator, Tuple

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from simplewebserver import WebServer, ServerConfig
from simplewebserver.core.connection import Connection


SERVER_NAME = "Test Server"


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample browser-style GET request."""
    return (
        b"GET /index.html HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/html\r\n"
        b"\r\n"
    )


@pytest.fixture
def config() -> ServerConfig:
    """Default test server configuration."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        read_timeout=5.0,
        server_name=SERVER_NAME,
        log_level="DEBUG",
    )


@pytest.fixture
def site_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    A temporary directory that is also the working directory.

    The server resolves paths relative to the working directory, so files
    written here are what the server serves.
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def socket_pair() -> Generator[Tuple[socket.socket, socket.socket], None, None]:
    """A connected (server_side, client_side) socket pair."""
    server_side, client_side = socket.socketpair()
    yield server_side, client_side
    for sock in (server_side, client_side):
        try:
            sock.close()
        except OSError:
            pass


@pytest.fixture
def connection(socket_pair) -> Connection:
    """A Connection wrapping the server side of socket_pair."""
    server_side, _ = socket_pair
    return Connection(socket=server_side, address=("127.0.0.1", 0), read_timeout=5.0)


def send_request(port: int, raw: bytes, timeout: float = 5.0) -> bytes:
    """Send raw request bytes and read the response until the server closes."""
    with socket.create_connection(("127.0.0.1", port), timeout=timeout) as s:
        s.sendall(raw)
        return read_until_closed(s)


def read_until_closed(sock: socket.socket) -> bytes:
    chunks = []
    while True:
        chunk = sock.recv(4096)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def split_response(raw: bytes) -> Tuple[str, dict, bytes]:
    """Split a response into (status line, headers, body)."""
    head, _, body = raw.partition(b"\n\n")
    lines = head.decode("utf-8").split("\n")
    headers = dict(line.split(": ", 1) for line in lines[1:])
    return lines[0], headers, body


@pytest.fixture
def response_parts():
    """The split_response helper, for tests that read raw sockets."""
    return split_response


class ServerThread:
    """Runs a WebServer on a background thread."""

    def __init__(self, server: WebServer):
        self.server = server
        self.port: int = None
        self._thread: threading.Thread = None

    def start(self):
        self._thread = threading.Thread(
            target=self.server.run,
            daemon=True,
        )
        self._thread.start()

        if not self.server.socket_server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

        # config.port may be 0; use the port the OS actually assigned
        self.port = self.server.socket_server.bound_address[1]

    def request(self, raw: bytes) -> bytes:
        return send_request(self.port, raw)

    def get(self, path: str) -> Tuple[str, dict, bytes]:
        """Send a browser-style GET and return the split response."""
        raw = (
            f"GET {path} HTTP/1.1\r\n"
            f"Host: 127.0.0.1:{self.port}\r\n"
            f"\r\n"
        ).encode("utf-8")
        return split_response(self.request(raw))

    def stop(self):
        self.server.shutdown()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)


@pytest.fixture
def test_server(site_dir: Path, config: ServerConfig) -> Generator[ServerThread, None, None]:
    """A running server whose working directory is site_dir."""
    server_thread = ServerThread(WebServer(config))
    server_thread.start()

    yield server_thread

    server_thread.stop()

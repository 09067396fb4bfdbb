"""
pytest configuration and fixtures.
"""

import socket
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Generator, Optional

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minihttpd import HTTPServer, ServerConfig
from minihttpd.core import Connection, ConnectionHandler


NOT_FOUND_PAGE = b"<html><body><h1>404</h1><p>File not found.</p></body></html>\n"
NOT_SUPPORTED_PAGE = b"<html><body><h1>501</h1><p>Method not supported.</p></body></html>\n"
INDEX_PAGE = b"<html><body><h1>Home</h1></body></html>\n"
NOTES = b"plain notes\nsecond line\n"
BINARY = bytes(range(256)) * 4


@dataclass
class RawResponse:
    """A response read off the wire, split into its parts."""

    raw: bytes
    status_line: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    header_names: list = field(default_factory=list)
    body: bytes = b""

    @property
    def status_code(self) -> Optional[int]:
        if not self.status_line:
            return None
        return int(self.status_line.split()[1])

    @classmethod
    def parse(cls, raw: bytes) -> "RawResponse":
        response = cls(raw=raw)
        if not raw:
            return response

        head, _, body = raw.partition(b"\r\n\r\n")
        lines = head.decode("latin-1").split("\r\n")
        response.status_line = lines[0]
        for line in lines[1:]:
            name, _, value = line.partition(": ")
            response.headers[name] = value
            response.header_names.append(name)
        response.body = body
        return response


@pytest.fixture
def document_root(tmp_path: Path) -> Path:
    """A document root with the error pages and a few files to serve."""
    root = tmp_path / "www"
    root.mkdir()

    (root / "index.html").write_bytes(INDEX_PAGE)
    (root / "fileNotFound.html").write_bytes(NOT_FOUND_PAGE)
    (root / "methodNoSupport.html").write_bytes(NOT_SUPPORTED_PAGE)
    (root / "notes.txt").write_bytes(NOTES)
    (root / "data.bin").write_bytes(BINARY)
    (root / "readme").write_bytes(b"no extension\n")

    docs = root / "docs"
    docs.mkdir()
    (docs / "report.html").write_bytes(b"<html><body>report</body></html>")

    # Outside the root, must never be served
    (tmp_path / "secret.txt").write_bytes(b"top secret\n")

    return root


@pytest.fixture
def config(document_root: Path) -> ServerConfig:
    """Test server configuration."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        document_root=str(document_root),
        log_level="WARNING",
    )


@pytest.fixture
def handler(config: ServerConfig) -> ConnectionHandler:
    return ConnectionHandler(config)


@pytest.fixture
def exchange(handler: ConnectionHandler):
    """
    Run one raw request through the connection handler.

    Uses a socketpair, so no port is needed. The handler runs in the
    calling thread; the response stays in the socket buffer until it is
    read back.
    """
    def _exchange(raw: bytes, conn_handler: ConnectionHandler = None) -> RawResponse:
        client, server = socket.socketpair()
        with client:
            client.sendall(raw)
            client.shutdown(socket.SHUT_WR)

            conn = Connection(socket=server, address=("test", 0))
            (conn_handler or handler).handle(conn)

            chunks = []
            while True:
                chunk = client.recv(65536)
                if not chunk:
                    break
                chunks.append(chunk)
        return RawResponse.parse(b"".join(chunks))

    return _exchange


def http_request(address, raw: bytes, timeout: float = 5.0) -> RawResponse:
    """Send raw bytes to a running server and read until it closes."""
    with socket.create_connection(address, timeout=timeout) as sock:
        sock.sendall(raw)
        chunks = []
        while True:
            chunk = sock.recv(65536)
            if not chunk:
                break
            chunks.append(chunk)
    return RawResponse.parse(b"".join(chunks))


class TestServer:
    """Test server helper that runs in a background thread."""

    __test__ = False  # Not a test class, despite the name

    def __init__(self, server: HTTPServer):
        self.server = server
        self._thread: threading.Thread = None

    @property
    def address(self):
        return self.server.address

    def start(self):
        """Start server in background thread."""
        self._thread = threading.Thread(
            target=self.server.run,
            kwargs={"configure_logging": False},
            daemon=True,
        )
        self._thread.start()

        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def request(self, raw: bytes) -> RawResponse:
        return http_request(self.address, raw)

    def stop(self):
        """Stop the server."""
        self.server.shutdown()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)


@pytest.fixture
def test_server(config: ServerConfig) -> Generator[TestServer, None, None]:
    """A server listening on a free port."""
    test_srv = TestServer(HTTPServer(config))
    test_srv.start()

    yield test_srv

    test_srv.stop()

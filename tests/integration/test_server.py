"""
Integration tests against a server listening on a real TCP port.
"""

import os
import socket
from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import INDEX_PAGE, NOT_FOUND_PAGE, NOT_SUPPORTED_PAGE, NOTES, http_request
from minihttpd import HTTPServer, ServerConfig


class TestServing:
    """One request per connection over TCP."""

    def test_get(self, test_server):
        """Test a GET with request headers returns the file."""
        response = test_server.request(
            b"GET /notes.txt HTTP/1.1\r\n"
            b"Host: localhost\r\n"
            b"User-Agent: pytest\r\n"
            b"\r\n"
        )

        assert response.status_line == "HTTP/1.1 200 OK"
        assert response.headers["Content-length"] == str(len(NOTES))
        assert response.body == NOTES

    def test_head(self, test_server):
        """Test HEAD returns headers and no body."""
        response = test_server.request(b"HEAD /index.html HTTP/1.1\r\nHost: localhost\r\n\r\n")

        assert response.status_code == 200
        assert response.headers["Content-length"] == str(len(INDEX_PAGE))
        assert response.body == b""

    def test_home(self, test_server):
        """Test / serves the home file."""
        assert test_server.request(b"GET / HTTP/1.1\r\n\r\n").body == INDEX_PAGE

    def test_not_found(self, test_server):
        """Test a missing file gets the not-found page."""
        response = test_server.request(b"GET /nothing-here HTTP/1.1\r\n\r\n")

        assert response.status_code == 404
        assert response.body == NOT_FOUND_PAGE

    def test_not_implemented(self, test_server):
        """Test POST gets 501 and its request body is ignored."""
        response = test_server.request(
            b"POST /notes.txt HTTP/1.1\r\nContent-Length: 5\r\n\r\nhello"
        )

        assert response.status_code == 501
        assert response.body == NOT_SUPPORTED_PAGE

    def test_connection_closed_after_response(self, test_server):
        """Test the server closes even when asked to keep alive."""
        with socket.create_connection(test_server.address, timeout=5.0) as sock:
            sock.sendall(b"GET /notes.txt HTTP/1.1\r\nConnection: keep-alive\r\n\r\n")
            data = b""
            while True:
                chunk = sock.recv(65536)
                if not chunk:
                    break
                data += chunk

        assert data.endswith(NOTES)


class TestRobustness:
    """Bad clients do not take the server down."""

    def test_malformed_request_then_valid_request(self, test_server):
        """Test a malformed request does not affect the next one."""
        assert test_server.request(b"GARBAGE\r\n").raw == b""

        assert test_server.request(b"GET /notes.txt HTTP/1.1\r\n\r\n").body == NOTES

    def test_client_disconnects_without_sending(self, test_server):
        """Test an empty connection does not affect the next one."""
        with socket.create_connection(test_server.address, timeout=5.0):
            pass

        assert test_server.request(b"GET /notes.txt HTTP/1.1\r\n\r\n").body == NOTES

    def test_silent_client_does_not_block_others(self, test_server):
        """Test a client that never sends does not block others."""
        with socket.create_connection(test_server.address, timeout=5.0):
            # Holds its worker thread; others are still served
            assert test_server.request(b"GET /notes.txt HTTP/1.1\r\n\r\n").body == NOTES


class TestConcurrency:
    """Connections are handled independently."""

    def test_concurrent_requests_get_their_own_file(self, test_server, document_root):
        """Test parallel clients each receive their own file intact."""
        files = {}
        for i in range(20):
            name = f"blob{i}.bin"
            content = os.urandom(64 * 1024 + i)
            (document_root / name).write_bytes(content)
            files[name] = content

        def fetch(name):
            return name, http_request(
                test_server.address, f"GET /{name} HTTP/1.1\r\n\r\n".encode()
            )

        with ThreadPoolExecutor(max_workers=20) as pool:
            results = list(pool.map(fetch, files))

        for name, response in results:
            assert response.status_code == 200
            assert response.headers["Content-length"] == str(len(files[name]))
            assert response.body == files[name]


class TestLifecycle:
    """Starting and stopping the server."""

    def test_invalid_config_fails_fast(self, tmp_path):
        """Test a missing document root is rejected at construction."""
        with pytest.raises(ValueError):
            HTTPServer(ServerConfig(document_root=str(tmp_path / "missing")))

    def test_port_zero_binds_a_free_port(self, test_server):
        """Test port 0 reports the port the OS picked."""
        host, port = test_server.address

        assert host == "127.0.0.1"
        assert port != 0

    def test_shutdown_stops_accepting(self, config):
        """Test shutdown closes the listening socket."""
        from conftest import TestServer

        srv = TestServer(HTTPServer(config))
        srv.start()
        address = srv.address
        srv.stop()

        assert not srv._thread.is_alive()
        with pytest.raises(OSError):
            socket.create_connection(address, timeout=1.0).close()

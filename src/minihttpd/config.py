"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Process-wide configuration for the file server.

=============================================================================
ONE IMMUTABLE VALUE
=============================================================================

Configuration is built once at startup and then only ever read:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   python -m minihttpd --port 3000 --root ./public                   │
    │                │                                                     │
    │                ▼                                                     │
    │   ServerConfig(port=3000, document_root="./public")   frozen=True   │
    │                │                                                     │
    │                ├──► SocketServer        (host, port, backlog)       │
    │                ├──► HTTPServer          (log_level, verbose)        │
    │                └──► ConnectionHandler   (document_root, filenames)  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

It is passed explicitly to every component that needs it. There is no
module-level global, so tests can run several servers with different
roots side by side.

frozen=True means worker threads can share the same instance without
locks: nobody can change it after construction.

=============================================================================
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ServerConfig:
    """
    Configuration for the file server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog

    DOCUMENT ROOT
    - document_root, home_file, not_found_page, not_supported_page

    HTTP SETTINGS
    - max_line_size, server_name

    LOGGING
    - verbose, log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """
    The IP address to bind to.
    - "127.0.0.1" - Localhost only
    - "0.0.0.0" - All network interfaces
    """

    port: int = 8080
    """
    The port number to listen on. 0 lets the OS pick a free port
    (used by the tests).
    """

    backlog: int = 128
    """Maximum number of queued connections waiting for accept()."""

    # ─────────────────────────────────────────────────────────────────────
    # DOCUMENT ROOT
    # ─────────────────────────────────────────────────────────────────────

    document_root: str = "."
    """Directory every request path is resolved under."""

    home_file: str = "index.html"
    """Served for any request path ending in "/"."""

    not_found_page: str = "fileNotFound.html"
    """Body of every 404 response. Resolved under document_root."""

    not_supported_page: str = "methodNoSupport.html"
    """Body of every 501 response. Resolved under document_root."""

    # ─────────────────────────────────────────────────────────────────────
    # HTTP SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    max_line_size: int = 65536
    """
    Longest request line accepted, in bytes. A longer line is treated
    as malformed and the connection is closed without a response.
    """

    server_name: str = "MiniHTTPd/1.0"
    """Value of the Server header."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    verbose: bool = True
    """Log connection opened/closed and per-request notices at INFO."""

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR)."""

    @property
    def root_path(self) -> Path:
        """The document root as an absolute, resolved Path."""
        return Path(self.document_root).resolve()

    def validate(self) -> None:
        """
        Validate configuration values.

        Called by HTTPServer before anything is bound, so a bad value
        stops the process at startup instead of at the first request.

        Raises:
            ValueError: If a value is out of range or the root is missing.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.max_line_size < 16:
            raise ValueError("max_line_size must be >= 16")

        if not self.root_path.is_dir():
            raise ValueError(f"Document root does not exist: {self.document_root}")

        for name in (self.home_file, self.not_found_page, self.not_supported_page):
            if not name or name.endswith("/"):
                raise ValueError(f"Invalid file name in configuration: {name!r}")

"""
=============================================================================
CONNECTION HANDLING
=============================================================================

One accepted socket in, at most one HTTP response out, socket closed.

=============================================================================
LIFE OF A CONNECTION
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    ConnectionHandler.handle()                       │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   NEW ──► READING ──► PROCESSING ──► WRITING ──► CLOSED             │
    │              │            │                        ▲                 │
    │              │            │                        │                 │
    │              ├─ EOF ──────┼────────────────────────┤  no response    │
    │              ├─ 1 token ──┘                        │  no response    │
    │              └─ OSError ───────────────────────────┤  logged         │
    │                                                    │                 │
    │   PROCESSING:                                      │                 │
    │     POST, PUT, ...  ──► 501 + methodNoSupport.html │                 │
    │     GET/HEAD missing ──► 404 + fileNotFound.html   │                 │
    │     GET              ──► 200 + file bytes          │                 │
    │     HEAD             ──► 200 headers only          │                 │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
THREE RESOURCES, THREE CLOSES
=============================================================================

A connection owns three things that must be released:

    reader   socket.makefile("rb")     reads the request line
    writer   socket.makefile("wb")     buffered response output
    socket   the accepted client socket

Each is closed in its own try block. If closing the writer fails (the
final flush hits a reset connection, say), the socket is still closed.
One shared try block would leak the socket in exactly that case:

    try:                              try: reader.close()  except: log
        reader.close()                try: writer.close()  except: log
        writer.close()   ◄── raises   try: socket.close()  except: log
        socket.close()   ◄── skipped!
    except: log

=============================================================================
GRACEFUL TCP CLOSE
=============================================================================

We only read the request line. The client may have sent headers after it
that are still sitting unread in the kernel buffer. Closing a TCP socket
with unread data makes the kernel send RST instead of FIN, and the client
can lose the response it has not read yet. So the socket is closed the
polite way:

    1. shutdown(SHUT_WR)   send FIN, "no more data from us"
    2. drain               read and discard what the client sent
    3. close()             release the file descriptor

=============================================================================
"""

import logging
import socket
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Optional

from ..config import ServerConfig
from ..handlers.errors import ErrorResponder
from ..handlers.static import ResourceResolver, StaticFileHandler
from ..http.request import MalformedRequestError, is_supported_method, parse_request_line
from ..http.response import ResponseWriter
from ..http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Where a connection is in its single request/response cycle."""

    NEW = "new"
    READING = "reading"
    PROCESSING = "processing"
    WRITING = "writing"
    CLOSED = "closed"


@dataclass
class Connection:
    """
    An accepted client socket and the streams layered on top of it.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short identifier used as a log prefix.
        state: Current connection state.
        created_at: Timestamp when the connection was accepted.
    """

    socket: socket.socket
    address: tuple
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    drain_timeout: float = 0.5

    _reader: Optional[BinaryIO] = field(default=None, repr=False)
    _writer: Optional[BinaryIO] = field(default=None, repr=False)

    def __post_init__(self):
        # Blocking I/O, no deadline: a silent client holds its worker
        self.socket.settimeout(None)

    @property
    def reader(self) -> BinaryIO:
        """Line-oriented binary reader over the socket."""
        if self._reader is None:
            self._reader = self.socket.makefile("rb")
        return self._reader

    @property
    def writer(self) -> BinaryIO:
        """Buffered binary writer over the socket."""
        if self._writer is None:
            self._writer = self.socket.makefile("wb")
        return self._writer

    @property
    def age(self) -> float:
        """Get connection age in seconds."""
        return time.time() - self.created_at

    def read_line(self, max_size: int) -> Optional[bytes]:
        """
        Read the request line.

        Returns:
            The line including its terminator, or None if the client
            closed the connection before sending anything.

        Raises:
            MalformedRequestError: If no line ending arrives within
                max_size bytes.
            OSError: If the connection fails.
        """
        self.state = ConnectionState.READING
        line = self.reader.readline(max_size + 1)
        if not line:
            return None

        if len(line) > max_size and not line.endswith(b"\n"):
            raise MalformedRequestError(f"Request line longer than {max_size} bytes")

        return line

    def close(self):
        """
        Release the reader, the writer and the socket.

        Each release is attempted regardless of whether the previous one
        failed. Failures are logged, never raised.
        """
        if self.state == ConnectionState.CLOSED:
            return

        if self._reader is not None:
            self._release("reader", self._reader.close)
        if self._writer is not None:
            self._release("writer", self._writer.close)

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Client already gone

        try:
            self.socket.settimeout(self.drain_timeout)
            while self.socket.recv(1024):
                pass
        except OSError:
            pass  # Includes socket.timeout; we are closing anyway

        self._release("socket", self.socket.close)
        self.state = ConnectionState.CLOSED

    def _release(self, name: str, close) -> None:
        try:
            close()
        except OSError as e:
            logger.warning(f"[{self.id}] Error closing {name}: {e}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class ConnectionHandler:
    """
    Answers one request per connection.

    =========================================================================
    USAGE
    =========================================================================

        handler = ConnectionHandler(ServerConfig(document_root="./public"))

        # In a worker thread, for each accepted socket:
        handler.handle(Connection(socket=client_socket, address=address))

    The handler is stateless between connections, so one instance is
    shared by every worker thread.

    =========================================================================
    """

    def __init__(self, config: ServerConfig):
        self.config = config
        self.resolver = ResourceResolver(config.document_root, config.home_file)
        self.errors = ErrorResponder(
            self.resolver, config.not_found_page, config.not_supported_page
        )
        self.static = StaticFileHandler(self.resolver, self.errors, verbose=config.verbose)

    def handle(self, conn: Connection) -> Optional[HTTPStatus]:
        """
        Handle one connection from first byte to close.

        Never raises for client or I/O problems: everything that goes
        wrong is logged here and the connection is closed.

        Returns:
            The status sent, or None if no response was sent.
        """
        status = None
        try:
            status = self._process(conn)
        except MalformedRequestError as e:
            logger.debug(f"[{conn.id}] Malformed request {e.line!r}: {e}")
        except OSError as e:
            logger.error(f"[{conn.id}] Server error: {e}")
        finally:
            conn.close()
            if self.config.verbose:
                logger.info(f"[{conn.id}] Connection closed after {conn.age:.3f}s")
        return status

    def _process(self, conn: Connection) -> Optional[HTTPStatus]:
        raw = conn.read_line(self.config.max_line_size)
        if raw is None:
            logger.debug(f"[{conn.id}] Client sent nothing")
            return None

        # Invalid UTF-8 bytes become surrogates, which os.fsencode maps
        # back to the same bytes, so decoding cannot fail
        request = parse_request_line(raw.decode("utf-8", "surrogateescape"))

        conn.state = ConnectionState.PROCESSING
        writer = ResponseWriter(conn.writer, server_name=self.config.server_name)

        if not is_supported_method(request.method):
            if self.config.verbose:
                logger.info(f"[{conn.id}] 501 Not Implemented: {request.method} method")
            conn.state = ConnectionState.WRITING
            self.errors.not_implemented(writer)
            return HTTPStatus.NOT_IMPLEMENTED

        conn.state = ConnectionState.WRITING
        return self.static.serve(request, writer, conn_id=conn.id)

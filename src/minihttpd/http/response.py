"""
=============================================================================
HTTP RESPONSE WRITER
=============================================================================

Serializes a status line, a fixed set of headers and an optional body
onto a connection's output stream.

=============================================================================
HTTP RESPONSE ANATOMY
=============================================================================

Every response this server sends has exactly the same shape:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    HTTP/1.1 200 OK\r\n                   ← status line              │
    │    Server: MiniHTTPd/1.0\r\n             ┐                          │
    │    Date: Mon, 19 Oct 2026 12:00:00 GMT\r\n│ headers, ALWAYS these    │
    │    Content-type: text/html\r\n           │ four, ALWAYS this order  │
    │    Content-length: 1234\r\n              ┘                          │
    │    \r\n                                  ← blank line               │
    │    <html>...</html>                      ← body (not for HEAD)      │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The header names are spelled "Content-type" and "Content-length". Header
names are case-insensitive on the wire, and existing clients of this
server match on these exact spellings, so they stay.

=============================================================================
TEXT AND BYTES ON ONE STREAM
=============================================================================

The head of the response is text, the body is raw file bytes. Both go to
the same socket. Writing them through two independent buffers is a classic
ordering bug:

    header buffer:  [HTTP/1.1 200 OK ... \r\n\r\n]   (not flushed yet!)
    body buffer:    [<html>...]                       (flushed first)
                            │
                            ▼
    wire:           <html>...HTTP/1.1 200 OK ...      ← garbage

So there is ONE buffered binary writer. The head is encoded to bytes,
written and FLUSHED, then the body is written and flushed:

    write(head) ─► flush() ─► write(body) ─► flush()

=============================================================================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import BinaryIO, Dict, Optional

from .status_codes import HTTPStatus


DEFAULT_SERVER_NAME = "MiniHTTPd/1.0"


@dataclass
class HTTPResponse:
    """
    One response, ready to be written.

    body is None for HEAD responses. Content-length still describes the
    body a GET would have received.
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """
        Get the HTTP status line.

        Example: "HTTP/1.1 404 File Not Found"
        """
        return f"{self.version} {int(self.status)} {self.status.phrase}"

    def head_bytes(self) -> bytes:
        """Serialize the status line, headers and blank line."""
        lines = [self.status_line]
        for name, value in self.headers.items():
            lines.append(f"{name}: {value}")
        lines.append("")

        # Header values are ASCII: a date, a MIME type, a number and the
        # server name
        return ("\r\n".join(lines) + "\r\n").encode("latin-1")


def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP-date (RFC 7231).

    Format: Day, DD Mon YYYY HH:MM:SS GMT
    Example: Mon, 19 Oct 2026 12:00:00 GMT

    HTTP dates are always in GMT, never local time.
    """
    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    dt = dt.astimezone(timezone.utc)
    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )


def build_response(
    status: HTTPStatus,
    mime_type: str,
    size_bytes: int,
    body: Optional[bytes] = None,
    server_name: str = DEFAULT_SERVER_NAME,
    now: Optional[datetime] = None,
) -> HTTPResponse:
    """
    Build a response with the fixed header set.

    Args:
        status: Status code for the status line.
        mime_type: Value of the Content-type header.
        size_bytes: Value of the Content-length header.
        body: Body bytes, or None to send headers only (HEAD).
        server_name: Value of the Server header.
        now: Timestamp for the Date header. Defaults to the current time.

    Returns:
        HTTPResponse with headers in wire order.
    """
    headers = {
        "Server": server_name,
        "Date": format_http_date(now or datetime.now(timezone.utc)),
        "Content-type": mime_type,
        "Content-length": str(size_bytes),
    }
    return HTTPResponse(status=status, headers=headers, body=body)


class ResponseWriter:
    """
    Writes responses onto one buffered binary stream.

    The stream is normally the connection's socket.makefile("wb"), but
    anything with write() and flush() works, which keeps this class easy
    to test against io.BytesIO.

    Usage:
        writer = ResponseWriter(conn.writer, server_name="MiniHTTPd/1.0")
        writer.write(HTTPStatus.OK, "text/html", len(data), data)
    """

    def __init__(self, stream: BinaryIO, server_name: str = DEFAULT_SERVER_NAME):
        self.stream = stream
        self.server_name = server_name

    def write(
        self,
        status: HTTPStatus,
        mime_type: str,
        size_bytes: int,
        body: Optional[bytes] = None,
    ) -> HTTPResponse:
        """
        Build and send a response.

        Pass body=None for HEAD: the headers (including Content-length)
        are identical to the GET response but no body bytes follow.

        Returns:
            The response that was written, for logging and tests.

        Raises:
            OSError: If the connection fails while writing.
        """
        response = build_response(
            status, mime_type, size_bytes, body, server_name=self.server_name
        )
        self.send(response)
        return response

    def send(self, response: HTTPResponse) -> None:
        """Write the head, flush it, then write and flush the body."""
        self.stream.write(response.head_bytes())
        self.stream.flush()

        if response.body is not None:
            self.stream.write(response.body)
            self.stream.flush()

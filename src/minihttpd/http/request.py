"""
=============================================================================
HTTP REQUEST LINE PARSING
=============================================================================

Turns the first line a client sends into an IncomingRequest.

=============================================================================
ONLY THE FIRST LINE MATTERS
=============================================================================

A full HTTP request looks like this:

    GET /docs/index.html HTTP/1.1\r\n      ← request line (we read this)
    Host: localhost:8080\r\n               ← headers (never read)
    User-Agent: curl/8.0\r\n
    \r\n

This server never looks past the request line. No headers, no query
string handling, no body. The line is split on whitespace and only the
first two tokens are kept:

    "GET /docs/index.html HTTP/1.1"
     ─┬─ ────────┬──────── ───┬────
      │          │            │
    method      path       ignored

    method → upper-cased   ("get"  → "GET")
    path   → lower-cased   ("/A.HTML" → "/a.html")

Anything after the second token, including a missing version, is fine.
Fewer than two tokens is a malformed request.

=============================================================================
"""

from dataclasses import dataclass


class MalformedRequestError(Exception):
    """
    Raised when the request line cannot be turned into a request.

    Malformed requests get no response at all. The connection handler
    catches this, logs it at DEBUG and closes the connection, the same
    way it treats a client that hung up before sending anything.
    """

    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.line = line


@dataclass(frozen=True)
class IncomingRequest:
    """
    The two parts of a request line this server cares about.

    Created fresh for every connection and thrown away once the
    response has been written.
    """

    method: str
    path: str

    @property
    def is_head(self) -> bool:
        """HEAD gets the GET headers but never a body."""
        return self.method == "HEAD"


SUPPORTED_METHODS = frozenset({"GET", "HEAD"})


def parse_request_line(line: str) -> IncomingRequest:
    """
    Parse a request line into an IncomingRequest.

    Args:
        line: The decoded request line, with or without its line ending.

    Returns:
        IncomingRequest with normalized method and path.

    Raises:
        MalformedRequestError: If the line has fewer than two tokens.

    Examples:
        >>> parse_request_line("get /Index.HTML HTTP/1.1")
        IncomingRequest(method='GET', path='/index.html')
    """
    tokens = line.split()
    if len(tokens) < 2:
        raise MalformedRequestError(
            f"Expected '<METHOD> <path>', got {len(tokens)} token(s)",
            line=line.strip(),
        )

    return IncomingRequest(method=tokens[0].upper(), path=tokens[1].lower())


def is_supported_method(method: str) -> bool:
    """Check if the server implements this (already upper-cased) method."""
    return method in SUPPORTED_METHODS

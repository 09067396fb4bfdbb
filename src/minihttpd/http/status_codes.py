"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes this server can answer with, and their reason phrases.

=============================================================================
WHICH CODES AND WHY
=============================================================================

A static file server with canned error pages only ever needs three answers:

    ┌───────────┬──────────────────────────────────────────────────────────┐
    │   Code    │  When                                                    │
    ├───────────┼──────────────────────────────────────────────────────────┤
    │  200      │  The requested file exists (GET or HEAD)                 │
    │  404      │  No regular file at the requested path                   │
    │  501      │  Any method other than GET or HEAD                       │
    └───────────┴──────────────────────────────────────────────────────────┘

Note the reason phrase for 404. RFC 7231 suggests "Not Found", but this
server has always said "File Not Found" and clients only look at the code:

    HTTP/1.1 404 File Not Found
             ─── ──────────────
              │        │
              │        └── Reason phrase (informational only)
              └─────────── Status code (what clients act on)

Why 501 and not 405 for POST/PUT/DELETE?
    405 Method Not Allowed means "this RESOURCE does not accept the method".
    501 Not Implemented means "this SERVER does not implement the method at
    all", which is exactly the case here, whatever path was asked for.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    This enum extends IntEnum, so status codes can be used as integers:

        >>> HTTPStatus.OK == 200
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'File Not Found'
    """

    OK = 200                    # File found and served
    NOT_FOUND = 404             # No regular file at the requested path
    NOT_IMPLEMENTED = 501       # Method other than GET/HEAD

    @property
    def phrase(self) -> str:
        """Get the reason phrase used in the status line."""
        return _STATUS_PHRASES.get(self, "Unknown")


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NOT_FOUND: "File Not Found",
    HTTPStatus.NOT_IMPLEMENTED: "Not Implemented",
}

"""
=============================================================================
HTTP PROTOCOL COMPONENTS
=============================================================================

    request.py        Request line → IncomingRequest
    response.py       Status line + fixed headers + body → bytes on the wire
    status_codes.py   200, 404 and 501 with their reason phrases
    mime_types.py     File extension → Content-type

Nothing in this package touches sockets or the filesystem.

=============================================================================
"""

from .mime_types import content_type
from .request import IncomingRequest, MalformedRequestError, parse_request_line
from .response import HTTPResponse, ResponseWriter, build_response, format_http_date
from .status_codes import HTTPStatus

__all__ = [
    # Request parsing
    "IncomingRequest",
    "MalformedRequestError",
    "parse_request_line",

    # Response writing
    "HTTPResponse",
    "ResponseWriter",
    "build_response",
    "format_http_date",

    # Status codes
    "HTTPStatus",

    # MIME types
    "content_type",
]

"""
=============================================================================
ERROR PAGES
=============================================================================

Builds the 404 and 501 responses from static HTML pages kept in the
document root.

    ┌────────────────────────────┬────────────────────────────────────────┐
    │ Response                   │ Body                                   │
    ├────────────────────────────┼────────────────────────────────────────┤
    │ 404 File Not Found         │ <root>/fileNotFound.html               │
    │ 501 Not Implemented        │ <root>/methodNoSupport.html            │
    └────────────────────────────┴────────────────────────────────────────┘

Both are always sent as text/html. The page names come from
ServerConfig.

If a page is missing or unreadable, the client gets nothing: there is no
fallback page. ErrorPageUnavailable is raised (it is an OSError), the
connection handler logs it with the cause and closes the connection.
Nothing has been written to the socket at that point, because the page
is read before the first header byte goes out.

=============================================================================
"""

import logging

from ..http.mime_types import ERROR_PAGE_MIME_TYPE
from ..http.response import HTTPResponse, ResponseWriter
from ..http.status_codes import HTTPStatus
from .static import ResourceResolver


logger = logging.getLogger(__name__)


class ErrorPageUnavailable(OSError):
    """The configured error page for a status could not be read."""

    def __init__(self, status: HTTPStatus, page: str, cause: OSError):
        super().__init__(f"Cannot read {int(status)} page {page!r}: {cause}")
        self.status = status
        self.page = page
        self.cause = cause


class ErrorResponder:
    """
    Sends the canned 404 and 501 responses.

    Usage:
        errors = ErrorResponder(resolver, "fileNotFound.html", "methodNoSupport.html")
        errors.not_found(writer)
        errors.not_implemented(writer)
    """

    def __init__(
        self,
        resolver: ResourceResolver,
        not_found_page: str = "fileNotFound.html",
        not_supported_page: str = "methodNoSupport.html",
    ):
        self.resolver = resolver
        self.pages = {
            HTTPStatus.NOT_FOUND: not_found_page,
            HTTPStatus.NOT_IMPLEMENTED: not_supported_page,
        }

    def not_found(self, writer: ResponseWriter, include_body: bool = True) -> HTTPResponse:
        """Send 404 File Not Found with the not-found page."""
        return self.respond(writer, HTTPStatus.NOT_FOUND, include_body)

    def not_implemented(self, writer: ResponseWriter) -> HTTPResponse:
        """Send 501 Not Implemented with the method-not-supported page."""
        return self.respond(writer, HTTPStatus.NOT_IMPLEMENTED)

    def respond(
        self,
        writer: ResponseWriter,
        status: HTTPStatus,
        include_body: bool = True,
    ) -> HTTPResponse:
        """
        Read the page for status and write the response.

        include_body=False sends the same headers without the page bytes
        (used to answer HEAD for a missing file).

        Raises:
            ErrorPageUnavailable: If the page cannot be read.
            OSError: If the connection fails while writing.
        """
        page = self.pages[status]
        body = self.load_page(status, page)

        return writer.write(
            status,
            ERROR_PAGE_MIME_TYPE,
            len(body),
            body if include_body else None,
        )

    def load_page(self, status: HTTPStatus, page: str) -> bytes:
        resource = self.resolver.resolve("/" + page)
        if not resource.exists:
            raise ErrorPageUnavailable(
                status, page, FileNotFoundError(f"No such file: {resource.absolute_path}")
            )

        try:
            return resource.read()
        except OSError as e:
            raise ErrorPageUnavailable(status, page, e) from e

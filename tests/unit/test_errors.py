"""
Unit tests for error page responses.
"""

import io

import pytest

from conftest import NOT_FOUND_PAGE, NOT_SUPPORTED_PAGE, RawResponse
from minihttpd.handlers import ErrorPageUnavailable, ErrorResponder, ResourceResolver
from minihttpd.http.response import ResponseWriter
from minihttpd.http.status_codes import HTTPStatus


@pytest.fixture
def errors(document_root) -> ErrorResponder:
    return ErrorResponder(ResourceResolver(document_root))


class TestErrorResponder:
    """Tests for ErrorResponder class."""

    def test_not_found(self, errors):
        stream = io.BytesIO()
        errors.not_found(ResponseWriter(stream))

        response = RawResponse.parse(stream.getvalue())
        assert response.status_line == "HTTP/1.1 404 File Not Found"
        assert response.headers["Content-type"] == "text/html"
        assert response.headers["Content-length"] == str(len(NOT_FOUND_PAGE))
        assert response.body == NOT_FOUND_PAGE

    def test_not_implemented(self, errors):
        stream = io.BytesIO()
        errors.not_implemented(ResponseWriter(stream))

        response = RawResponse.parse(stream.getvalue())
        assert response.status_line == "HTTP/1.1 501 Not Implemented"
        assert response.headers["Content-type"] == "text/html"
        assert response.body == NOT_SUPPORTED_PAGE

    def test_page_is_always_html(self, document_root):
        (document_root / "404.txt").write_bytes(b"plain")
        errors = ErrorResponder(ResourceResolver(document_root), not_found_page="404.txt")

        stream = io.BytesIO()
        errors.not_found(ResponseWriter(stream))

        assert b"Content-type: text/html\r\n" in stream.getvalue()

    def test_missing_page_raises_before_writing(self, errors, document_root):
        (document_root / "fileNotFound.html").unlink()
        stream = io.BytesIO()

        with pytest.raises(ErrorPageUnavailable) as exc_info:
            errors.not_found(ResponseWriter(stream))

        assert exc_info.value.status == HTTPStatus.NOT_FOUND
        assert exc_info.value.page == "fileNotFound.html"
        assert stream.getvalue() == b""

    def test_unavailable_page_is_an_os_error(self):
        assert issubclass(ErrorPageUnavailable, OSError)

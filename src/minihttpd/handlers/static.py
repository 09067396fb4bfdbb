"""
=============================================================================
STATIC FILE HANDLER
=============================================================================

Resolves request paths against the document root and serves the files
found there.

=============================================================================
PATH RESOLUTION
=============================================================================

    Request path          Resolved file
    ────────────          ─────────────
    /notes.txt       →    <root>/notes.txt
    /docs/a.html     →    <root>/docs/a.html
    /                →    <root>/index.html        (home file)
    /docs/           →    <root>/index.html        (home file, see below)
    /docs            →    not found (a directory is not a regular file)

A path ending in "/" is REPLACED by the home file name, not joined with
it. "/docs/" serves the root index.html, not docs/index.html. Existing
sites rely on this, so it is kept.

=============================================================================
SECURITY: PATH TRAVERSAL
=============================================================================

    GET /../../etc/passwd HTTP/1.1

    <root>/../../etc/passwd  ──resolve()──►  /etc/passwd   (outside root!)

Every candidate is resolved (following ".." and symlinks) and must still
be inside the document root:

    full_path = (root / user_input).resolve()
    full_path.relative_to(root)     # raises ValueError if outside

Paths that escape are logged and answered exactly like a missing file,
with a 404. Nothing about the filesystem outside the root is revealed.

=============================================================================
SIZE AND CONTENT
=============================================================================

The size on disk is read with stat() while resolving. That is what HEAD
reports. GET reads the whole file and reports len(data) instead, so the
Content-length always matches the bytes actually sent even if the file
changes between the stat() and the read().

=============================================================================
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..http.mime_types import content_type
from ..http.request import IncomingRequest
from ..http.response import ResponseWriter
from ..http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedResource:
    """
    A request path mapped onto the filesystem.

    size_bytes is None when the file does not exist.
    """

    request_path: str
    absolute_path: Path
    exists: bool
    size_bytes: Optional[int]
    mime_type: str

    def read(self) -> bytes:
        """
        Read the full file contents.

        Raises:
            OSError: If the file vanished or cannot be read.
        """
        return self.absolute_path.read_bytes()


class ResourceResolver:
    """
    Maps request paths to files under a fixed document root.

    Usage:
        resolver = ResourceResolver("/var/www", home_file="index.html")
        resource = resolver.resolve("/")
        if resource.exists:
            data = resource.read()
    """

    def __init__(self, document_root: str | Path, home_file: str = "index.html"):
        # Resolve to absolute path (the containment check compares against it)
        self.root = Path(document_root).resolve()
        self.home_file = home_file

    def resolve(self, path: str) -> ResolvedResource:
        """
        Resolve a request path.

        Args:
            path: Request path, already lower-cased by the parser.

        Returns:
            ResolvedResource. exists is False when there is no regular
            file at the location, or the location is outside the root.
        """
        if path.endswith("/"):
            path = self.home_file

        mime_type = content_type(path)
        candidate = self.root / path.lstrip("/")

        try:
            full_path = candidate.resolve()
        except (OSError, ValueError, RuntimeError) as e:
            # Embedded NUL bytes, symlink loops
            logger.debug(f"Cannot resolve {path!r}: {e}")
            return ResolvedResource(path, candidate, False, None, mime_type)

        try:
            full_path.relative_to(self.root)
        except ValueError:
            logger.warning(f"Path traversal attempt: {path}")
            return ResolvedResource(path, full_path, False, None, mime_type)

        try:
            if not full_path.is_file():
                return ResolvedResource(path, full_path, False, None, mime_type)
            size_bytes = full_path.stat().st_size
        except OSError as e:
            # ENAMETOOLONG, EACCES on a parent directory
            logger.debug(f"Cannot stat {path!r}: {e}")
            return ResolvedResource(path, full_path, False, None, mime_type)

        return ResolvedResource(
            request_path=path,
            absolute_path=full_path,
            exists=True,
            size_bytes=size_bytes,
            mime_type=mime_type,
        )


class StaticFileHandler:
    """
    Serves GET and HEAD requests for files under the document root.

    =========================================================================
    FLOW
    =========================================================================

        resolve(request.path)
            │
            ├── missing ──► ErrorResponder.not_found()        404
            │
            ├── HEAD ─────► headers only (stat size)           200
            │
            └── GET ──────► read file, headers + body          200

    =========================================================================
    """

    def __init__(self, resolver: ResourceResolver, errors, verbose: bool = True):
        # errors is an ErrorResponder (errors.py imports this module)
        self.resolver = resolver
        self.errors = errors
        self.verbose = verbose

    def serve(self, request: IncomingRequest, writer: ResponseWriter, conn_id: str = "-") -> HTTPStatus:
        """
        Answer a GET or HEAD request.

        Returns:
            The status that was sent.

        Raises:
            OSError: If the file or the connection fails mid-way.
        """
        resource = self.resolver.resolve(request.path)

        if not resource.exists:
            if self.verbose:
                logger.info(f"[{conn_id}] File {resource.request_path} not found")
            self.errors.not_found(writer, include_body=not request.is_head)
            return HTTPStatus.NOT_FOUND

        if request.is_head:
            writer.write(HTTPStatus.OK, resource.mime_type, resource.size_bytes)
        else:
            data = resource.read()
            writer.write(HTTPStatus.OK, resource.mime_type, len(data), data)

        if self.verbose:
            logger.info(
                f"[{conn_id}] File {resource.request_path} of type "
                f"{resource.mime_type} returned"
            )
        return HTTPStatus.OK

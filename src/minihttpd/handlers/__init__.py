"""
=============================================================================
HANDLERS
=============================================================================

    StaticFileHandler   200 responses for GET/HEAD of existing files
    ResourceResolver    Request path → file under the document root
    ErrorResponder      404 and 501 responses from static HTML pages

=============================================================================
"""

from .errors import ErrorPageUnavailable, ErrorResponder
from .static import ResolvedResource, ResourceResolver, StaticFileHandler

__all__ = [
    "StaticFileHandler",
    "ResourceResolver",
    "ResolvedResource",
    "ErrorResponder",
    "ErrorPageUnavailable",
]

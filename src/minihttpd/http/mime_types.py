"""
=============================================================================
MIME TYPE DETECTION
=============================================================================

Maps a resource path's extension to the value sent in the Content-type
header.

=============================================================================
A DELIBERATELY SMALL TABLE
=============================================================================

The server distinguishes exactly two kinds of content:

    ┌────────────────────────────────────────────────────────────────────┐
    │                                                                     │
    │   report.html, index.htm   →  text/html   (browser renders it)     │
    │   notes.txt, data.bin,     →  text/plain  (browser shows it raw)   │
    │   readme, anything else                                             │
    │                                                                     │
    └────────────────────────────────────────────────────────────────────┘

There is no application/octet-stream fallback: unknown files are shown as
plain text. To teach the server a new type, add an entry to MIME_TYPES.

Matching is a plain suffix check. The connection handler lower-cases the
request path before it gets here, so "/INDEX.HTML" arrives as
"/index.html" and matches.

=============================================================================
"""

# =============================================================================
# MIME TYPE DATABASE
# =============================================================================
#
# Maps file extensions (lowercase, with dot) to MIME types.
#
# =============================================================================

MIME_TYPES = {
    ".html": "text/html",
    ".htm": "text/html",
}

# Everything not listed above
DEFAULT_MIME_TYPE = "text/plain"

# Error pages are always sent as HTML, whatever their filename says
ERROR_PAGE_MIME_TYPE = "text/html"


def content_type(path: str) -> str:
    """
    Get the Content-type header value for a resource path.

    Args:
        path: Request path or file name, already lower-cased.

    Returns:
        The MIME type string.

    Examples:
        >>> content_type("/report.html")
        'text/html'

        >>> content_type("data.bin")
        'text/plain'

        >>> content_type("readme")
        'text/plain'
    """
    for extension, mime_type in MIME_TYPES.items():
        if path.endswith(extension):
            return mime_type
    return DEFAULT_MIME_TYPE

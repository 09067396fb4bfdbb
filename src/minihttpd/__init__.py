"""
=============================================================================
MINIHTTPD - A Minimal HTTP/1.1 File Server
=============================================================================

Serves files from one directory over HTTP/1.1, one request per
connection, one thread per connection.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    minihttpd/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m minihttpd)
    ├── server.py            # HTTPServer: config + accept loop + threads
    ├── config.py            # ServerConfig frozen dataclass
    ├── core/
    │   ├── socket_server.py # TCP accept loop
    │   └── connection.py    # Connection + ConnectionHandler
    ├── http/
    │   ├── request.py       # Request line parsing
    │   ├── response.py      # ResponseWriter
    │   ├── status_codes.py  # 200 / 404 / 501
    │   └── mime_types.py    # text/html or text/plain
    └── handlers/
        ├── static.py        # ResourceResolver + StaticFileHandler
        └── errors.py        # ErrorResponder (404/501 pages)

=============================================================================
QUICK START
=============================================================================

    from minihttpd import HTTPServer, ServerConfig

    server = HTTPServer(ServerConfig(document_root="./public"))
    server.run()

    $ curl -i http://127.0.0.1:8080/
    HTTP/1.1 200 OK
    Server: MiniHTTPd/1.0
    Date: Mon, 19 Oct 2026 12:00:00 GMT
    Content-type: text/html
    Content-length: 1234

=============================================================================
"""

__version__ = "1.0.0"

from .server import HTTPServer
from .config import ServerConfig

__all__ = ["HTTPServer", "ServerConfig", "__version__"]

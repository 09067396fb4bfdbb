"""
=============================================================================
CORE SERVER COMPONENTS
=============================================================================

The networking plumbing of the server.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         SOCKET SERVER                                │
    │  • Creates the listening TCP socket, binds, listens                 │
    │  • Runs the accept() loop                                           │
    │  • Stops on shutdown() or SIGTERM/SIGINT                            │
    └─────────────────────────────────────────────────────────────────────┘
                                    │
                                    │ One Connection per accepted socket
                                    ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │                      CONNECTION HANDLER                              │
    │  • Reads the request line                                           │
    │  • Dispatches to the static file or error page handlers            │
    │  • Closes reader, writer and socket on every exit path             │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .connection import Connection, ConnectionHandler, ConnectionState
from .socket_server import SocketServer

__all__ = [
    "SocketServer",       # TCP accept loop
    "Connection",         # Client socket plus reader/writer streams
    "ConnectionState",    # Enum for connection lifecycle states
    "ConnectionHandler",  # One request, one response, then close
]

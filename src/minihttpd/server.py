"""
=============================================================================
HTTP FILE SERVER
=============================================================================

Wires the configuration, the accept loop and the connection handler
together.

=============================================================================
REQUEST FLOW
=============================================================================

    ┌──────────────┐   Connection   ┌──────────────┐
    │ SocketServer │ ─────────────► │ HTTPServer   │
    │ accept loop  │                │ _dispatch()  │
    └──────────────┘                └──────┬───────┘
                                           │ threading.Thread (one per
                                           │ connection, unbounded)
                                           ▼
                                   ┌────────────────────┐
                                   │ ConnectionHandler  │
                                   │ .handle(conn)      │
                                   └────────────────────┘

=============================================================================
THREAD-PER-CONNECTION
=============================================================================

Every accepted connection gets its own daemon thread. There is no pool
and no limit: a thousand slow clients means a thousand threads. The
handler, the resolver and the config are all read-only, so threads never
need a lock.

Threads are daemons so that a client that never sends its request line
cannot keep the process alive after shutdown.

=============================================================================
"""

import logging
import threading
from typing import Optional

from .config import ServerConfig
from .core import Connection, ConnectionHandler, SocketServer


logger = logging.getLogger(__name__)


class HTTPServer:
    """
    Static file server.

    =========================================================================
    USAGE
    =========================================================================

        config = ServerConfig(port=8080, document_root="./public")
        server = HTTPServer(config)
        server.run()      # Blocks until Ctrl+C / SIGTERM / shutdown()

    =========================================================================
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        """
        Initialize the server.

        Args:
            config: Server configuration. Uses the defaults if not provided.

        Raises:
            ValueError: If the configuration is invalid.
        """
        self.config = config or ServerConfig()
        self.config.validate()  # Fail-fast on invalid config

        self._socket_server = SocketServer(self.config)
        self._handler = ConnectionHandler(self.config)
        self._running = False

    @property
    def address(self):
        """The (host, port) the server is listening on."""
        return self._socket_server.address

    def run(self, configure_logging: bool = True):
        """
        Start the server (blocking).

        Args:
            configure_logging: Call logging.basicConfig() from the
                config's log_level. Pass False when the application has
                already set logging up.
        """
        if configure_logging:
            self._setup_logging()

        self._running = True
        logger.info(
            f"Server started, serving {self.config.root_path} "
            f"on {self.config.host}:{self.config.port}"
        )

        try:
            self._socket_server.start(self._dispatch)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._running = False
            logger.info("Server stopped")

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Wait until the server accepts connections."""
        return self._socket_server.wait_until_ready(timeout)

    def shutdown(self):
        """Stop accepting connections. In-flight threads finish on their own."""
        self._socket_server.shutdown()

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("minihttpd").setLevel(level)

    def _dispatch(self, conn: Connection):
        """Hand a freshly accepted connection to its own worker thread."""
        if self.config.verbose:
            logger.info(f"[{conn.id}] Connection opened from {conn.address[0]}:{conn.address[1]}")

        worker = threading.Thread(
            target=self._handler.handle,
            args=(conn,),
            name=f"conn-{conn.id}",
            daemon=True,
        )
        try:
            worker.start()
        except RuntimeError as e:
            # can't start new thread: out of OS threads
            logger.error(f"[{conn.id}] Could not start worker: {e}")
            conn.close()

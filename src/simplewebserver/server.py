"""
=============================================================================
WEB SERVER
=============================================================================

Ties the pieces together: the accept loop hands every new connection to
_handle_connection(), which starts a thread running _process_connection().

=============================================================================
REQUEST FLOW (one connection, one thread)
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   conn.lines()  ──►  parse_request()   RequestLine or None          │
    │                           │                                          │
    │                           ▼                                          │
    │                      resolve()         Home | FileFound | NotFound   │
    │                           │                                          │
    │                           ▼                                          │
    │                      write_header()    status line + headers         │
    │                           │                                          │
    │                           ▼                                          │
    │                      render_content()  body                          │
    │                           │                                          │
    │                           ▼                                          │
    │                      conn.close()      end of body                   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
THREAD PER CONNECTION
=============================================================================

Each connection gets its own daemon thread. Threads share nothing: every
one has its own socket, its own parser state and its own outcome, so
there are no locks anywhere in the request path.

A fault in one connection (client reset, file removed mid-request,
unexpected bug) is logged and that connection is closed. The accept loop
and every other connection carry on.

=============================================================================
"""

import logging
import threading
from typing import Optional

from .config import ServerConfig
from .core.connection import Connection
from .core.socket_server import SocketServer
from .handlers.static import render_content, resolve
from .http.outcome import ConnectionOutcome
from .http.request import parse_request
from .http.response import write_header


logger = logging.getLogger(__name__)


class WebServer:
    """
    Single-request-per-connection HTTP/1.1 server.

    Usage:
        server = WebServer(ServerConfig(port=8080))
        server.run()  # Blocks until Ctrl+C
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()
        self.config.validate()

        self._socket_server = SocketServer(self.config)
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def socket_server(self) -> SocketServer:
        return self._socket_server

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self, host: Optional[str] = None, port: Optional[int] = None):
        """
        Start the server (blocking).

        Args:
            host: Override config host.
            port: Override config port.

        Raises:
            OSError: If the address cannot be bound.
        """
        if host:
            self.config.host = host
        if port is not None:
            self.config.port = port

        self._setup_logging()
        self._running = True

        logger.info(f"Starting {self.config.server_name} on {self.config.host}:{self.config.port}")

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._running = False
            logger.info("Server stopped")

    def shutdown(self):
        """Stop accepting connections. In-flight connections finish on their own."""
        self._socket_server.shutdown()

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("simplewebserver").setLevel(level)

    # =========================================================================
    # CONNECTION HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """Start a worker thread for a freshly accepted connection."""
        worker = threading.Thread(
            target=self._process_connection,
            args=(conn,),
            name=f"worker-{conn.id}",
            daemon=True,
        )
        worker.start()

    def _process_connection(self, conn: Connection) -> Optional[ConnectionOutcome]:
        """
        Serve one request on one connection (runs in the worker thread).

        Returns:
            The outcome, or None if the connection was abandoned before an
            outcome was decided.
        """
        logger.info(f"[{conn.id}] Handling connection from {conn.client_ip}")
        outcome: Optional[ConnectionOutcome] = None

        with conn:
            try:
                request = parse_request(conn.lines(), connection_id=conn.id)
                outcome = resolve(request)
                logger.info(
                    f"[{conn.id}] {request.raw if request else '(no request line)'}"
                    f" -> {outcome.status.value} {type(outcome).__name__}"
                )

                write_header(
                    conn,
                    outcome,
                    content_type=self.config.content_type,
                    server_name=self.config.server_name,
                )
                render_content(conn, outcome, server_name=self.config.tag_name)

            except OSError as e:
                # Client went away, or the file vanished after resolve()
                logger.warning(f"[{conn.id}] Connection aborted: {e}")

            except Exception as e:
                logger.exception(f"[{conn.id}] Connection error: {e}")

        logger.info(f"[{conn.id}] Done handling connection")
        return outcome

"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the web server.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m simplewebserver --port 3000                     │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTP_PORT=3000 python -m simplewebserver                  │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Files are always served relative to the process working directory, so
there is deliberately no document-root setting here. Start the server
from the directory you want to publish.

=============================================================================
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_SERVER_NAME = "CS371 Simple Web Server"


@dataclass
class ServerConfig:
    """
    Configuration for the web server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, buffer_size, read_timeout, max_line_length

    RESPONSE SETTINGS
    - content_type, server_name, tag_server_name

    LOGGING
    - log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """
    The IP address to bind to.
    - "127.0.0.1" - Localhost only (development)
    - "0.0.0.0" - All network interfaces
    """

    port: int = 8080
    """The port number to listen on. 0 lets the OS pick a free port."""

    backlog: int = 128
    """Maximum number of queued connections waiting for accept()."""

    buffer_size: int = 8192
    """How many bytes a single recv() call asks for."""

    read_timeout: Optional[float] = None
    """
    Seconds to wait for request data before giving up on a connection.
    None = wait forever; a client that never finishes its request holds
    its worker thread until it disconnects.
    """

    max_line_length: int = 8192
    """Longest request line (in bytes) accepted before the read is abandoned."""

    # ─────────────────────────────────────────────────────────────────────
    # RESPONSE SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    content_type: str = "text/html"
    """Content-Type sent with every response."""

    server_name: str = DEFAULT_SERVER_NAME
    """Used for the Server header, and for <cs371server> unless tag_server_name is set."""

    tag_server_name: Optional[str] = None
    """Replacement for the <cs371server> tag. None = use server_name."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    @property
    def tag_name(self) -> str:
        """The value substituted for <cs371server>."""
        return self.tag_server_name or self.server_name

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTP_HOST          Server host (default: 127.0.0.1)
        HTTP_PORT          Server port (default: 8080)
        HTTP_READ_TIMEOUT  Request read timeout in seconds (default: none)
        HTTP_SERVER_NAME   Server identity string
        HTTP_TAG_SERVER_NAME  <cs371server> value (default: HTTP_SERVER_NAME)
        HTTP_LOG_LEVEL     Logging level (default: INFO)

        =====================================================================
        """
        read_timeout = os.getenv("HTTP_READ_TIMEOUT")
        return cls(
            host=os.getenv("HTTP_HOST", "127.0.0.1"),
            port=int(os.getenv("HTTP_PORT", "8080")),
            read_timeout=float(read_timeout) if read_timeout else None,
            server_name=os.getenv("HTTP_SERVER_NAME", DEFAULT_SERVER_NAME),
            tag_server_name=os.getenv("HTTP_TAG_SERVER_NAME") or None,
            log_level=os.getenv("HTTP_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called once at startup so a bad value fails immediately instead
        of on the first connection.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")

        if self.max_line_length < 1:
            raise ValueError("max_line_length must be >= 1")

        if self.read_timeout is not None and self.read_timeout <= 0:
            raise ValueError("read_timeout must be > 0")

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

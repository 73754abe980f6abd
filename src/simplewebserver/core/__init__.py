"""
=============================================================================
CORE SERVER COMPONENTS
=============================================================================

The networking plumbing underneath the request handler.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         SOCKET SERVER                                │
    │  ─────────────────────────────────────────────────────────────────  │
    │  • Creates the TCP listening socket, binds, listens                 │
    │  • Runs the accept() loop                                           │
    │  • Handles shutdown via signals (SIGTERM, SIGINT)                  │
    └─────────────────────────────────────────────────────────────────────┘
                                    │
                                    │ One Connection per accepted client
                                    ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │                          CONNECTION                                  │
    │  ─────────────────────────────────────────────────────────────────  │
    │  • Wraps the client socket                                          │
    │  • LineReader: buffered line-at-a-time reading                      │
    │  • write() / close(), usable as a context manager                   │
    └─────────────────────────────────────────────────────────────────────┘

Each Connection is handled on its own thread (see server.py); nothing in
this package is shared between connections.

=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState, LineReader

__all__ = [
    "SocketServer",     # Accept loop
    "Connection",       # Wrapper for one client socket
    "ConnectionState",  # Lifecycle states
    "LineReader",       # Line-at-a-time request reader
]

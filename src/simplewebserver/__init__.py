"""
=============================================================================
SIMPLEWEBSERVER - A Minimal One-Request-Per-Connection HTTP/1.1 Server
=============================================================================

Accept a TCP connection, read one GET request, answer it, close.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        WHAT A CLIENT GETS                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   GET / HTTP/1.1              → 200, built-in home page             │
    │   GET /favicon.ico HTTP/1.1   → 200, home page (if no such file)    │
    │   GET /index.html HTTP/1.1    → 200, index.html with tags replaced  │
    │   GET /nope.html HTTP/1.1     → 404, "ERROR 404" page               │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Files are served relative to the working directory. Inside served files,
<cs371date> becomes today's date (MM/DD/YYYY) and <cs371server> becomes
the server name.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    simplewebserver/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m simplewebserver)
    ├── server.py            # WebServer: per-connection request flow
    ├── config.py            # ServerConfig dataclass
    ├── core/
    │   ├── socket_server.py # Accept loop
    │   └── connection.py    # Connection wrapper + LineReader
    ├── http/
    │   ├── request.py       # GET line parsing
    │   ├── outcome.py       # Home / FileFound / NotFound
    │   ├── response.py      # Status line and headers
    │   └── status_codes.py  # 200 / 404
    └── handlers/
        ├── static.py        # Resolution and body rendering
        └── tags.py          # <cs371date> / <cs371server>

=============================================================================
QUICK START
=============================================================================

    from simplewebserver import WebServer, ServerConfig

    WebServer(ServerConfig(port=8080)).run()

=============================================================================
"""

__version__ = "1.0.0"

from .server import WebServer
from .config import ServerConfig

__all__ = ["WebServer", "ServerConfig", "__version__"]

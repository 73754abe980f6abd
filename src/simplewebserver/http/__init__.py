"""
=============================================================================
HTTP PROTOCOL COMPONENTS
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST PARSER (request.py)                                         │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Input:   lines "GET /index.html HTTP/1.1", "Host: ...", ""          │
    │ Output:  RequestLine(method="GET", path="index.html") or None       │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ OUTCOMES (outcome.py)                                               │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Home | FileFound(path) | NotFound, each carrying its HTTPStatus     │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ HEADER WRITER (response.py)                                         │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Status line + Date, Server, Connection, Content-Type                │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import RequestLine, parse_request
from .outcome import ConnectionOutcome, Home, FileFound, NotFound
from .response import (
    write_header,
    build_header,
    status_line,
    format_http_date,
)
from .status_codes import HTTPStatus

__all__ = [
    # Request parsing
    "RequestLine",
    "parse_request",

    # Outcomes
    "ConnectionOutcome",
    "Home",
    "FileFound",
    "NotFound",

    # Response header
    "write_header",
    "build_header",
    "status_line",
    "format_http_date",

    # Status codes
    "HTTPStatus",
]

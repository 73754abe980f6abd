"""
=============================================================================
HTTP RESPONSE HEADER
=============================================================================

Writes the status line and the fixed header block.

    ┌─────────────────────────────────────────────────────────────────┐
    │  HTTP/1.1 200 OK                     ← from the outcome         │
    │  Date: Mon, 19 Oct 2026 12:00:00 GMT                            │
    │  Server: CS371 Simple Web Server                                │
    │  Connection: close                                              │
    │  Content-Type: text/html                                        │
    │                                      ← blank line, body follows │
    └─────────────────────────────────────────────────────────────────┘

Each line ends with a bare "\\n"; every mainstream client accepts that.

There is NO Content-Length: the body is streamed line by line from disk
and its length is never computed. The client knows the body is over
when the server closes the connection ("Connection: close" framing).

=============================================================================
"""

from datetime import datetime, timezone
from typing import BinaryIO, Optional

from .outcome import ConnectionOutcome


LINE_END = "\n"
HTTP_VERSION = "HTTP/1.1"


def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP-date (RFC 7231).

    Format: Day, DD Mon YYYY HH:MM:SS GMT
    Example: Wed, 01 Jan 2026 12:00:00 GMT

    HTTP dates are always in GMT; aware datetimes are converted first.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)

    # Weekday names (0=Monday in Python's datetime)
    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )


def status_line(outcome: ConnectionOutcome) -> str:
    """
    Status line for an outcome.

    Example:
        status_line(NotFound())  →  "HTTP/1.1 404 NOT FOUND"
    """
    status = outcome.status
    return f"{HTTP_VERSION} {status.value} {status.phrase}"


def build_header(
    outcome: ConnectionOutcome,
    content_type: str,
    server_name: str,
    now: Optional[datetime] = None,
) -> bytes:
    """Serialize the header block, blank line included."""
    if now is None:
        now = datetime.now(timezone.utc)

    lines = [
        status_line(outcome),
        f"Date: {format_http_date(now)}",
        f"Server: {server_name}",
        "Connection: close",
        f"Content-Type: {content_type}",
        "",
    ]
    return (LINE_END.join(lines) + LINE_END).encode("utf-8")


def write_header(
    stream: BinaryIO,
    outcome: ConnectionOutcome,
    content_type: str,
    server_name: str,
    now: Optional[datetime] = None,
) -> None:
    """
    Write the status line and headers to the client.

    Args:
        stream: Anything with write(bytes), normally the Connection.
        outcome: Decides between 200 OK and 404 NOT FOUND.
        content_type: Value of the Content-Type header.
        server_name: Value of the Server header.
        now: Timestamp for the Date header (default: current time).

    Raises:
        OSError: If the client went away; not handled here.
    """
    stream.write(build_header(outcome, content_type, server_name, now))

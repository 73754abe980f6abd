"""
=============================================================================
STATIC CONTENT HANDLER
=============================================================================

Decides what a request gets (resolve) and streams it (render_content).

=============================================================================
RESOLUTION RULES
=============================================================================

Paths are looked up relative to the process working directory, in this
order:

    ┌─────────────────────────────────────────────────────────────────────┐
    │  1. no GET line at all                     → Home                   │
    │  2. path exists on disk                    → FileFound(path)        │
    │  3. path is "" or contains "favicon.ico"   → Home                   │
    │  4. anything else                          → NotFound               │
    └─────────────────────────────────────────────────────────────────────┘

Rule 3 keeps browsers' automatic /favicon.ico probe (and a bare "GET /")
from producing 404s. It is a substring test on the whole path, so
"x/favicon.ico/y" is exempt too.

Only existence is checked. There is no path-traversal protection and no
directory listing: a path naming a directory resolves to FileFound and
fails when it is opened for reading.

=============================================================================
RENDERING
=============================================================================

    Home       →  HOME_PAGE
    NotFound   →  NOT_FOUND_PAGE
    FileFound  →  the file, line by line, through substitute_tags()

Files are read as UTF-8 text with surrogateescape, and written back the
same way, so bytes that are not valid UTF-8 pass through unchanged.
Line endings are preserved as they are on disk.

If the file disappears between resolve() and render_content(), open()
raises and the error propagates: the 200 header has already been sent,
so there is no way to turn it into a 404 any more.

=============================================================================
"""

import os
from datetime import date
from typing import BinaryIO, Optional

from ..http.outcome import ConnectionOutcome, FileFound, Home, NotFound
from ..http.request import RequestLine
from .tags import substitute_tags


FAVICON = "favicon.ico"
ENCODING = "utf-8"

HOME_PAGE = (
    "<html><head></head><body>\n"
    "<h3>My web server works!</h3>\n"
    "</body></html>\n"
)

NOT_FOUND_PAGE = (
    "<html><head></head><body>\n"
    "<h3>ERROR 404</h3>\n"
    "</body></html>\n"
)


def resolve(request: Optional[RequestLine]) -> ConnectionOutcome:
    """
    Classify a parsed request.

    Args:
        request: The GET line, or None when no GET line was received.

    Returns:
        Home, FileFound(path) or NotFound.
    """
    if request is None:
        return Home()

    path = request.path

    if path and os.path.exists(path):
        return FileFound(path)

    if path == "" or FAVICON in path:
        return Home()

    return NotFound()


def render_content(
    stream: BinaryIO,
    outcome: ConnectionOutcome,
    server_name: str,
    today: Optional[date] = None,
) -> None:
    """
    Write the response body for an outcome.

    Args:
        stream: Anything with write(bytes), normally the Connection.
        outcome: What to send.
        server_name: Replacement for the <cs371server> tag.
        today: Replacement date for <cs371date> (default: today).

    Raises:
        OSError: If the file cannot be read or the client went away.
    """
    if isinstance(outcome, NotFound):
        stream.write(NOT_FOUND_PAGE.encode(ENCODING))

    elif isinstance(outcome, Home):
        stream.write(HOME_PAGE.encode(ENCODING))

    elif isinstance(outcome, FileFound):
        _render_file(stream, outcome.path, server_name, today or date.today())

    else:
        raise TypeError(f"Unknown outcome: {outcome!r}")


def _render_file(stream: BinaryIO, path: str, server_name: str, today: date) -> None:
    # newline="" keeps "\r\n" endings exactly as stored
    with open(path, "r", encoding=ENCODING, errors="surrogateescape", newline="") as f:
        for line in f:
            line = substitute_tags(line, server_name, today)
            stream.write(line.encode(ENCODING, errors="surrogateescape"))

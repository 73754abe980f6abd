"""
=============================================================================
HTTP REQUEST PARSING
=============================================================================

Turns the request lines read from a connection into the requested path.

=============================================================================
WHAT WE LOOK AT
=============================================================================

    GET /notes/index.html HTTP/1.1      ← the only line that matters
    Host: localhost:8080                ← read and discarded
    User-Agent: curl/8.0                ← read and discarded
                                        ← blank line: stop reading

Path extraction is plain text surgery on the GET line:

    "GET /notes/index.html HTTP/1.1"
     └───┘                └───────┘
     strip "GET /"        strip " HTTP/1.1"
            └────────────┘
            "notes/index.html"

No percent-decoding, no query-string split, no normalisation. A request
for "/a%20b.html?x=1" looks for a file literally named "a%20b.html?x=1".
A line using another protocol version keeps it: "GET /x HTTP/1.0"
becomes the path "x HTTP/1.0".

=============================================================================
WHAT COUNTS AS HOME
=============================================================================

parse_request() returns None, meaning "serve the home page", when the
header block (or the stream) ends without any GET line. Other methods
(POST, HEAD, ...) and junk lines are skipped, so they end up as Home too.

=============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional


logger = logging.getLogger(__name__)


GET_PREFIX = "GET "
PATH_PREFIX = "GET /"
PROTOCOL_SUFFIX = " HTTP/1.1"


@dataclass(frozen=True)
class RequestLine:
    """
    A parsed GET line.

    Attributes:
        method: Always "GET"; no other method is recognised.
        path: The raw path, without its leading "/".
        raw: The line exactly as it was received.
    """
    method: str
    path: str
    raw: str

    @classmethod
    def from_line(cls, line: str) -> Optional["RequestLine"]:
        """
        Parse a single line, or return None if it is not a GET line.

            >>> RequestLine.from_line("GET /index.html HTTP/1.1").path
            'index.html'
            >>> RequestLine.from_line("POST /form HTTP/1.1") is None
            True
        """
        if not line.startswith(GET_PREFIX):
            return None

        if line.startswith(PATH_PREFIX):
            path = line[len(PATH_PREFIX):]
        else:
            path = line[len(GET_PREFIX):]

        if path.endswith(PROTOCOL_SUFFIX):
            path = path[:-len(PROTOCOL_SUFFIX)]

        return cls(method="GET", path=path, raw=line)


def parse_request(lines: Iterable[str], connection_id: str = "-") -> Optional[RequestLine]:
    """
    Read the request header block and return its GET line.

    Lines are consumed up to and including the first blank line, or
    until the iterable ends (end of stream, read error). Only the first
    GET line counts; anything else is logged and ignored.

    Args:
        lines: Request lines without their line terminators, usually a
               LineReader.
        connection_id: Log prefix.

    Returns:
        The first GET line, or None if there was none (serve Home).
    """
    request: Optional[RequestLine] = None

    for line in lines:
        logger.debug(f"[{connection_id}] Request line: ({line})")

        if line == "":
            break

        if request is None:
            request = RequestLine.from_line(line)
    else:
        logger.debug(f"[{connection_id}] Stream ended before the blank line")

    return request

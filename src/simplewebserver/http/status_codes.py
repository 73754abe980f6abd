"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The server only ever answers with two statuses:

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  200   │ OK          - home page or the requested file             │
    ├────────┼───────────────────────────────────────────────────────────┤
    │  404   │ NOT FOUND   - a named path that does not exist            │
    └────────┴───────────────────────────────────────────────────────────┘

Reason phrases are sent exactly as listed here, including the upper-case
"NOT FOUND". RFC 7230 treats the phrase as informational, so clients do
not care about its spelling, but existing clients of this server match on
the literal status line.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes used by the server.

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'NOT FOUND'
    """

    OK = 200
    NOT_FOUND = 404

    @property
    def phrase(self) -> str:
        """
        Reason phrase for the status line.

            HTTP/1.1 404 NOT FOUND
                     ─── ─────────
                      │      └── Reason phrase
                      └───────── Status code
        """
        return _STATUS_PHRASES[self]


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NOT_FOUND: "NOT FOUND",
}

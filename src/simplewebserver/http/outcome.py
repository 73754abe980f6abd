"""
Connection outcomes.

Every connection ends in exactly one of three outcomes. The outcome is
decided once, while the request is parsed and resolved, and both the
status line and the body are generated from it:

    ┌──────────────────┬──────────────────────┬──────────────────────────┐
    │ Outcome          │ Status line          │ Body                     │
    ├──────────────────┼──────────────────────┼──────────────────────────┤
    │ Home()           │ HTTP/1.1 200 OK      │ built-in home page       │
    │ FileFound(path)  │ HTTP/1.1 200 OK      │ file, tags substituted   │
    │ NotFound()       │ HTTP/1.1 404 NOT FOUND │ ERROR 404 page         │
    └──────────────────┴──────────────────────┴──────────────────────────┘

The classes are frozen dataclasses, so an outcome cannot be changed
after it has been handed to the header writer.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from .status_codes import HTTPStatus


@dataclass(frozen=True)
class Home:
    """No usable path was requested; serve the built-in page."""
    status: ClassVar[HTTPStatus] = HTTPStatus.OK


@dataclass(frozen=True)
class FileFound:
    """The requested path exists; serve its contents."""
    path: str
    status: ClassVar[HTTPStatus] = HTTPStatus.OK


@dataclass(frozen=True)
class NotFound:
    """A non-exempt path was requested and does not exist."""
    status: ClassVar[HTTPStatus] = HTTPStatus.NOT_FOUND


ConnectionOutcome = Union[Home, FileFound, NotFound]

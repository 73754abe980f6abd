"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

This module wraps one accepted client socket with the small API the
request handler needs: read the request one line at a time, write
response bytes, close.

=============================================================================
TCP IS A BYTE STREAM, NOT A MESSAGE PROTOCOL!
=============================================================================

TCP does NOT preserve message boundaries. A browser sending

    GET /index.html HTTP/1.1\r\n
    Host: localhost\r\n
    \r\n

might be received as any split of those bytes:

    First recv():  "GET /inde"          (incomplete!)
    Second recv(): "x.html HTTP/1.1\r\nHo"
    Third recv():  "st: localhost\r\n\r\n"

So we keep a buffer and only hand out a line once its "\n" has arrived.
The LineReader below does exactly that.

    ┌─────────────────────────────────────────────────────────────────┐
    │                     LineReader buffering                        │
    ├─────────────────────────────────────────────────────────────────┤
    │                                                                  │
    │   recv() ──► _buffer ──► split at b"\n" ──► decode ──► line     │
    │                 ▲                                                │
    │                 └── leftover bytes stay for the next call        │
    │                                                                  │
    └─────────────────────────────────────────────────────────────────┘

=============================================================================
ONE REQUEST PER CONNECTION
=============================================================================

This server answers exactly one request and then closes the socket.
There is no keep-alive, so a Connection goes through a single pass:

    NEW ──► READING ──► WRITING ──► CLOSING ──► CLOSED

The end of the response body is signalled by the close itself (there is
no Content-Length header).

=============================================================================
"""

import logging
import socket
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states, used for logging and close()."""
    NEW = "new"              # Just accepted, nothing read yet
    READING = "reading"      # Reading the request lines
    WRITING = "writing"      # Sending header and body
    CLOSING = "closing"      # Shutdown sequence in progress
    CLOSED = "closed"        # Socket released


class LineReader:
    """
    Lazy, forward-only sequence of request lines read from a socket.

    next_line() returns the next line with its "\\r\\n" or "\\n" removed,
    or None once the stream is over. "Over" covers every way a read can
    end: the client closed, the read timed out, the socket raised an
    OSError, or a line grew past max_line_length. After the first None
    every later call returns None too.

    recv() blocks until data arrives, so a client that types its request
    slowly (telnet) is simply waited for.

    Usage:
        reader = LineReader(sock)
        for line in reader:
            print(line)
    """

    def __init__(
        self,
        sock: socket.socket,
        buffer_size: int = 8192,
        max_line_length: int = 8192,
        encoding: str = "utf-8",
        connection_id: str = "-",
    ):
        self._socket = sock
        self._buffer = b""
        self._finished = False
        self.buffer_size = buffer_size
        self.max_line_length = max_line_length
        self.encoding = encoding
        self.connection_id = connection_id

    def __iter__(self):
        return self

    def __next__(self) -> str:
        line = self.next_line()
        if line is None:
            raise StopIteration
        return line

    @property
    def finished(self) -> bool:
        """True once the end of the stream has been signalled."""
        return self._finished

    def next_line(self) -> Optional[str]:
        """
        Return the next complete line, or None at end of stream.

        A final line without a trailing newline is still returned before
        the end of stream is reported.
        """
        if self._finished:
            return None

        while b"\n" not in self._buffer:
            if len(self._buffer) > self.max_line_length:
                logger.warning(
                    f"[{self.connection_id}] Request line exceeds "
                    f"{self.max_line_length} bytes, abandoning read"
                )
                return self._finish()

            chunk = self._recv()
            if not chunk:
                if self._buffer:
                    # Client closed after a partial line: deliver it, then end
                    raw, self._buffer = self._buffer, b""
                    self._finished = True
                    return self._decode(raw)
                return self._finish()

            self._buffer += chunk

        raw, _, self._buffer = self._buffer.partition(b"\n")
        if len(raw) > self.max_line_length:
            logger.warning(
                f"[{self.connection_id}] Request line exceeds "
                f"{self.max_line_length} bytes, abandoning read"
            )
            return self._finish()

        return self._decode(raw)

    def _recv(self) -> bytes:
        """
        Receive data, mapping every socket failure to b"" (end of stream).
        """
        try:
            return self._socket.recv(self.buffer_size)
        except socket.timeout:
            logger.debug(f"[{self.connection_id}] Read timed out")
            return b""
        except OSError as e:
            # Connection reset, socket closed under us, etc.
            logger.debug(f"[{self.connection_id}] Read failed: {e}")
            return b""

    def _decode(self, raw: bytes) -> str:
        return raw.rstrip(b"\r").decode(self.encoding, errors="replace")

    def _finish(self) -> None:
        self._finished = True
        self._buffer = b""
        return None


@dataclass
class Connection:
    """
    Represents a client connection.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    Connection Responsibilities                       │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  1. LINE READING                                                     │
    │     └── lines() hands out one LineReader for the whole request      │
    │                                                                      │
    │  2. WRITING                                                          │
    │     └── write() uses sendall(); failures propagate to the caller    │
    │                                                                      │
    │  3. GRACEFUL CLOSE                                                   │
    │     └── shutdown(SHUT_WR), drain, close; safe to call twice         │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short unique identifier used as a log prefix.
        state: Current connection state.
        created_at: Timestamp when the connection was accepted.
    """

    # Required parameters
    socket: socket.socket
    address: tuple

    # Generated/default parameters
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    # Configuration (passed from ServerConfig)
    buffer_size: int = 8192
    read_timeout: Optional[float] = None
    max_line_length: int = 8192

    _reader: Optional[LineReader] = field(default=None, repr=False)

    # Seconds close() spends discarding late client data
    DRAIN_TIMEOUT: ClassVar[float] = 0.5

    def __post_init__(self):
        # None puts the socket in plain blocking mode
        self.socket.settimeout(self.read_timeout)

    @property
    def client_ip(self) -> str:
        """Get the client IP address."""
        return self.address[0] if self.address else "-"

    @property
    def age(self) -> float:
        """Get connection age in seconds."""
        return time.time() - self.created_at

    # =========================================================================
    # READING
    # =========================================================================

    def lines(self) -> LineReader:
        """
        Return the line reader for this connection.

        The same reader is returned on every call: the byte stream can
        only be consumed once.
        """
        if self._reader is None:
            self.state = ConnectionState.READING
            self._reader = LineReader(
                self.socket,
                buffer_size=self.buffer_size,
                max_line_length=self.max_line_length,
                connection_id=self.id,
            )
        return self._reader

    # =========================================================================
    # WRITING
    # =========================================================================

    def write(self, data: bytes) -> None:
        """
        Send bytes to the client.

        Raises:
            OSError: If the client went away. The handler treats this as a
                     transport fault and abandons the connection.
        """
        self.state = ConnectionState.WRITING
        self.socket.sendall(data)

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection gracefully.

        1. shutdown(SHUT_WR): send FIN so the client sees end of body
        2. drain whatever the client still sends, for DRAIN_TIMEOUT in total
        3. close(): release the file descriptor
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Already disconnected

        # Bounds the whole drain, not each recv()
        deadline = time.monotonic() + self.DRAIN_TIMEOUT
        try:
            while True:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self.socket.settimeout(remaining)
                if not self.socket.recv(1024):
                    break
        except OSError:
            pass  # Includes socket.timeout

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - the socket is closed on every path."""
        self.close()
        return False

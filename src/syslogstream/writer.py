from __future__ import annotations

import logging
import socket
from typing import Optional, Protocol, runtime_checkable

from . import errors
from .log import get_logger

"""
Buffered TCP writer for syslog receivers.

  - write()/write_byte() only append to an in-memory buffer
  - flush() sends everything written since the last flush as ONE sendall()
  - no framing is added; the caller writes any trailing newline itself
  - no reconnection; a dead writer is replaced by the caller

Not thread-safe: one logical owner per instance. Callers sharing a writer
must hold their own lock around write/flush/close.
"""

_LOG = get_logger(__name__)


@runtime_checkable
class ByteSink(Protocol):
    """Anything that accepts bytes and can flush and close."""

    def write(self, data: bytes) -> None: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...


# This function resolves host to the first TCP address getaddrinfo returns.
def _resolve(host: str, port: int) -> tuple[int, tuple]:
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as e:
        raise errors.ResolutionError(f"cannot resolve {host!r}: {e}") from e
    if not infos:
        raise errors.ResolutionError(f"cannot resolve {host!r}: no addresses")
    family, _type, _proto, _canon, sockaddr = infos[0]
    return family, sockaddr


class BufferedSocketWriter:
    """Accumulate bytes and send them over TCP as one message per flush."""

    def __init__(
        self,
        host: str,
        port: int,
        *,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Resolve ``host`` and connect to (address, port).

        Raises:
            errors.ResolutionError: if the host name cannot be resolved
            errors.ConnectionError: if the connect attempt fails
        """
        self._log = logger or _LOG
        family, sockaddr = _resolve(host, port)

        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.settimeout(timeout)
            sock.connect(sockaddr)
        except OSError as e:
            sock.close()
            raise errors.ConnectionError(
                f"cannot connect to {sockaddr[0]}:{port}: {e}"
            ) from e

        self._address: Optional[str] = sockaddr[0]
        self._port = port
        self._sock: Optional[socket.socket] = sock
        self._output_shutdown = False
        self._buffer = bytearray()

    # ----- byte sink -----

    def write(self, data: bytes, offset: int = 0, length: Optional[int] = None) -> None:
        """Append ``length`` bytes of ``data`` starting at ``offset``. No I/O."""
        view = memoryview(data).cast("B")
        if length is None:
            length = len(view) - offset
        if offset < 0 or length < 0 or offset + length > len(view):
            raise ValueError(
                f"offset={offset}, length={length} out of range for {len(view)} bytes"
            )
        self._buffer += view[offset : offset + length]

    def write_byte(self, value: int) -> None:
        if not 0 <= value <= 255:
            raise ValueError(f"byte value must be in 0..255, got {value}")
        self._buffer.append(value)

    def flush(self) -> None:
        """
        Send all pending bytes as a single payload.

        Empty buffer: no I/O. Dead connection: ConnectionLostError and the
        buffer is left as is. Otherwise the buffer is emptied BEFORE sending,
        so a failed send loses that message.

        Raises:
            errors.ConnectionLostError: connection closed, shut down or not connected
            errors.TransmissionError: connection-level failure during send
            OSError: any other I/O failure during send, re-raised unchanged
        """
        snapshot = bytes(self._buffer)
        if not snapshot:
            return

        sock = self._healthy_socket()
        if sock is None:
            self._log.error(
                "Lost connection to %s:%s (%d bytes pending)",
                self._address,
                self._port,
                len(snapshot),
            )
            raise errors.ConnectionLostError(
                f"connection to port {self._port} is not usable"
            )

        # in flight from here on; later writes go to a fresh buffer
        self._buffer = bytearray()

        try:
            sock.sendall(snapshot)
        except ConnectionError as e:
            self._log.error(
                "Socket error while writing to %s:%s: %s", self._address, self._port, e
            )
            raise errors.TransmissionError(f"send to port {self._port} failed: {e}") from e
        except OSError as e:
            self._log.error(
                "I/O error while writing to %s:%s: %s", self._address, self._port, e
            )
            raise

    def close(self) -> None:
        self._address = None
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None

    # ----- connection -----

    # This function returns the socket if it is open, writable and connected, else None.
    def _healthy_socket(self) -> Optional[socket.socket]:
        sock = self._sock
        if sock is None or sock.fileno() == -1 or self._output_shutdown:
            return None
        try:
            sock.getpeername()
        except OSError:
            return None
        return sock

    def shutdown_output(self) -> None:
        """Half-close the connection for writing. Later flushes fail."""
        if self._sock is None:
            raise errors.ConnectionError("no open connection")
        self._sock.shutdown(socket.SHUT_WR)
        self._output_shutdown = True

    @property
    def port(self) -> int:
        return self._port

    def get_port(self) -> int:
        return self._port

    @property
    def address(self) -> Optional[str]:
        """Resolved address; None once closed."""
        return self._address

    @property
    def pending(self) -> int:
        """Number of bytes written since the last flush."""
        return len(self._buffer)

    @property
    def closed(self) -> bool:
        return self._sock is None

    def get_send_buffer_size(self) -> int:
        """SO_SNDBUF of the connection. Diagnostic only."""
        if self._sock is None:
            raise errors.ConnectionError("no open connection")
        return self._sock.getsockopt(socket.SOL_SOCKET, socket.SO_SNDBUF)

    def __enter__(self) -> "BufferedSocketWriter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<BufferedSocketWriter {self._address}:{self._port} {state}>"


__all__ = ["BufferedSocketWriter", "ByteSink"]

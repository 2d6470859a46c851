from __future__ import annotations

"""
Error taxonomy for the buffered syslog transport.

Everything derives from OSError so code that already guards socket I/O with
``except OSError`` (logging.Handler.handleError callers, for instance) keeps
catching these.
"""


class TransportError(OSError):
    """Base class for all syslogstream transport errors."""


class ResolutionError(TransportError):
    """The host name could not be resolved to a network address."""


class ConnectionError(TransportError):  # noqa: A001
    """The initial connect failed, or no connection is open."""


class ConnectionLostError(TransportError):
    """The connection was found closed/shut down before sending.

    Pending bytes are kept; the writer must be replaced.
    """


class TransmissionError(TransportError):
    """The send failed at the connection level. The flushed bytes are lost."""


__all__ = [
    "TransportError",
    "ResolutionError",
    "ConnectionError",
    "ConnectionLostError",
    "TransmissionError",
]

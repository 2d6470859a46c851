from __future__ import annotations

import logging
from typing import Callable, Optional

from .config import SyslogConfig
from .format import Facility, format_message, severity_for_level
from .log import get_logger
from .writer import BufferedSocketWriter, ByteSink

"""
logging.Handler on top of BufferedSocketWriter.

One LogRecord == one write + one flush == one message on the wire.
The writer is opened lazily and dropped after any transport error; the next
record opens a fresh connection. Handler.lock serialises access to it.
"""

_LOG = get_logger(__name__)

WriterFactory = Callable[[str, int], ByteSink]


class SyslogStreamHandler(logging.Handler):
    def __init__(
        self,
        host: str,
        port: int = 514,
        *,
        facility: int = Facility.USER,
        tag: Optional[str] = None,
        hostname: Optional[str] = None,
        timeout: Optional[float] = None,
        level: int = logging.NOTSET,
        writer_factory: Optional[WriterFactory] = None,
    ) -> None:
        super().__init__(level=level)
        self.host = host
        self.port = port
        self.facility = facility
        self.tag = tag
        self.hostname = hostname
        self.timeout = timeout
        self._writer_factory = writer_factory or self._open_writer
        self._writer: Optional[ByteSink] = None

    @classmethod
    def from_config(cls, cfg: SyslogConfig, **kwargs) -> "SyslogStreamHandler":
        return cls(
            cfg.host,
            cfg.port,
            facility=cfg.facility,
            tag=cfg.tag,
            hostname=cfg.hostname,
            timeout=cfg.timeout,
            **kwargs,
        )

    def _open_writer(self, host: str, port: int) -> ByteSink:
        return BufferedSocketWriter(host, port, timeout=self.timeout, logger=_LOG)

    def _drop_writer(self) -> None:
        writer, self._writer = self._writer, None
        if writer is not None:
            try:
                writer.close()
            except OSError as e:
                _LOG.warning("error closing writer for %s:%s: %s", self.host, self.port, e)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = format_message(
                self.format(record),
                facility=self.facility,
                severity=severity_for_level(record.levelno),
                hostname=self.hostname,
                tag=self.tag,
            )
            if self._writer is None:
                self._writer = self._writer_factory(self.host, self.port)
            self._writer.write(payload)
            self._writer.flush()
        except OSError:
            self._drop_writer()
            self.handleError(record)
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.acquire()
        try:
            self._drop_writer()
        finally:
            self.release()
        super().close()

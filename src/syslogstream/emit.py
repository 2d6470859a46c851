from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, Optional

from .format import Facility, Severity, format_message
from .log import get_logger
from .writer import ByteSink

"""
Emitter
- Frames each text line as one syslog message
- One write + one flush per line (flush boundary == message boundary)
- Blank lines are skipped; transport errors propagate to the caller
"""

_LOG = get_logger(__name__)


# This function sends every non-blank line as its own message and returns how many were sent.
def emit_lines(
    sink: ByteSink,
    lines: Iterable[str],
    *,
    facility: int = Facility.USER,
    severity: int = Severity.INFO,
    hostname: Optional[str] = None,
    tag: Optional[str] = None,
    now_fn: Callable[[], datetime] = datetime.now,
) -> int:
    sent = 0
    for line in lines:
        text = line.rstrip("\r\n")
        if not text.strip():
            continue
        payload = format_message(
            text,
            facility=facility,
            severity=severity,
            hostname=hostname,
            tag=tag,
            when=now_fn(),
        )
        sink.write(payload)
        sink.flush()
        sent += 1
    _LOG.debug("sent %d message(s)", sent)
    return sent

from __future__ import annotations

import logging
import socket
from datetime import datetime
from enum import IntEnum
from typing import Optional

"""
Formatter (RFC 3164 style)

- Output: b"<PRI>Mmm dd HH:MM:SS HOSTNAME TAG: MSG\\n"
- PRI = facility * 8 + severity
- Exactly one line per message: embedded newlines become spaces and the
  trailing newline is always present (TCP receivers split on it)
"""

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class Facility(IntEnum):
    KERN = 0
    USER = 1
    MAIL = 2
    DAEMON = 3
    AUTH = 4
    SYSLOG = 5
    LPR = 6
    NEWS = 7
    UUCP = 8
    CRON = 9
    AUTHPRIV = 10
    FTP = 11
    NTP = 12
    AUDIT = 13
    ALERT = 14
    CLOCK = 15
    LOCAL0 = 16
    LOCAL1 = 17
    LOCAL2 = 18
    LOCAL3 = 19
    LOCAL4 = 20
    LOCAL5 = 21
    LOCAL6 = 22
    LOCAL7 = 23


class Severity(IntEnum):
    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7


def priority(facility: int, severity: int) -> int:
    return int(facility) * 8 + int(severity)


# This function maps a Python logging level onto the nearest syslog severity.
def severity_for_level(levelno: int) -> Severity:
    if levelno >= logging.CRITICAL:
        return Severity.CRITICAL
    if levelno >= logging.ERROR:
        return Severity.ERROR
    if levelno >= logging.WARNING:
        return Severity.WARNING
    if levelno >= logging.INFO:
        return Severity.INFO
    return Severity.DEBUG


# This function renders the RFC 3164 timestamp, e.g. "Oct  1 09:05:03".
def format_timestamp(when: datetime) -> str:
    return f"{_MONTHS[when.month - 1]} {when.day:2d} {when:%H:%M:%S}"


def format_message(
    msg: str,
    *,
    facility: int = Facility.USER,
    severity: int = Severity.INFO,
    hostname: Optional[str] = None,
    tag: Optional[str] = None,
    when: Optional[datetime] = None,
) -> bytes:
    """Frame one log message, ready to be written and flushed as a unit."""
    when = when or datetime.now()
    hostname = hostname or socket.gethostname() or "-"
    body = msg.rstrip("\r\n").replace("\r\n", " ").replace("\n", " ").replace("\r", " ")
    prefix = f"{tag}: " if tag else ""
    line = f"<{priority(facility, severity)}>{format_timestamp(when)} {hostname} {prefix}{body}\n"
    return line.encode("utf-8")


__all__ = [
    "Facility",
    "Severity",
    "priority",
    "severity_for_level",
    "format_timestamp",
    "format_message",
]

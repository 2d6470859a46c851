from __future__ import annotations

import logging
import socket
from typing import List

import pytest


# Loopback TCP listener standing in for a syslog receiver.
class Listener:
    def __init__(self) -> None:
        self.server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.server.bind(("127.0.0.1", 0))
        self.server.listen(4)
        self.server.settimeout(5.0)
        self.port: int = self.server.getsockname()[1]
        self.conns: List[socket.socket] = []

    def accept(self) -> socket.socket:
        conn, _ = self.server.accept()
        conn.settimeout(5.0)
        self.conns.append(conn)
        return conn

    @staticmethod
    def read_until_eof(conn: socket.socket) -> bytes:
        chunks = []
        while True:
            chunk = conn.recv(4096)
            if not chunk:
                return b"".join(chunks)
            chunks.append(chunk)

    def close(self) -> None:
        for c in self.conns:
            c.close()
        self.server.close()


@pytest.fixture
def listener():
    lst = Listener()
    yield lst
    lst.close()


# A port on loopback with nothing listening on it.
@pytest.fixture
def dead_port() -> int:
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port


# Propagating logger so caplog sees the writer's diagnostics.
@pytest.fixture
def diag_logger() -> logging.Logger:
    logger = logging.getLogger("tests.diagnostics")
    logger.setLevel(logging.DEBUG)
    logger.propagate = True
    return logger


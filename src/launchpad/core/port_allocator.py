"""Port allocation for local deploys by connection check."""

from __future__ import annotations

import logging
import socket
from collections.abc import Collection

from launchpad.core.errors import NoFreePortAvailable

logger = logging.getLogger(__name__)

DEFAULT_PORT_RANGE_START = 8001
DEFAULT_PORT_RANGE_END = 8100


class PortAllocator:
    """Find the first candidate port nothing is listening on.

    Probing connects rather than binds: a test bind was observed to succeed
    even when another process already held the port. A port reported free
    can still be taken before the deploy binds it.
    """

    def __init__(
        self,
        start: int = DEFAULT_PORT_RANGE_START,
        end: int = DEFAULT_PORT_RANGE_END,
        *,
        host: str = "127.0.0.1",
        connect_timeout: float = 1.0,
    ) -> None:
        if start >= end:
            msg = f"Empty port range: {start}-{end}"
            raise ValueError(msg)
        self._start = start
        self._end = end
        self._host = host
        self._connect_timeout = connect_timeout

    @property
    def port_range(self) -> range:
        return range(self._start, self._end)

    def find_free_port(self, exclude: Collection[int] = ()) -> int:
        for port in self.port_range:
            if port in exclude:
                continue
            if not self.is_listening(port):
                logger.debug("Port %d appears free", port)
                return port
        raise NoFreePortAvailable(self._start, self._end)

    def is_listening(self, port: int) -> bool:
        try:
            conn = socket.create_connection((self._host, port), timeout=self._connect_timeout)
        except OSError:
            return False
        conn.close()
        return True

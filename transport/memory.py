"""In-process transport used by tests and single-process setups."""

from typing import List, Optional, Tuple

from transport.base import DatagramCallback, Endpoint
from utils.exceptions import TransportUnavailableError


class MemoryTransport:
    """
    Transport that never opens a socket.
    
    - Records every send in ``sent``
    - ``inject()`` delivers a payload to ``on_datagram`` as if received
    - With ``loopback=True`` every send is also delivered back to itself
    - ``fail_start=True`` makes start() fail like a socket that cannot bind
    """
    
    def __init__(self, loopback: bool = False, fail_start: bool = False):
        self.loopback = loopback
        self.fail_start = fail_start
        self.sent: List[Tuple[Endpoint, bytes]] = []
        self.on_datagram: Optional[DatagramCallback] = None
        self.bind_address: Optional[str] = None
        self.port: Optional[int] = None
        self.broadcast_enabled = False
        self.start_count = 0
        self._running = False
    
    @property
    def is_running(self) -> bool:
        return self._running
    
    def configure(self, bind_address: str, port: int, broadcast_enabled: bool) -> None:
        self.bind_address = bind_address
        self.port = port
        self.broadcast_enabled = broadcast_enabled
    
    def start(self) -> None:
        if self.fail_start:
            raise TransportUnavailableError(
                f"Cannot bind {self.bind_address}:{self.port}"
            )
        if not self._running:
            self.start_count += 1
        self._running = True
    
    def stop(self) -> None:
        self._running = False
    
    def send(self, endpoint: Endpoint, payload: bytes) -> None:
        if not self._running:
            raise TransportUnavailableError("Memory transport is not started")
        self.sent.append((endpoint, payload))
        if self.loopback:
            self.inject(payload)
    
    # ---- helpers for tests / harness ----
    
    def inject(self, payload: bytes) -> None:
        """Deliver a payload to the receive callback, if one is attached."""
        callback = self.on_datagram
        if callback is not None:
            callback(payload)

"""Transport adapter interface.

A transport owns a datagram socket (or a stand-in for one), sends raw
payloads to an endpoint, and hands every received payload to its
``on_datagram`` callback from its own receive context.
"""

from typing import Callable, Optional, Protocol, Tuple, runtime_checkable


Endpoint = Tuple[str, int]
DatagramCallback = Callable[[bytes], None]


@runtime_checkable
class Transport(Protocol):
    """Best-effort datagram transport."""
    
    on_datagram: Optional[DatagramCallback]
    
    @property
    def is_running(self) -> bool: ...
    
    def configure(self, bind_address: str, port: int, broadcast_enabled: bool) -> None: ...
    def start(self) -> None: ...
    def stop(self) -> None: ...
    def send(self, endpoint: Endpoint, payload: bytes) -> None: ...

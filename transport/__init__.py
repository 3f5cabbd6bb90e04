"""Transport adapters for sending and receiving raw datagrams."""

from transport.base import Transport, Endpoint, DatagramCallback
from transport.udp import UdpBroadcastTransport
from transport.memory import MemoryTransport

__all__ = [
    'Transport',
    'Endpoint',
    'DatagramCallback',
    'UdpBroadcastTransport',
    'MemoryTransport',
]

from __future__ import annotations

import threading

import pytest

from protocol.encoding import decode_message, encode_message
from protocol.messages import Message
from transport.udp import UdpBroadcastTransport
from utils.exceptions import TransportUnavailableError


def test_send_and_receive_on_localhost() -> None:
    transport = UdpBroadcastTransport(bind_address="127.0.0.1", port=0, broadcast_enabled=False)
    got = []
    arrived = threading.Event()

    def on_datagram(payload: bytes) -> None:
        got.append(payload)
        arrived.set()

    transport.on_datagram = on_datagram
    transport.start()
    try:
        payload = encode_message(Message.build("/foo", [1, 2.5, "bar"]))
        transport.send(transport.local_address, payload)
        assert arrived.wait(timeout=2.0)
    finally:
        transport.stop()

    assert decode_message(got[0]) == Message.build("/foo", [1, 2.5, "bar"])
    assert not transport.is_running


def test_send_before_start_raises() -> None:
    transport = UdpBroadcastTransport(bind_address="127.0.0.1", port=0)
    with pytest.raises(TransportUnavailableError):
        transport.send(("127.0.0.1", 9), b"/x")


def test_bind_failure_raises_transport_unavailable() -> None:
    transport = UdpBroadcastTransport()
    transport.configure("256.256.256.256", 9000, True)

    with pytest.raises(TransportUnavailableError):
        transport.start()
    assert not transport.is_running


def test_stop_is_idempotent() -> None:
    transport = UdpBroadcastTransport(bind_address="127.0.0.1", port=0)
    transport.start()
    transport.stop()
    transport.stop()
    assert not transport.is_running

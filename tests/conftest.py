from __future__ import annotations

import pytest

from config.settings import MessengerConfig
from messenger.messenger import Messenger
from transport.memory import MemoryTransport


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def transport() -> MemoryTransport:
    return MemoryTransport(loopback=True)


@pytest.fixture
def messenger(transport: MemoryTransport, clock: FakeClock):
    m = Messenger(MessengerConfig(), transport=transport, clock=clock)
    m.enable()
    yield m
    m.close()


@pytest.fixture
def received(messenger: Messenger):
    """Commands delivered to a handler registered on the messenger fixture."""
    out = []
    messenger.on_message(lambda command, args: out.append((command, args)))
    return out

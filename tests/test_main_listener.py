from __future__ import annotations

import asyncio

import pytest

from main_listener import ListenerApplication
from protocol.encoding import encode_message
from protocol.messages import Message
from transport.memory import MemoryTransport


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("MESSENGER_PORT", "MESSENGER_TICK_INTERVAL", "MESSENGER_USE_ADDRESS_ROOT"):
        monkeypatch.delenv(name, raising=False)


def test_listener_ticks_until_shutdown_then_closes() -> None:
    transport = MemoryTransport()
    payload = encode_message(Message.build("/cue", [3]))
    commands = []

    async def scenario() -> ListenerApplication:
        app = ListenerApplication(transport=transport)

        def on_command(command, args):
            commands.append((command, args))
            app.shutdown_event.set()

        app.log_command = on_command

        async def feed() -> None:
            while transport.on_datagram is None:
                await asyncio.sleep(0.001)
            for _ in range(5):
                transport.inject(payload)

        feeder = asyncio.create_task(feed())
        await asyncio.wait_for(app.run(), timeout=5.0)
        await feeder
        return app

    app = asyncio.run(scenario())

    assert commands == [("cue", (3,))]
    assert not transport.is_running
    assert not app.messenger.is_running


def test_listener_stops_on_signal_before_any_traffic() -> None:
    transport = MemoryTransport()

    async def scenario() -> None:
        app = ListenerApplication(transport=transport)
        asyncio.get_running_loop().call_later(0.05, app.handle_shutdown, 15, None)
        await asyncio.wait_for(app.run(), timeout=5.0)

    asyncio.run(scenario())

    assert transport.start_count == 1
    assert not transport.is_running


def test_listener_exits_when_transport_cannot_start() -> None:
    async def scenario() -> None:
        app = ListenerApplication(transport=MemoryTransport(fail_start=True))
        await app.run()

    with pytest.raises(SystemExit) as exc:
        asyncio.run(scenario())
    assert exc.value.code == 1

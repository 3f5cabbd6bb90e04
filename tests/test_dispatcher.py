from __future__ import annotations

import logging

import pytest

from messenger.dispatcher import Dispatcher
from protocol.messages import Message
from utils.exceptions import MalformedAddressError


@pytest.mark.parametrize(
    "address,expected",
    [
        ("/move", "move"),
        ("/move/x", "move"),
        ("//move", "move"),
        ("/move/", "move"),
    ],
)
def test_parse_command_takes_first_segment(address: str, expected: str) -> None:
    assert Dispatcher().parse_command(address) == expected


@pytest.mark.parametrize("address", ["", "/", "//", "move"])
def test_parse_command_rejects_addresses_without_segment(address: str) -> None:
    with pytest.raises(MalformedAddressError) as exc:
        Dispatcher().parse_command(address)
    assert exc.value.address == address


def test_dispatch_calls_handler_with_command_and_values() -> None:
    d = Dispatcher()
    calls = []
    d.add_handler(lambda command, args: calls.append((command, args)))

    assert d.dispatch(Message.build("/move", [1, 2.5, "bar"]))
    assert calls == [("move", (1, 2.5, "bar"))]


def test_malformed_address_raises_and_calls_no_handler() -> None:
    d = Dispatcher()
    calls = []
    d.add_handler(lambda command, args: calls.append(command))

    with pytest.raises(MalformedAddressError):
        d.dispatch(Message(address=""))
    assert calls == []


def test_handler_exception_does_not_stop_other_handlers(caplog) -> None:
    d = Dispatcher()
    calls = []

    def broken(command, args):
        raise RuntimeError("boom")

    d.add_handler(broken)
    d.add_handler(lambda command, args: calls.append(command))

    with caplog.at_level(logging.ERROR):
        assert d.dispatch(Message.build("/go"))

    assert calls == ["go"]
    assert "boom" in caplog.text


def test_handlers_run_in_registration_order_and_register_once() -> None:
    d = Dispatcher()
    calls = []

    def first(command, args):
        calls.append("first")

    def second(command, args):
        calls.append("second")

    d.add_handler(first)
    d.add_handler(second)
    d.add_handler(first)
    d.dispatch(Message.build("/go"))

    assert calls == ["first", "second"]


def test_removed_handler_is_not_called() -> None:
    d = Dispatcher()
    calls = []

    def handler(command, args):
        calls.append(command)

    d.add_handler(handler)
    d.remove_handler(handler)
    d.remove_handler(handler)
    d.dispatch(Message.build("/go"))

    assert calls == []
    assert d.handlers == ()


def test_address_root_is_stripped() -> None:
    d = Dispatcher(address_root="/oscmessenger")
    calls = []
    d.add_handler(lambda command, args: calls.append(command))

    assert d.dispatch(Message.build("/oscmessenger/move/x", [1]))
    assert calls == ["move"]


def test_messages_outside_address_root_are_ignored() -> None:
    d = Dispatcher(address_root="/oscmessenger/")
    calls = []
    d.add_handler(lambda command, args: calls.append(command))

    assert not d.dispatch(Message.build("/move"))
    assert not d.dispatch(Message.build("/oscmessengerx/move"))
    assert calls == []


def test_address_root_without_command_is_malformed() -> None:
    with pytest.raises(MalformedAddressError):
        Dispatcher(address_root="/oscmessenger").parse_command("/oscmessenger")

from __future__ import annotations

import pytest

from messenger.sender import RedundantSender
from protocol.encoding import decode_message
from protocol.messages import Message
from transport.memory import MemoryTransport
from utils.exceptions import ConfigurationError, MalformedAddressError, TransportUnavailableError

ENDPOINT = ("255.255.255.255", 9000)


@pytest.fixture
def started() -> MemoryTransport:
    t = MemoryTransport()
    t.start()
    return t


def test_send_issues_exactly_k_identical_datagrams(started: MemoryTransport) -> None:
    RedundantSender(started, ENDPOINT).send("foo", 1, 2.5, "bar")

    assert len(started.sent) == 5
    for endpoint, payload in started.sent:
        assert endpoint == ENDPOINT
        assert decode_message(payload) == Message.build("/foo", [1, 2.5, "bar"])
    assert len({payload for _, payload in started.sent}) == 1


@pytest.mark.parametrize("k", [1, 3, 10])
def test_redundancy_is_configurable(started: MemoryTransport, k: int) -> None:
    RedundantSender(started, ENDPOINT, redundancy=k).send("ping")
    assert len(started.sent) == k


def test_non_primitive_args_are_sent_as_strings(started: MemoryTransport) -> None:
    RedundantSender(started, ENDPOINT, redundancy=1).send("set", True, None, (1, 2))

    decoded = decode_message(started.sent[0][1])
    assert decoded.values() == ("True", "None", "(1, 2)")


def test_address_root_prefixes_command(started: MemoryTransport) -> None:
    RedundantSender(started, ENDPOINT, redundancy=1, address_root="/oscmessenger").send("move", 1)

    assert decode_message(started.sent[0][1]).address == "/oscmessenger/move"


def test_leading_delimiter_in_command_is_not_doubled(started: MemoryTransport) -> None:
    sender = RedundantSender(started, ENDPOINT)
    assert sender.build_message("/move").address == "/move"


@pytest.mark.parametrize("command", ["", "/"])
def test_empty_command_is_rejected_before_sending(started: MemoryTransport, command: str) -> None:
    with pytest.raises(MalformedAddressError):
        RedundantSender(started, ENDPOINT).send(command)
    assert started.sent == []


def test_send_on_stopped_transport_raises() -> None:
    with pytest.raises(TransportUnavailableError):
        RedundantSender(MemoryTransport(), ENDPOINT).send("foo")


def test_redundancy_must_be_positive() -> None:
    with pytest.raises(ConfigurationError):
        RedundantSender(MemoryTransport(), ENDPOINT, redundancy=0)

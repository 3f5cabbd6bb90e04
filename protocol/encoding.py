"""Message encoding and decoding functions (OSC wire format)."""

from typing import Any

from pythonosc.osc_message import OscMessage, ParseError
from pythonosc.osc_message_builder import BuildError, OscMessageBuilder

from protocol.arguments import Arg, FloatArg, IntArg, StringArg
from protocol.constants import INT32_MAX, INT32_MIN
from protocol.messages import Message
from utils.exceptions import DecodeError, EncodeError


def encode_message(message: Message) -> bytes:
    """
    Encode a message to an OSC datagram.

    Each argument is written with its own type tag, so ints stay ints and
    floats travel as 32-bit OSC floats. Ints that do not fit in 32 bits
    are written as OSC int64 ('h').

    Raises:
        EncodeError: If the message cannot be represented as OSC
            (e.g. empty address, integer outside the 64-bit range)
    """
    builder = OscMessageBuilder(address=message.address)
    for arg in message.args:
        builder.add_arg(arg.value, arg_type=_wire_type(arg))
    try:
        return builder.build().dgram
    except BuildError as e:
        raise EncodeError(f"Cannot encode message {message.address!r}: {e}") from e


def decode_message(data: bytes) -> Message:
    """
    Decode an OSC datagram back to a message.

    Raises:
        DecodeError: If the bytes are not an OSC message, or carry an
            argument type other than int, float or string
    """
    if not OscMessage.dgram_is_message(data):
        raise DecodeError(f"Datagram of {len(data)} bytes is not an OSC message")
    try:
        osc_message = OscMessage(data)
    except ParseError as e:
        raise DecodeError(f"Invalid OSC message: {e}") from e

    args = tuple(_decode_arg(osc_message.address, value) for value in osc_message.params)
    return Message(address=osc_message.address, args=args)


def _wire_type(arg: Arg) -> str:
    if isinstance(arg, IntArg) and not INT32_MIN <= arg.value <= INT32_MAX:
        return OscMessageBuilder.ARG_TYPE_INT64
    return arg.type_tag.value


def _decode_arg(address: str, value: Any) -> Arg:
    # OSC booleans decode to Python bools, which are also ints
    if isinstance(value, bool):
        raise DecodeError(f"Unsupported boolean argument in {address!r}")
    # 'i' and 'h' both decode to int
    if isinstance(value, int):
        return IntArg(value)
    if isinstance(value, float):
        return FloatArg(value)
    if isinstance(value, str):
        return StringArg(value)
    raise DecodeError(
        f"Unsupported argument type {type(value).__name__} in {address!r}"
    )

"""Protocol module for argument types, messages and OSC encoding."""

from protocol.constants import (
    ADDRESS_DELIMITER,
    DEFAULT_BROADCAST_ADDRESS,
    DEFAULT_PORT,
    DEFAULT_ADDRESS_ROOT,
)
from protocol.arguments import (
    ArgType,
    IntArg,
    FloatArg,
    StringArg,
    Arg,
    Primitive,
    to_arg,
    args_equal,
)
from protocol.encoding import encode_message, decode_message
from protocol.messages import Message, Command, TimestampedMessage

__all__ = [
    'ADDRESS_DELIMITER',
    'DEFAULT_BROADCAST_ADDRESS',
    'DEFAULT_PORT',
    'DEFAULT_ADDRESS_ROOT',
    'ArgType',
    'IntArg',
    'FloatArg',
    'StringArg',
    'Arg',
    'Primitive',
    'to_arg',
    'args_equal',
    'encode_message',
    'decode_message',
    'Message',
    'Command',
    'TimestampedMessage',
]

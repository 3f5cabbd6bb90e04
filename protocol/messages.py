"""Message structure definitions."""

from dataclasses import dataclass, field
from typing import Any, Iterable, Tuple

from protocol.arguments import Arg, Primitive, to_arg


@dataclass(frozen=True)
class Message:
    """A command message: an address plus an ordered argument list."""

    address: str
    args: Tuple[Arg, ...] = field(default_factory=tuple)

    @classmethod
    def build(cls, address: str, values: Iterable[Any] = ()) -> 'Message':
        """
        Build a message from plain Python values.

        Args:
            address: Wire address, e.g. "/move"
            values: Argument values, wrapped with ``to_arg``

        Returns:
            New Message instance
        """
        return cls(address=address, args=tuple(to_arg(value) for value in values))

    def values(self) -> Tuple[Primitive, ...]:
        """Return the plain argument values in order."""
        return tuple(arg.value for arg in self.args)

    def describe(self) -> str:
        """Render the message as "<address> <arg> <arg> ..." for logging."""
        return ' '.join([self.address] + [str(arg.value) for arg in self.args])


@dataclass(frozen=True)
class Command:
    """A routed command as delivered to handlers."""

    name: str
    args: Tuple[Primitive, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TimestampedMessage:
    """A message and the monotonic time it was accepted."""

    message: Message
    received_at: float

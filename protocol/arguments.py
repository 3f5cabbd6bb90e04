"""Typed command arguments.

Every argument is one of three closed variants, each tied to its OSC
type tag. Dataclass equality compares the variant as well as the value,
so ``IntArg(2) != FloatArg(2.0)``.
"""

from dataclasses import dataclass
from enum import Enum
import math
from typing import Any, ClassVar, Union


class ArgType(str, Enum):
    """OSC type tags for the supported argument variants."""

    INT = 'i'
    FLOAT = 'f'
    STRING = 's'


@dataclass(frozen=True)
class IntArg:
    """Integer argument, sent as int32 or as int64 when out of 32-bit range."""

    value: int
    type_tag: ClassVar[ArgType] = ArgType.INT


@dataclass(frozen=True)
class FloatArg:
    """32-bit float argument."""

    value: float
    type_tag: ClassVar[ArgType] = ArgType.FLOAT


@dataclass(frozen=True)
class StringArg:
    """String argument."""

    value: str
    type_tag: ClassVar[ArgType] = ArgType.STRING


Arg = Union[IntArg, FloatArg, StringArg]
Primitive = Union[int, float, str]

ARG_VARIANTS = (IntArg, FloatArg, StringArg)


def to_arg(value: Any) -> Arg:
    """
    Wrap a Python value in its argument variant.

    ``int`` and ``float`` keep their numeric type. Anything else is
    converted with ``str()`` and sent as a string; this conversion is
    lossy and a receiver gets the text back, not the original object.
    ``bool`` is not treated as an integer and becomes ``"True"`` or
    ``"False"``.

    Args:
        value: Value to wrap, or an existing argument variant

    Returns:
        The argument variant for the value
    """
    if isinstance(value, ARG_VARIANTS):
        return value
    if isinstance(value, bool):
        return StringArg(str(value))
    if isinstance(value, int):
        return IntArg(value)
    if isinstance(value, float):
        return FloatArg(value)
    return StringArg(str(value))


def args_equal(left: Arg, right: Arg, coerce_numeric: bool = False) -> bool:
    """
    Compare two arguments.

    Args:
        left: First argument
        right: Second argument
        coerce_numeric: Treat ints and floats with the same value as equal

    Returns:
        True if the arguments are equal under the chosen policy.
        Two NaN floats are equal under either policy.
    """
    if isinstance(left, FloatArg) and isinstance(right, FloatArg):
        if math.isnan(left.value) and math.isnan(right.value):
            return True
    if coerce_numeric and _is_numeric(left) and _is_numeric(right):
        return left.value == right.value
    return left == right


def _is_numeric(arg: Arg) -> bool:
    return isinstance(arg, (IntArg, FloatArg))

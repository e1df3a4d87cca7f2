"""Route value conversion.

Route values arrive as strings. Before an action argument can be
compared with one, the string is coerced to the parameter's annotated
type. Built-in coercers cover ``str``, ``int``, ``float``, ``bool``,
``Decimal``, ``UUID`` and ``Enum`` subclasses.
"""

import enum
import re
import types
import typing
import uuid
from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from typing import Any


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    msg = f"invalid literal for bool: {value!r}"
    raise ValueError(msg)


_INT = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(r"[+-]?[0-9]+(?:\.[0-9]+)?")


def _parse_int(value: str) -> int:
    if _INT.fullmatch(value) is None:
        msg = f"invalid literal for int: {value!r}"
        raise ValueError(msg)
    return int(value)


def _parse_float(value: str) -> float:
    if _FLOAT.fullmatch(value) is None:
        msg = f"invalid literal for float: {value!r}"
        raise ValueError(msg)
    return float(value)


def _parse_decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        msg = f"invalid literal for Decimal: {value!r}"
        raise ValueError(msg) from None


# python_type -> coercer for each supported route value type
COERCERS: dict[type, Callable[[str], Any]] = {
    str: str,
    int: _parse_int,
    float: _parse_float,
    bool: _parse_bool,
    Decimal: _parse_decimal,
    uuid.UUID: uuid.UUID,
}


def unwrap_optional(annotation: Any) -> Any:
    """Strip ``None`` from ``T | None`` / ``Optional[T]``.

    Unions of several non-None types are returned unchanged.
    """
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def is_string_constructible(target: Any) -> bool:
    """Return True if a raw route string can be converted to *target*."""
    target = unwrap_optional(target)
    if target is Any:
        return True
    if typing.get_origin(target) is not None or not isinstance(target, type):
        return False
    return target in COERCERS or issubclass(target, enum.Enum)


def coerce(value: str, target: Any) -> Any:
    """Convert a route value string to *target*.

    Raises ``ValueError`` if the string cannot be converted.
    Raises ``TypeError`` if *target* is not string-constructible.
    """
    target = unwrap_optional(target)
    if target is Any:
        return value
    if isinstance(target, type) and issubclass(target, enum.Enum):
        return _coerce_enum(value, target)
    try:
        coercer = COERCERS[target]
    except (KeyError, TypeError):
        msg = f"Cannot build {target!r} from a route value"
        raise TypeError(msg) from None
    return coercer(value)


def _coerce_enum(value: str, target: type[enum.Enum]) -> enum.Enum:
    """Match an enum by value first, then by member name (case-insensitive)."""
    for member in target:
        if str(member.value) == value:
            return member
    for member in target:
        if member.name.lower() == value.lower():
            return member
    msg = f"{value!r} is not a valid {target.__name__}"
    raise ValueError(msg)

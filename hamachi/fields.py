"""
Field types for Hamachi models.

A field type answers four questions about the values of a field:

- ``matches(value)``: does the value satisfy the field?
- ``default_value()``: what does the field hold when the snapshot omits it?
- ``decode(data, options)``: how is a raw JSON value turned into the
  in-memory representation?
- ``describe()``: what is the field's printable signature?

``Field`` itself is the primitive variant. It wraps a target type or shape:
a class is matched with ``isinstance``, a compiled regular expression is
searched in strings, a container-like shape such as ``range`` or ``Interval``
is matched by membership and a plain callable is used as a predicate.

Custom field types subclass ``Field`` and override any subset of the four
operations, for example::

    class OddNumber(Field):
        def matches(self, value):
            return super().matches(value) and value % 2 == 1

        def default_value(self):
            return 1

        def describe(self):
            return "odd number"
"""

from __future__ import annotations

import copy
import enum
import numbers
import re
from typing import Any, Mapping, Optional

# Classes that a bool must not satisfy even though bool subclasses int.
_NUMERIC_TYPES = (
    int,
    float,
    complex,
    numbers.Number,
    numbers.Complex,
    numbers.Real,
    numbers.Rational,
    numbers.Integral,
)


class Symbol(str):
    """Identifier form of a string, produced when decoding symbolic values."""

    __slots__ = ()


class Interval:
    """
    Inclusive range shape, usable as a field type.

    ``Interval(1, 100)`` matches any value ``v`` with ``1 <= v <= 100`` and
    prints as ``1..100``. Booleans and values that cannot be compared with
    the bounds never match.
    """

    def __init__(self, low: Any, high: Any):
        self.low = low
        self.high = high

    def __contains__(self, value: Any) -> bool:
        if isinstance(value, bool):
            return False
        try:
            return bool(self.low <= value <= self.high)
        except Exception:
            return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return (self.low, self.high) == (other.low, other.high)

    def __hash__(self) -> int:
        return hash((Interval, self.low, self.high))

    def __str__(self) -> str:
        return f"{self.low}..{self.high}"

    def __repr__(self) -> str:
        return f"Interval({self.low!r}, {self.high!r})"


def same_value(expected: Any, value: Any) -> bool:
    """Exact equality: booleans only ever equal themselves."""
    if isinstance(expected, bool) or isinstance(value, bool):
        return expected is value
    try:
        return bool(expected == value)
    except Exception:
        return False


def as_field(type: Any) -> "Field":
    """Return ``type`` if it already is a field type, else wrap it as a primitive."""
    if isinstance(type, Field):
        return type
    return Field(type)


class Field:
    """Primitive field type wrapping a class, pattern or other shape."""

    def __init__(self, type: Any):
        self.type = type

    def initialize_options(self, options: Mapping[str, Any]) -> "Field":
        """Apply declaration options such as ``empty``; ignored by default."""
        return self

    def matches(self, value: Any) -> bool:
        return _match(self.type, value)

    def default_value(self) -> Any:
        return None

    def decode(self, data: Any, options: Optional[Any] = None) -> Any:
        target = self.type
        if isinstance(target, Field):
            return target.decode(data, options)
        if target is Symbol:
            return Symbol(data) if isinstance(data, str) else data
        if isinstance(target, type):
            if issubclass(target, enum.Enum):
                return _enum_member(target, data)
            from_snapshot = getattr(target, "from_snapshot", None)
            if from_snapshot is not None:
                return from_snapshot(data, options)
        return data

    def describe(self) -> str:
        return _describe(self.type)

    def copy(self) -> "Field":
        return copy.copy(self)

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"


class EnumField(Field):
    """Closed set of allowed values."""

    def __init__(self, *members: Any):
        super().__init__(tuple(members))

    @property
    def members(self) -> tuple:
        return self.type

    def matches(self, value: Any) -> bool:
        return any(same_value(member, value) for member in self.type)

    def decode(self, data: Any, options: Optional[Any] = None) -> Any:
        if not isinstance(data, str):
            return data
        for member in self.type:
            if isinstance(member, enum.Enum) and data in (member.value, member.name):
                return member
        return Symbol(data)

    def describe(self) -> str:
        return f"enum({','.join(_literal(member) for member in self.type)})"


class ListField(Field):
    """Sequence whose elements all match the wrapped field type."""

    def __init__(self, type: Any, empty: bool = True):
        super().__init__(as_field(type))
        self.allow_empty = empty

    def initialize_options(self, options: Mapping[str, Any]) -> "Field":
        if "empty" in options:
            self.allow_empty = bool(options["empty"])
        return self

    def matches(self, value: Any) -> bool:
        if not isinstance(value, (list, tuple)):
            return False
        if not value and not self.allow_empty:
            return False
        return all(self.type.matches(each) for each in value)

    def default_value(self) -> Any:
        return []

    def decode(self, data: Any, options: Optional[Any] = None) -> Any:
        if not isinstance(data, (list, tuple)):
            return data
        return [self.type.decode(each, options) for each in data]

    def describe(self) -> str:
        suffix = "" if self.allow_empty else ", empty: false"
        return f"list({self.type.describe()}{suffix})"


class NullableField(Field):
    """Either ``None`` or a value matching the wrapped field type."""

    def __init__(self, type: Any):
        super().__init__(as_field(type))

    def matches(self, value: Any) -> bool:
        return value is None or self.type.matches(value)

    def decode(self, data: Any, options: Optional[Any] = None) -> Any:
        if data is None:
            return None
        return self.type.decode(data, options)

    def describe(self) -> str:
        return f"nullable({self.type.describe()})"


class PositiveField(Field):
    """Value matching the wrapped type and greater than zero."""

    def __init__(self, type: Any):
        super().__init__(as_field(type))

    def matches(self, value: Any) -> bool:
        return self.type.matches(value) and _compare(value, lambda v: v > 0)

    def describe(self) -> str:
        return f"positive({self.type.describe()})"


class PositiveOrZeroField(PositiveField):
    """Value matching the wrapped type and not negative."""

    def matches(self, value: Any) -> bool:
        return self.type.matches(value) and _compare(value, lambda v: v >= 0)

    def describe(self) -> str:
        return f"positive_or_zero({self.type.describe()})"


Boolean = EnumField(True, False)
Timestamp = re.compile(r"^\d\d\d\d-\d\d-\d\dT\d\d:\d\d:\d\d\.\d\d\dZ$")


def _compare(value: Any, predicate) -> bool:
    try:
        return bool(predicate(value))
    except Exception:
        return False


def _match(target: Any, value: Any) -> bool:
    # Total: a shape or predicate that raises on the value does not match it.
    if isinstance(target, Field):
        return target.matches(value)
    if isinstance(target, type):
        if isinstance(value, bool) and target in _NUMERIC_TYPES:
            return False
        return isinstance(value, target)
    if isinstance(target, re.Pattern):
        return isinstance(value, str) and target.search(value) is not None
    if isinstance(target, (str, bytes)):
        return same_value(target, value)
    if hasattr(target, "__contains__"):
        if isinstance(value, bool) and isinstance(target, range):
            return False
        try:
            return bool(value in target)
        except Exception:
            return False
    if callable(target):
        try:
            return bool(target(value))
        except Exception:
            return False
    return same_value(target, value)


def _describe(target: Any) -> str:
    if isinstance(target, Field):
        return target.describe()
    if isinstance(target, type):
        from .model import Model

        if issubclass(target, Model):
            return target.describe()
        return target.__name__
    if isinstance(target, re.Pattern):
        return f"/{target.pattern}/"
    if isinstance(target, (str, bytes)):
        return repr(target)
    if callable(target) and hasattr(target, "__name__"):
        return target.__name__
    return str(target)


def _literal(member: Any) -> str:
    if isinstance(member, enum.Enum):
        return f"{type(member).__name__}.{member.name}"
    return repr(member)


def _enum_member(enum_class: type, data: Any) -> Any:
    if isinstance(data, enum_class):
        return data
    for member in enum_class:
        if same_value(member.value, data) or member.name == data:
            return member
    return data

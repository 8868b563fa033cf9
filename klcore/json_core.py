"""Core JSON value helpers: errors, views, contexts, type checks and parsing.

JSON values are plain Python objects: ``None``, ``bool``, ``int``, ``float``,
``str``, ``list`` and ``dict`` with string keys.
"""

from __future__ import annotations

import json
from typing import Any

_INT64_MIN = -(2**63)
_UINT64_MAX = 2**64 - 1

_MISSING = object()


class DeserializeError(Exception):
    """Raised when a JSON value cannot be converted to the requested type.

    Context is accumulated with :meth:`add`; each added message goes on its
    own line after the original one.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.messages = str(message)

    def add(self, message: str) -> DeserializeError:
        """Append a line of context to the error message."""
        self.messages = f"{self.messages}\n{message}"
        self.args = (self.messages,)
        return self

    def __str__(self) -> str:
        return self.messages


class ParseError(Exception):
    """Raised when text is not a valid JSON document."""


class View:
    """A non-owning reference to a JSON value, possibly empty."""

    __slots__ = ("_value",)

    def __init__(self, value: Any = _MISSING) -> None:
        self._value = value

    @property
    def value(self) -> Any:
        """The referenced JSON value."""
        if self._value is _MISSING:
            raise ValueError("view does not reference a value")
        return self._value

    def __bool__(self) -> bool:
        return self._value is not _MISSING

    def __eq__(self, other: object) -> bool:
        if isinstance(other, View):
            return self._value is other._value or (
                bool(self) and bool(other) and self._value == other._value
            )
        return NotImplemented

    def __repr__(self) -> str:
        if not self:
            return "View()"
        return f"View({self._value!r})"


def is_null_value(value: Any) -> bool:
    """Return True if ``value`` represents an absent optional."""
    return value is None


class _Context:
    def __init__(self, skip_null_fields: bool = True) -> None:
        self.skip_null_fields = skip_null_fields

    def skip_field(self, key: Any, value: Any) -> bool:
        """Return True if the field should be left out of the output."""
        return self.skip_null_fields and is_null_value(value)


class SerializeContext(_Context):
    """Context used when building JSON values."""

    def __init__(self, skip_null_fields: bool = True) -> None:
        super().__init__(skip_null_fields)

    def skip_field(self, key: Any, value: Any) -> bool:
        return super().skip_field(key, value)


class DumpContext(_Context):
    """Context used when writing JSON text."""

    def __init__(self, skip_null_fields: bool = True) -> None:
        super().__init__(skip_null_fields)

    def skip_field(self, key: Any, value: Any) -> bool:
        return super().skip_field(key, value)


def at(container: Any, key: Any) -> Any:
    """Safely get an element of a JSON array or a member of a JSON object.

    A missing member or an out-of-bounds index yields ``None`` (JSON null).
    """
    if isinstance(container, list):
        if isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(container):
            return container[key]
        return None
    if isinstance(container, dict):
        return container.get(key)
    raise TypeError("container must be a JSON array or object")


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not _is_bool(value)


def _is_integral(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not _is_bool(value)
        and _INT64_MIN <= value <= _UINT64_MAX
    )


def type_name(value: Any) -> str:
    """Return the JSON type name of ``value``."""
    if value is None:
        return "Null"
    if value is True:
        return "True"
    if value is False:
        return "False"
    if isinstance(value, dict):
        return "Object"
    if isinstance(value, list):
        return "Array"
    if isinstance(value, str):
        return "String"
    if _is_number(value):
        return "Number"
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def _fail(expected: str, value: Any) -> DeserializeError:
    return DeserializeError(f"type must be {expected} but is a {type_name(value)}")


def expect_integral(value: Any) -> None:
    """Raise DeserializeError unless ``value`` is an integral number."""
    if not _is_integral(value):
        raise _fail("an integral", value)


def expect_number(value: Any) -> None:
    """Raise DeserializeError unless ``value`` is a number."""
    if not _is_number(value):
        raise _fail("a number", value)


def expect_boolean(value: Any) -> None:
    """Raise DeserializeError unless ``value`` is a boolean."""
    if not _is_bool(value):
        raise _fail("a boolean", value)


def expect_string(value: Any) -> None:
    """Raise DeserializeError unless ``value`` is a string."""
    if not isinstance(value, str):
        raise _fail("a string", value)


def expect_object(value: Any) -> None:
    """Raise DeserializeError unless ``value`` is an object."""
    if not isinstance(value, dict):
        raise _fail("an object", value)


def expect_array(value: Any) -> None:
    """Raise DeserializeError unless ``value`` is an array."""
    if not isinstance(value, list):
        raise _fail("an array", value)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid value: {name}")


def parse(text: str | bytes) -> Any:
    """Parse a JSON document, raising ParseError if it is invalid."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError) as exc:
        raise ParseError(str(exc)) from exc
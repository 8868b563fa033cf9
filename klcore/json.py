"""Type-directed conversion between Python objects and JSON values.

Serialization turns Python objects into plain JSON values (``None``,
``bool``, ``int``, ``float``, ``str``, ``list``, ``dict``). Deserialization
takes a target type (built-ins, ``list[T]``, ``dict[str, T]``,
``tuple[...]``, ``T | None``, dataclasses, enums, flags, :class:`View` or a
type with a registered serializer) and builds an instance from a JSON value.

Dataclasses used as deserialization targets must carry real type objects
as field annotations, not postponed (string) annotations.
"""

from __future__ import annotations

import collections
import collections.abc
import copy
import dataclasses
import enum
import functools
import json as _json
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, Optional

from klcore.json_core import (
    DeserializeError,
    DumpContext,
    SerializeContext,
    View,
    at,
    expect_array,
    expect_boolean,
    expect_integral,
    expect_number,
    expect_object,
    expect_string,
    type_name,
)

__all__ = [
    "ArrayBuilder",
    "ArrayExtractor",
    "ObjectBuilder",
    "ObjectExtractor",
    "deserialize",
    "dump",
    "from_array",
    "from_object",
    "register_serializer",
    "serialize",
    "to_array",
    "to_object",
]


@dataclass(frozen=True)
class _Serializer:
    to_json: Optional[Callable[[Any, Any], Any]]
    from_json: Optional[Callable[[Any], Any]]


_SERIALIZERS: dict[type, _Serializer] = {}


def register_serializer(
    cls: type,
    to_json: Optional[Callable[[Any, Any], Any]],
    from_json: Optional[Callable[[Any], Any]],
) -> None:
    """Register custom conversions for ``cls``.

    ``to_json(obj, ctx)`` returns a JSON value; ``from_json(value)`` returns
    an instance of ``cls``. Either may be None to keep the default handling
    in that direction. Registered conversions take precedence.
    """
    _SERIALIZERS[cls] = _Serializer(to_json, from_json)


def _unwrap(value: Any) -> Any:
    return value.value if isinstance(value, View) else value


def _flag_members(cls: type[enum.Flag]) -> list[enum.Flag]:
    seen: set[Any] = set()
    members = []
    for member in cls.__members__.values():
        if member.value in seen or not member.value:
            continue
        seen.add(member.value)
        members.append(member)
    return members


# ---------------------------------------------------------------- serialize


def serialize(obj: Any, ctx: Any = None) -> Any:
    """Convert ``obj`` to a JSON value."""
    if ctx is None:
        ctx = SerializeContext()

    custom = _SERIALIZERS.get(type(obj))
    if custom is not None and custom.to_json is not None:
        return custom.to_json(obj, ctx)

    if isinstance(obj, View):
        return copy.deepcopy(obj.value)
    if obj is None or isinstance(obj, bool):
        return obj
    if isinstance(obj, enum.Flag):
        return [m.name for m in _flag_members(type(obj)) if (obj & m) == m]
    if isinstance(obj, enum.IntEnum):
        return int(obj.value)
    if isinstance(obj, enum.Enum):
        return obj.name
    if isinstance(obj, (int, float, str)):
        return obj
    if isinstance(obj, collections.abc.Mapping):
        result = {}
        for key, value in obj.items():
            if not isinstance(key, str):
                raise TypeError(
                    f"object keys must be strings, not {type(key).__name__}"
                )
            if not ctx.skip_field(key, value):
                result[key] = serialize(value, ctx)
        return result
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        result = {}
        for field in dataclasses.fields(obj):
            value = getattr(obj, field.name)
            if not ctx.skip_field(field.name, value):
                result[field.name] = serialize(value, ctx)
        return result
    if isinstance(obj, collections.abc.Iterable) and not isinstance(
        obj, (bytes, bytearray, memoryview)
    ):
        return [serialize(item, ctx) for item in obj]
    raise TypeError(
        f"Cannot serialize an instance of type {type(obj).__name__}"
    )


def dump(obj: Any, ctx: Any = None) -> str:
    """Write ``obj`` as compact JSON text."""
    if ctx is None:
        ctx = DumpContext()
    value = serialize(obj, ctx)
    return _json.dumps(
        value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
    )


# -------------------------------------------------------------- deserialize


@functools.lru_cache(maxsize=None)
def _dataclass_fields(cls: type) -> tuple[tuple[str, Any, bool], ...]:
    result = []
    for f in dataclasses.fields(cls):
        if isinstance(f.type, str):
            raise TypeError(
                f"field {f.name} of {cls.__qualname__} has a postponed "
                "annotation; a real type is required"
            )
        result.append((f.name, f.type, f.init))
    return tuple(result)


def _build_dataclass(cls: type, values: dict[str, Any]) -> Any:
    fields = _dataclass_fields(cls)
    init_args = {name: values[name] for name, _, init in fields if init}
    instance = cls(**init_args)
    for name, _, init in fields:
        if not init:
            object.__setattr__(instance, name, values[name])
    return instance


def _dataclass_from_json(cls: type, value: Any) -> Any:
    fields = _dataclass_fields(cls)
    values: dict[str, Any] = {}
    if isinstance(value, dict):
        for name, field_type, _ in fields:
            try:
                values[name] = _deserialize(field_type, at(value, name))
            except DeserializeError as ex:
                ex.add(f"error when deserializing field {name}")
                raise
    elif isinstance(value, list):
        if len(value) > len(fields):
            raise DeserializeError(
                "array size is greater than declared struct's field count"
            )
        for index, (name, field_type, _) in enumerate(fields):
            try:
                values[name] = _deserialize(field_type, at(value, index))
            except DeserializeError as ex:
                ex.add(f"error when deserializing element {index}")
                raise
    else:
        raise DeserializeError(
            f"type must be an array or object but is a {type_name(value)}"
        )
    return _build_dataclass(cls, values)


def _enum_by_name(cls: type[enum.Enum], value: Any) -> enum.Enum:
    expect_string(value)
    member = cls.__members__.get(value)
    if member is None:
        raise DeserializeError(f"invalid enum value: {value}")
    return member


def _sequence_from_json(item_type: Any, value: Any) -> list[Any]:
    expect_array(value)
    out: list[Any] = []
    for item in value:
        try:
            out.append(_deserialize(item_type, item))
        except DeserializeError as ex:
            ex.add(f"error when deserializing element {len(out)}")
            raise
    return out


def _mapping_from_json(key_type: Any, value_type: Any, value: Any) -> dict:
    expect_object(value)
    out: dict[Any, Any] = {}
    for name, item in value.items():
        try:
            out[_deserialize(key_type, name)] = _deserialize(value_type, item)
        except DeserializeError as ex:
            ex.add(f"error when deserializing field {name}")
            raise
    return out


def _tuple_from_json(item_types: tuple[Any, ...], value: Any) -> tuple:
    expect_array(value)
    return tuple(
        _deserialize(item_type, at(value, index))
        for index, item_type in enumerate(item_types)
    )


_SEQUENCE_ORIGINS: dict[Any, Callable[[list[Any]], Any]] = {
    list: list,
    set: set,
    frozenset: frozenset,
    collections.deque: collections.deque,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Set: set,
    collections.abc.MutableSet: set,
}

_MAPPING_ORIGINS: dict[Any, Callable[[dict], Any]] = {
    dict: dict,
    collections.OrderedDict: collections.OrderedDict,
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
}


def _deserialize(target_type: Any, value: Any) -> Any:
    if isinstance(target_type, type):
        custom = _SERIALIZERS.get(target_type)
        if custom is not None and custom.from_json is not None:
            return custom.from_json(value)

    if target_type is Any or target_type is object:
        return value
    if target_type is View:
        return View(value)

    origin = typing.get_origin(target_type)
    args = typing.get_args(target_type)

    if origin in (typing.Union, types.UnionType):
        others = [arg for arg in args if arg is not type(None)]
        if len(others) != 1 or len(others) == len(args):
            raise TypeError(f"unsupported union type: {target_type!r}")
        if value is None:
            return None
        return _deserialize(others[0], value)

    if target_type is bool:
        expect_boolean(value)
        return value
    if target_type is int:
        expect_integral(value)
        return int(value)
    if target_type is float:
        expect_number(value)
        return float(value)
    if target_type is str:
        expect_string(value)
        return value

    if isinstance(target_type, type) and issubclass(target_type, enum.Enum):
        if issubclass(target_type, enum.Flag):
            expect_array(value)
            result = target_type(0)
            for item in value:
                result |= _enum_by_name(target_type, item)
            return result
        if issubclass(target_type, enum.IntEnum):
            expect_number(value)
            try:
                return target_type(int(value))
            except ValueError:
                raise DeserializeError(f"invalid enum value: {value}") from None
        return _enum_by_name(target_type, value)

    if isinstance(target_type, type) and dataclasses.is_dataclass(target_type):
        try:
            return _dataclass_from_json(target_type, value)
        except DeserializeError as ex:
            ex.add(f"error when deserializing type {target_type.__qualname__}")
            raise

    if origin is tuple or target_type is tuple:
        if not args:
            return tuple(_sequence_from_json(Any, value))
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_sequence_from_json(args[0], value))
        if args == ((),):
            return _tuple_from_json((), value)
        return _tuple_from_json(args, value)

    if origin in _SEQUENCE_ORIGINS or target_type in _SEQUENCE_ORIGINS:
        factory = _SEQUENCE_ORIGINS[origin if origin is not None else target_type]
        item_type = args[0] if args else Any
        return factory(_sequence_from_json(item_type, value))

    if origin in _MAPPING_ORIGINS or target_type in _MAPPING_ORIGINS:
        factory = _MAPPING_ORIGINS[origin if origin is not None else target_type]
        key_type, value_type = args if args else (str, Any)
        return factory(_mapping_from_json(key_type, value_type, value))

    raise TypeError(f"Cannot deserialize an instance of type {target_type!r}")


def deserialize(target_type: Any, value: Any) -> Any:
    """Build an instance of ``target_type`` from the JSON value ``value``."""
    return _deserialize(target_type, _unwrap(value))


# ------------------------------------------------------ builders/extractors


class ArrayBuilder:
    """Builds a JSON array one element at a time."""

    def __init__(self, ctx: Any = None) -> None:
        self._ctx = SerializeContext() if ctx is None else ctx
        self._value: list[Any] = []

    def add(self, value: Any) -> ArrayBuilder:
        """Serialize ``value`` and append it."""
        self._value.append(serialize(value, self._ctx))
        return self

    def done(self) -> list[Any]:
        """Return the built array and start a new, empty one."""
        result, self._value = self._value, []
        return result


class ObjectBuilder:
    """Builds a JSON object one member at a time."""

    def __init__(self, ctx: Any = None) -> None:
        self._ctx = SerializeContext() if ctx is None else ctx
        self._value: dict[str, Any] = {}

    def add(self, member_name: str, value: Any) -> ObjectBuilder:
        """Serialize ``value`` and store it under ``member_name``."""
        if not isinstance(member_name, str):
            raise TypeError("member name must be a string")
        self._value[member_name] = serialize(value, self._ctx)
        return self

    def add_dynamic_name(self, member_name: str, value: Any) -> ObjectBuilder:
        """Same as :meth:`add`; the name is always copied."""
        return self.add(str(member_name), value)

    def done(self) -> dict[str, Any]:
        """Return the built object and start a new, empty one."""
        result, self._value = self._value, {}
        return result


class ObjectExtractor:
    """Reads typed members out of a JSON object."""

    def __init__(self, value: Any) -> None:
        value = _unwrap(value)
        expect_object(value)
        self._value = value

    def extract(self, member_name: str, target_type: Any) -> Any:
        """Deserialize the member ``member_name`` as ``target_type``."""
        try:
            return _deserialize(target_type, at(self._value, member_name))
        except DeserializeError as ex:
            ex.add(f"error when deserializing field {member_name}")
            raise


class ArrayExtractor:
    """Reads typed elements out of a JSON array, in order."""

    def __init__(self, value: Any) -> None:
        value = _unwrap(value)
        expect_array(value)
        self._value = value
        self._index = 0

    def extract(self, target_type: Any, index: Optional[int] = None) -> Any:
        """Deserialize the next element (or the one at ``index``)."""
        if index is not None:
            self._index = index
        try:
            result = _deserialize(target_type, at(self._value, self._index))
        except DeserializeError as ex:
            ex.add(f"error when deserializing element {self._index}")
            raise
        self._index += 1
        return result


def to_array(ctx: Any = None) -> ArrayBuilder:
    """Start building a JSON array."""
    return ArrayBuilder(ctx)


def to_object(ctx: Any = None) -> ObjectBuilder:
    """Start building a JSON object."""
    return ObjectBuilder(ctx)


def from_array(value: Any) -> ArrayExtractor:
    """Start extracting elements from a JSON array."""
    return ArrayExtractor(value)


def from_object(value: Any) -> ObjectExtractor:
    """Start extracting members from a JSON object."""
    return ObjectExtractor(value)
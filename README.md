# klcore

A small utility library with four modules:

- `klcore.hash`: 32-bit string hashes, `fnv1a(data)` and `hsieh(data)`.
- `klcore.file_view`: `FileView`, a read-only, memory-mapped view of a file's bytes.
- `klcore.json_core`: JSON building blocks. It provides `parse`, the `expect_*` type checks, `at`, `type_name`, `is_null_value`, `View`, `SerializeContext`, `DumpContext`, `DeserializeError` and `ParseError`.
- `klcore.json`: type-directed conversion between Python objects and JSON values. It provides `serialize`, `deserialize` and `dump`, the builders `to_array` and `to_object`, the extractors `from_array` and `from_object`, and `register_serializer` for custom types.

## Installation

```
pip install klcore
```

The package has no runtime dependencies.

## Hashing

```python
from klcore.hash import fnv1a, hsieh

fnv1a("test string")
hsieh(b"QWEASDZXC")  # 0xAEB8600C
hsieh(None)          # 0
```

Both functions accept `str` or bytes-like data. A `str` is encoded as UTF-8. Both return an unsigned 32-bit integer. Bytes of 0x80 and above are treated as signed chars when they are mixed in.

FNV-1a is handy for dispatching on strings:

```python
handlers = {fnv1a("start"): start, fnv1a("stop"): stop}
handlers[fnv1a(command)]()
```

## Viewing a file

```python
from klcore.file_view import FileView

with FileView("data.bin") as view:
    print(len(view), bytes(view.data[:4]))
```

- `view.data` is a `memoryview` of the file's contents.
- A missing file raises `FileNotFoundError`.
- An empty file gives an empty view.
- `close()` releases the mapping and leaves the view empty. Leaving the `with` block calls `close()` for you.

## JSON values

JSON values are plain Python objects: `None`, `bool`, `int`, `float`, `str`, `list` and `dict` with string keys.

```python
from klcore.json_core import parse, at, expect_string, ParseError

doc = parse('{"a": [1, 2]}')
at(doc, "missing")   # None
at(doc["a"], 5)      # None
parse("[{]}")        # raises ParseError
```

Each `expect_*` function raises `DeserializeError` when the value has the wrong type. For example, `expect_string(None)` raises with the message `type must be a string but is a Null`.

## Converting objects

```python
from dataclasses import dataclass
from klcore import json

@dataclass
class Inner:
    r: int = 1337
    d: float = 3.145926

json.serialize(Inner())                    # {'r': 1337, 'd': 3.145926}
json.dump(Inner())                         # '{"r":1337,"d":3.145926}'
json.deserialize(Inner, {"r": 2, "d": 1.0})
json.deserialize(Inner, [3, 4.0])          # positional form
json.deserialize(list[int], [1, 2, 3])
```

### Supported types

- Built-in scalars.
- Mappings and iterables.
- `tuple[...]`, `list[T]`, `set[T]`, `dict[K, V]` and `T | None`.
- Dataclasses, whose field annotations must be real types, not strings.
- `View`, which keeps a reference to the raw JSON value.

### Enums

| Enum type | Serialized as | Also accepted when deserializing |
|-----------|---------------|----------------------------------|
| Plain `Enum` | member name | |
| `IntEnum` | integer value | |
| `Flag` | list of the names of the set members | |

### Null fields

Fields and map entries holding `None` are left out. To keep them, pass a context made with `skip_null_fields=False`:

```python
from klcore.json_core import SerializeContext
json.serialize(obj, SerializeContext(skip_null_fields=False))
```

### Error messages

Deserialization errors raise `DeserializeError`. Its message gains one line for each nesting level that failed. For example:

```
type must be an integral but is a Null
error when deserializing field r
error when deserializing type Inner
```

### Builders and extractors

```python
obj = json.to_object().add("ctx", 22).add("values", [1, 2]).done()
ex = json.from_object(obj)
ex.extract("ctx", int)            # 22

arr = json.from_array([1, "x", True])
arr.extract(int)                  # 1
arr.extract(bool, 2)              # True
```

### Custom types

`register_serializer(cls, to_json, from_json)` installs conversions for a type. They take precedence over the default handling:

- `to_json(obj, ctx)` returns a JSON value.
- `from_json(value)` returns an instance.
- Either may be `None` to keep the default handling in that direction.

## What it does not do

- `dump` writes compact JSON text only. It has no pretty-printing and no streaming writer.
- There is no YAML support.
- The package has no command-line interface.

## Running the tests

```
pip install -e ".[test]"
pytest
```
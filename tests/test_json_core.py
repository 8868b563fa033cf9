import pytest

from klcore.json_core import (
    DeserializeError,
    DumpContext,
    ParseError,
    SerializeContext,
    View,
    at,
    expect_array,
    expect_boolean,
    expect_integral,
    expect_number,
    expect_object,
    expect_string,
    is_null_value,
    parse,
    type_name,
)


def test_deserialize_error_accumulates_messages():
    err = DeserializeError("bad conversion")
    err.add("error when deserializing field c")
    err.add("error when deserializing type zxc")
    assert str(err) == (
        "bad conversion\n"
        "error when deserializing field c\n"
        "error when deserializing type zxc"
    )


def test_deserialize_error_single_message():
    assert str(DeserializeError("invalid enum value: 0")) == "invalid enum value: 0"


def test_view_empty_and_filled():
    assert not View()
    v = View(None)
    assert bool(v)
    assert v.value is None
    data = {"a": 1}
    assert View(data).value is data


def test_view_empty_value_raises():
    with pytest.raises(ValueError):
        View().value


def test_is_null_value():
    assert is_null_value(None)
    assert not is_null_value(0)
    assert not is_null_value(False)


@pytest.mark.parametrize("ctx_cls", [SerializeContext, DumpContext])
def test_context_skip_field(ctx_cls):
    ctx = ctx_cls()
    assert ctx.skip_field("opt", None)
    assert not ctx.skip_field("non_opt", 23)
    keep = ctx_cls(False)
    assert not keep.skip_field("opt", None)


def test_at_array():
    arr = [10, 20, 30]
    assert at(arr, 1) == 20
    assert at(arr, 3) is None
    assert at([], 0) is None


def test_at_object():
    obj = {"r": 1337, "d": 3.145926}
    assert at(obj, "r") == 1337
    assert at(obj, "missing") is None


def test_type_name_distinguishes_kinds():
    assert type_name(None) == "Null"
    assert type_name("x") == "String"
    names = {type_name(v) for v in (None, True, False, {}, [], "s", 1, 1.5)}
    assert len(names) == 7
    assert type_name(1) == type_name(2.5)


def test_expect_functions_accept_matching():
    expect_integral(3)
    expect_number(3.5)
    expect_number(-1)
    expect_boolean(False)
    expect_string("abc")
    expect_object({})
    expect_array([])
    assert parse("[1]") == [1]


@pytest.mark.parametrize(
    "check, value",
    [
        (expect_integral, 3.0),
        (expect_integral, True),
        (expect_integral, "3"),
        (expect_integral, 2**70),
        (expect_number, True),
        (expect_number, None),
        (expect_boolean, 1),
        (expect_string, [123]),
        (expect_object, []),
        (expect_array, {"cpu": 1}),
    ],
)
def test_expect_functions_reject(check, value):
    with pytest.raises(DeserializeError) as info:
        check(value)
    message = str(info.value)
    assert message.startswith("type must be")
    assert message.endswith("but is a " + type_name(value))


def test_parse_values():
    assert parse('{"a": [1, 2.5, "x", null, true]}') == {"a": [1, 2.5, "x", None, True]}
    assert parse("{}") == {}


@pytest.mark.parametrize("text", ["[{]}", "", "NaN", "[1,]", "{'a': 1}"])
def test_parse_errors(text):
    with pytest.raises(ParseError):
        parse(text)


def test_parse_roundtrip_with_at():
    doc = parse('{"ctx": 123, "array": [{"r": 331}, 3]}')
    assert at(doc, "ctx") == 123
    assert at(at(doc, "array"), 1) == 3
    assert at(at(at(doc, "array"), 0), "r") == 331
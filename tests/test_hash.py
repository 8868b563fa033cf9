import pytest

from klcore.hash import fnv1a, hsieh


def test_fnv1a_str_and_bytes_agree():
    assert fnv1a("test string") == fnv1a(b"test string")
    assert fnv1a("test string") == fnv1a(bytearray(b"test string"))


def test_fnv1a_known_values():
    assert fnv1a("") == 0x811C9DC5
    assert fnv1a("a") == 0xE40C292C
    assert fnv1a("foobar") == 0xBF9CF968


def test_fnv1a_dispatch_like_switch():
    table = {fnv1a("1"): "one", fnv1a("3"): "three", fnv1a("test"): "test"}
    assert table[fnv1a("3")] == "three"
    assert table[fnv1a(b"test")] == "test"


def test_fnv1a_distinguishes_strings():
    assert fnv1a("test") != fnv1a("tesu")


def test_fnv1a_non_ascii_uses_utf8():
    assert fnv1a("é") == fnv1a("é".encode("utf-8"))
    assert 0 <= fnv1a(b"\xff\x80") <= 0xFFFFFFFF


def test_hsieh_empty():
    assert hsieh(None) == 0
    assert hsieh(b"") == 0


@pytest.mark.parametrize(
    "text, expected",
    [
        ("QWEASDZXC", 0xAEB8600C),
        ("QWEASDZX", 0xE0B4386A),
        ("QWEASDZ", 0xD439CF4C),
        ("QWEASD", 0x79EF41CA),
    ],
)
def test_hsieh_known_values(text, expected):
    assert hsieh(text) == expected
    assert hsieh(text.encode("ascii")) == expected


def test_hsieh_high_bytes_in_range():
    value = hsieh(b"\xff\xfe\xfd")
    assert 0 <= value <= 0xFFFFFFFF
    assert value == hsieh(bytearray(b"\xff\xfe\xfd"))
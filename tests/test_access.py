import pytest
from hypothesis import given
from hypothesis import strategies as st

from bitpack.access import read_specifier, write_specifier
from bitpack.errors import OutOfBounds
from bitpack.specifiers import BOOL, bits_specifier

# Layout of the "Generated" struct: a: B9, b: B6, c: B13, d: B1, e: B3, f: B32
GENERATED = {
    "a": (bits_specifier(9), 0),
    "b": (bits_specifier(6), 9),
    "c": (bits_specifier(13), 15),
    "d": (bits_specifier(1), 28),
    "e": (bits_specifier(3), 29),
    "f": (bits_specifier(32), 32),
}

# Layout of "EdgeCaseBytes": a: B9, b: B6, c: B13, d: B4
EDGE_CASE = {
    "a": (bits_specifier(9), 0),
    "b": (bits_specifier(6), 9),
    "c": (bits_specifier(13), 15),
    "d": (bits_specifier(4), 28),
}


@pytest.mark.parametrize(
    "name, value",
    [
        ("a", 0b0001_1111_1111),
        ("b", 0b0011_1111),
        ("c", 0b0001_1111_1111_1111),
        ("d", 0b0001),
        ("e", 0b0111),
        ("f", 0xFFFF_FFFF),
    ],
)
def test_generated_get_set(name, value):
    spec, offset = GENERATED[name]
    data = bytearray(8)
    assert read_specifier(spec, data, offset) == 0
    write_specifier(spec, data, offset, value)
    assert read_specifier(spec, data, offset) == value
    write_specifier(spec, data, offset, 0)
    assert read_specifier(spec, data, offset) == 0
    assert data == bytearray(8)


@pytest.mark.parametrize(
    "name, value",
    [
        ("a", 0b0001_1111_1111),
        ("b", 0b0011_1111),
        ("c", 0b0001_1111_1111_1111),
        ("d", 0b0001),
        ("e", 0b0111),
        ("f", 0xFFFF_FFFF),
    ],
)
def test_generated_set_leaves_other_fields(name, value):
    spec, offset = GENERATED[name]
    data = bytearray(8)
    write_specifier(spec, data, offset, value)
    for other, (other_spec, other_offset) in GENERATED.items():
        if other != name:
            assert read_specifier(other_spec, data, other_offset) == 0


def test_generated_a_layout():
    spec, offset = GENERATED["a"]
    data = bytearray(8)
    write_specifier(spec, data, offset, 0b0001_1111_1111)
    assert data[0] == 0xFF
    assert data[1] == 0x01


def test_generated_f_layout():
    spec, offset = GENERATED["f"]
    data = bytearray(8)
    write_specifier(spec, data, offset, 0xFFFF_FFFF)
    assert data == bytearray(4) + bytearray(b"\xff\xff\xff\xff")


@pytest.mark.parametrize(
    "name, value",
    [
        ("a", 0b0010_0000_0000),
        ("b", 0b0000_0100_0000),
        ("c", 0x2000),
        ("d", 0b0001_0000),
    ],
)
def test_edge_case_out_of_bounds(name, value):
    spec, offset = EDGE_CASE[name]
    data = bytearray(4)
    with pytest.raises(OutOfBounds):
        write_specifier(spec, data, offset, value)
    assert data == bytearray(4)


def test_bool_field():
    data = bytearray(1)
    write_specifier(BOOL, data, 3, 1)
    assert read_specifier(BOOL, data, 3) == 1
    assert read_specifier(BOOL, data, 2) == 0


def test_read_past_end_raises():
    with pytest.raises(IndexError):
        read_specifier(bits_specifier(9), bytes(1), 0)


def test_write_past_end_raises():
    with pytest.raises(IndexError):
        write_specifier(bits_specifier(4), bytearray(1), 6, 0)


def test_negative_offset_raises():
    with pytest.raises(IndexError):
        read_specifier(bits_specifier(4), bytes(2), -1)


@given(st.integers(min_value=1, max_value=128), st.integers(min_value=0, max_value=40), st.data())
def test_round_trip_preserves_surroundings(bits, offset, data):
    spec = bits_specifier(bits)
    size = (offset + bits + 7) // 8 + data.draw(st.integers(min_value=0, max_value=2))
    original = bytearray(data.draw(st.binary(min_size=size, max_size=size)))
    value = data.draw(st.integers(min_value=0, max_value=(1 << bits) - 1))
    buf = bytearray(original)
    write_specifier(spec, buf, offset, value)
    assert read_specifier(spec, buf, offset) == value
    field_mask = ((1 << bits) - 1) << offset
    before = int.from_bytes(original, "little")
    after = int.from_bytes(buf, "little")
    assert before & ~field_mask == after & ~field_mask


@given(st.integers(min_value=1, max_value=128), st.integers(min_value=0, max_value=40), st.data())
def test_read_matches_integer_view(bits, offset, data):
    spec = bits_specifier(bits)
    size = (offset + bits + 7) // 8
    raw = data.draw(st.binary(min_size=size, max_size=size))
    whole = int.from_bytes(raw, "little")
    assert read_specifier(spec, raw, offset) == (whole >> offset) & ((1 << bits) - 1)
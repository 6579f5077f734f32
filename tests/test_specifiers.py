import pytest
from hypothesis import given
from hypothesis import strategies as st

from bitpack.errors import InvalidBitPattern, OutOfBounds
from bitpack.specifiers import (
    BOOL,
    BoolSpecifier,
    UIntSpecifier,
    array_into_bytes,
    bits_specifier,
    bytes_into_array,
    storage_bits,
)


@pytest.mark.parametrize(
    "bits, expected",
    [(1, 8), (8, 8), (9, 16), (16, 16), (17, 32), (32, 32), (33, 64), (64, 64), (65, 128), (128, 128)],
)
def test_storage_bits_ranges(bits, expected):
    assert storage_bits(bits) == expected


@pytest.mark.parametrize("bits", [0, 129, -1])
def test_storage_bits_rejects_out_of_range(bits):
    with pytest.raises(ValueError):
        storage_bits(bits)


@pytest.mark.parametrize("bits", [0, 129])
def test_bits_specifier_rejects_out_of_range(bits):
    with pytest.raises(ValueError):
        bits_specifier(bits)


def test_bits_specifier_is_cached():
    assert bits_specifier(13) is bits_specifier(13)
    assert bits_specifier(13) == UIntSpecifier(13)


@given(st.integers(min_value=1, max_value=128), st.data())
def test_uint_round_trip(bits, data):
    spec = bits_specifier(bits)
    value = data.draw(st.integers(min_value=0, max_value=(1 << bits) - 1))
    assert spec.from_bytes(spec.into_bytes(value)) == value


@given(st.integers(min_value=1, max_value=128))
def test_uint_max_value_boundary(bits):
    spec = bits_specifier(bits)
    assert spec.into_bytes(spec.max_value) == spec.max_value
    with pytest.raises(OutOfBounds):
        spec.into_bytes(spec.max_value + 1)
    with pytest.raises(InvalidBitPattern) as info:
        spec.from_bytes(spec.max_value + 1)
    assert info.value.invalid_bytes == spec.max_value + 1


def test_full_width_maxima():
    assert bits_specifier(8).max_value == 0xFF
    assert bits_specifier(128).max_value == (1 << 128) - 1


def test_uint_rejects_negative():
    with pytest.raises(OutOfBounds):
        bits_specifier(4).into_bytes(-1)


def test_uint_rejects_non_int():
    with pytest.raises(TypeError):
        bits_specifier(4).into_bytes("1")


def test_storage_bits_property():
    assert bits_specifier(20).storage_bits == 32
    assert BOOL.storage_bits == 8


def test_bool_into_bytes():
    assert BOOL.into_bytes(True) == 1
    assert BOOL.into_bytes(False) == 0


def test_bool_from_bytes():
    assert BOOL.from_bytes(1) is True
    assert BOOL.from_bytes(0) is False


def test_bool_from_bytes_invalid():
    with pytest.raises(InvalidBitPattern) as info:
        BOOL.from_bytes(2)
    assert info.value.invalid_bytes == 2


def test_bool_has_one_bit():
    assert BOOL.bits == 1
    with pytest.raises(ValueError):
        BoolSpecifier(bits=2)


def test_bytes_into_array_little_endian():
    assert bytes_into_array(0x0102, 16) == b"\x02\x01"


@given(st.integers(min_value=1, max_value=16), st.data())
def test_array_round_trip(nbytes, data):
    bits = nbytes * 8
    value = data.draw(st.integers(min_value=0, max_value=(1 << bits) - 1))
    array = bytes_into_array(value, bits)
    assert len(array) == nbytes
    assert array_into_bytes(array, bits) == value


@pytest.mark.parametrize("bits", [0, 7, 12, 136])
def test_array_conversion_rejects_bad_widths(bits):
    with pytest.raises(ValueError):
        bytes_into_array(0, bits)
    with pytest.raises(ValueError):
        array_into_bytes(b"", bits)


def test_array_into_bytes_rejects_wrong_length():
    with pytest.raises(ValueError):
        array_into_bytes(b"\x00\x00", 24)


def test_bytes_into_array_rejects_overflow():
    with pytest.raises(OutOfBounds):
        bytes_into_array(1 << 24, 24)
"""Specifiers describe how a field's value is stored as a run of bits."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from .errors import InvalidBitPattern, OutOfBounds

MAX_BITS = 128

_STORAGE_WIDTHS = (8, 16, 32, 64, 128)


def storage_bits(bits: int) -> int:
    """Return the width of the smallest unsigned primitive holding ``bits`` bits."""
    if not 1 <= bits <= MAX_BITS:
        raise ValueError(f"bit count must be between 1 and {MAX_BITS}, got {bits}")
    return next(width for width in _STORAGE_WIDTHS if bits <= width)


class Specifier(ABC):
    """A sequence of bits and its conversion to and from an interface value."""

    bits: int

    @property
    def storage_bits(self) -> int:
        """Width in bits of the integer that stores this specifier's value."""
        return storage_bits(self.bits)

    @abstractmethod
    def into_bytes(self, value: Any) -> int:
        """Convert an interface value into its stored integer, or raise OutOfBounds."""

    @abstractmethod
    def from_bytes(self, raw: int) -> Any:
        """Convert a stored integer into its interface value, or raise InvalidBitPattern."""


@dataclass(frozen=True)
class UIntSpecifier(Specifier):
    """An unsigned integer of a fixed number of bits."""

    bits: int

    def __post_init__(self) -> None:
        if not 1 <= self.bits <= MAX_BITS:
            raise ValueError(f"bit count must be between 1 and {MAX_BITS}, got {self.bits}")

    @property
    def max_value(self) -> int:
        """The largest value that fits."""
        return (1 << self.bits) - 1

    def _fits(self, value: int) -> bool:
        return 0 <= value <= self.max_value

    def into_bytes(self, value: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected an int, got {type(value).__name__}")
        if not self._fits(value):
            raise OutOfBounds()
        return value

    def from_bytes(self, raw: int) -> int:
        if not self._fits(raw):
            raise InvalidBitPattern(raw)
        return raw


@dataclass(frozen=True)
class BoolSpecifier(Specifier):
    """A single bit read and written as a bool."""

    bits: int = 1

    def __post_init__(self) -> None:
        if self.bits != 1:
            raise ValueError("a bool specifier always has exactly one bit")

    def into_bytes(self, value: bool) -> int:
        return int(bool(value))

    def from_bytes(self, raw: int) -> bool:
        if raw == 0:
            return False
        if raw == 1:
            return True
        raise InvalidBitPattern(raw)


@lru_cache(maxsize=None)
def bits_specifier(bits: int) -> UIntSpecifier:
    """Return the unsigned specifier for ``bits`` bits (1 to 128)."""
    return UIntSpecifier(bits)


BOOL = BoolSpecifier()
U8 = bits_specifier(8)
U16 = bits_specifier(16)
U32 = bits_specifier(32)
U64 = bits_specifier(64)
U128 = bits_specifier(128)


def _array_len(bits: int) -> int:
    if bits % 8 or not 8 <= bits <= MAX_BITS:
        raise ValueError(f"bit count must be a multiple of 8 between 8 and {MAX_BITS}, got {bits}")
    return bits // 8


def bytes_into_array(value: int, bits: int) -> bytes:
    """Encode ``value`` as ``bits // 8`` little-endian bytes."""
    length = _array_len(bits)
    try:
        return value.to_bytes(length, "little")
    except OverflowError:
        raise OutOfBounds() from None


def array_into_bytes(data: bytes, bits: int) -> int:
    """Decode ``bits // 8`` little-endian bytes into an integer."""
    length = _array_len(bits)
    if len(data) != length:
        raise ValueError(f"expected {length} bytes, got {len(data)}")
    return int.from_bytes(data, "little")
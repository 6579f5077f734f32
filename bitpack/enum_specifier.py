"""Specifiers for enumerations whose members are stored as their integer values."""

from __future__ import annotations

import enum
from typing import Any

from .errors import InvalidBitPattern
from .specifiers import MAX_BITS, Specifier


class SpecifierError(ValueError):
    """A type cannot be turned into a bit field specifier as declared."""


def _bits_for_variant_count(count: int) -> int:
    if count == 0 or count & (count - 1):
        next_power = 1 if count == 0 else 1 << (count - 1).bit_length()
        raise SpecifierError(
            "expected a number of variants which is a power of 2, "
            f"specify bits={next_power.bit_length() - 1} if that was your intent"
        )
    return count.bit_length() - 1


class EnumSpecifier(Specifier):
    """Stores the members of an enumeration as their integer values."""

    def __init__(self, enum_type: type[enum.Enum], bits: int | None = None) -> None:
        if not (isinstance(enum_type, type) and issubclass(enum_type, enum.Enum)):
            raise SpecifierError("only enum types are supported as bitfield specifiers")
        members = list(enum_type)
        if bits is None:
            bits = _bits_for_variant_count(len(members))
        elif isinstance(bits, bool) or not isinstance(bits, int):
            raise SpecifierError("could not parse 'bits' attribute")
        if not 1 <= bits <= MAX_BITS:
            raise SpecifierError(
                f"an enum specifier needs between 1 and {MAX_BITS} bits, got {bits}"
            )

        by_value: dict[int, enum.Enum] = {}
        for member in members:
            value = member.value
            qualified = f"{enum_type.__name__}.{member.name}"
            if isinstance(value, bool) or not isinstance(value, int):
                raise SpecifierError(f"variant {qualified} must have an integer value")
            if not 0 <= value < (1 << bits):
                raise SpecifierError(
                    f"variant {qualified} with value {value} does not fit into {bits} bits"
                )
            by_value[value] = member

        self.enum_type = enum_type
        self.bits = bits
        self._by_value = by_value

    def into_bytes(self, value: Any) -> int:
        if not isinstance(value, self.enum_type):
            raise TypeError(
                f"expected a member of {self.enum_type.__name__}, got {type(value).__name__}"
            )
        return value.value

    def from_bytes(self, raw: int) -> enum.Enum:
        try:
            return self._by_value[raw]
        except KeyError:
            raise InvalidBitPattern(raw) from None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EnumSpecifier):
            return NotImplemented
        return self.enum_type is other.enum_type and self.bits == other.bits

    def __hash__(self) -> int:
        return hash((EnumSpecifier, self.enum_type, self.bits))

    def __repr__(self) -> str:
        return f"EnumSpecifier({self.enum_type.__name__}, bits={self.bits})"


def enum_specifier(enum_type: type[enum.Enum], bits: int | None = None) -> EnumSpecifier:
    """Return a specifier for ``enum_type``; the bit count follows from the variant count."""
    return EnumSpecifier(enum_type, bits)
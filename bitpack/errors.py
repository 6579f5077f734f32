"""Errors raised while converting values to and from bit fields."""

from __future__ import annotations


class OutOfBounds(ValueError):
    """A value does not fit into the bits of its field."""

    def __init__(self) -> None:
        super().__init__("encountered an out of bounds value")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, OutOfBounds)

    def __hash__(self) -> int:
        return hash(OutOfBounds)


class InvalidBitPattern(ValueError):
    """Stored bits do not form a valid value of the field's type."""

    def __init__(self, invalid_bytes: int) -> None:
        self.invalid_bytes = invalid_bytes
        super().__init__(f"encountered an invalid bit pattern: 0x{invalid_bytes:X}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidBitPattern):
            return NotImplemented
        return self.invalid_bytes == other.invalid_bytes

    def __hash__(self) -> int:
        return hash((InvalidBitPattern, self.invalid_bytes))
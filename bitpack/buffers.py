"""Small bit buffers used to assemble and split field values byte by byte."""

from __future__ import annotations

_WIDTHS = frozenset({8, 16, 32, 64, 128})


def _check_width(width: int) -> int:
    if width not in _WIDTHS:
        raise ValueError(f"buffer width must be one of {sorted(_WIDTHS)}, got {width}")
    return width


def _check_amount(amount: int) -> None:
    if not 1 <= amount <= 8:
        raise ValueError(f"can move between 1 and 8 bits at a time, got {amount}")


class PushBuffer:
    """Collects bits by shifting them in at the low end."""

    def __init__(self, width: int) -> None:
        self.width = _check_width(width)
        self._mask = (1 << width) - 1
        self._value = 0

    def push_bits(self, amount: int, bits: int) -> None:
        """Shift the buffer left by ``amount`` and insert the low ``amount`` bits of ``bits``."""
        _check_amount(amount)
        bitmask = 0xFF >> (8 - amount)
        self._value = ((self._value << amount) & self._mask) | (bits & bitmask)

    def into_bytes(self) -> int:
        """Return the collected value."""
        return self._value


class PopBuffer:
    """Hands out bits from the low end of a value."""

    def __init__(self, value: int, width: int) -> None:
        self.width = _check_width(width)
        if not 0 <= value < (1 << width):
            raise ValueError(f"value does not fit into {width} bits")
        self._value = value

    def pop_bits(self, amount: int) -> int:
        """Remove and return the low ``amount`` bits."""
        _check_amount(amount)
        result = self._value & ((1 << amount) - 1)
        self._value >>= amount
        return result
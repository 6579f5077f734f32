"""Reading and writing specifier values at arbitrary bit offsets of a byte buffer."""

from __future__ import annotations

from .buffers import PopBuffer, PushBuffer
from .errors import OutOfBounds
from .specifiers import Specifier, storage_bits


def _layout(spec: Specifier, size: int, offset: int) -> tuple[int, int, int, int]:
    bits = spec.bits
    end = offset + bits
    if offset < 0 or end > size * 8:
        raise IndexError(
            f"field of {bits} bits at offset {offset} does not fit into {size} bytes"
        )
    ls_byte = offset // 8
    ms_byte = (end - 1) // 8
    lsb_offset = offset % 8
    msb_offset = end % 8 or 8
    return ls_byte, ms_byte, lsb_offset, msb_offset


def read_specifier(spec: Specifier, data: bytes | bytearray, offset: int) -> int:
    """Return the raw stored bits of ``spec`` starting at bit ``offset`` of ``data``."""
    ls_byte, ms_byte, lsb_offset, msb_offset = _layout(spec, len(data), offset)
    buffer = PushBuffer(storage_bits(spec.bits))

    if lsb_offset == 0 and msb_offset == 8:
        for byte in reversed(data[ls_byte : ms_byte + 1]):
            buffer.push_bits(8, byte)
        return buffer.into_bytes()

    if ls_byte != ms_byte:
        buffer.push_bits(msb_offset, data[ms_byte])
    for byte in reversed(data[ls_byte + 1 : ms_byte]):
        buffer.push_bits(8, byte)
    if ls_byte == ms_byte:
        buffer.push_bits(spec.bits, data[ls_byte] >> lsb_offset)
    else:
        buffer.push_bits(8 - lsb_offset, data[ls_byte] >> lsb_offset)
    return buffer.into_bytes()


def write_specifier(spec: Specifier, data: bytearray, offset: int, value: int) -> None:
    """Store the raw bits ``value`` of ``spec`` at bit ``offset``, leaving other bits intact."""
    ls_byte, ms_byte, lsb_offset, msb_offset = _layout(spec, len(data), offset)
    if not 0 <= value < (1 << spec.bits):
        raise OutOfBounds()
    buffer = PopBuffer(value, storage_bits(spec.bits))

    if lsb_offset == 0 and msb_offset == 8:
        data[ls_byte : ms_byte + 1] = bytes(
            buffer.pop_bits(8) for _ in range(ms_byte - ls_byte + 1)
        )
        return

    keep = (1 << lsb_offset) - 1
    if ls_byte == ms_byte and msb_offset != 8:
        keep |= ~((1 << msb_offset) - 1) & 0xFF
    overwrite = buffer.pop_bits(8 - lsb_offset)
    data[ls_byte] = ((data[ls_byte] & keep) | (overwrite << lsb_offset)) & 0xFF

    if ms_byte - ls_byte >= 2:
        data[ls_byte + 1 : ms_byte] = bytes(
            buffer.pop_bits(8) for _ in range(ms_byte - ls_byte - 1)
        )

    if ls_byte != ms_byte:
        if msb_offset == 8:
            data[ms_byte] = buffer.pop_bits(8)
        else:
            stays_same = data[ms_byte] & ~((1 << msb_offset) - 1) & 0xFF
            data[ms_byte] = stays_same | buffer.pop_bits(msb_offset)
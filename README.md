# bitpack

Describe fields of arbitrary bit width and read or write them at any bit
offset inside a byte buffer. Values are checked against the width of their
field, so nothing silently spills into a neighbouring field.

## Installation

```
pip install bitpack
```

The test suite needs the `test` extra:

```
pip install "bitpack[test]"
pytest
```

## Specifiers

A specifier describes how one field's value is stored as a run of bits. Every
specifier has a `bits` width and two methods:

- `into_bytes(value)` turns a value into its raw integer storage.
- `from_bytes(raw)` turns raw storage back into a value.

Available specifiers:

- `bitpack.specifiers.bits_specifier(n)` returns the `UIntSpecifier` for an
  unsigned field of `n` bits, for `n` from 1 to 128. `U8`, `U16`, `U32`, `U64`
  and `U128` are ready-made. `into_bytes` raises `OutOfBounds` for a value that
  does not fit and `TypeError` for anything that is not an `int`.
- `bitpack.specifiers.BoolSpecifier` (and the instance `BOOL`) stores a single
  flag bit; `from_bytes` accepts only 0 and 1.
- `bitpack.enum_specifier.enum_specifier(enum_type, bits=None)` returns an
  `EnumSpecifier` that stores members of a Python `Enum` as their integer values.

Helpers in `bitpack.specifiers`:

- `storage_bits(n)` gives the width (8, 16, 32, 64 or 128) of the smallest
  unsigned integer that holds `n` bits.
- `bytes_into_array(value, bits)` and `array_into_bytes(data, bits)` convert
  between an integer and `bits // 8` little-endian bytes, for `bits` a multiple
  of 8.

## Reading and writing fields

Fields are laid out least significant bit first, little-endian across bytes.
`write_specifier` changes only the bits of the field it writes.

```python
from bitpack.access import read_specifier, write_specifier
from bitpack.specifiers import bits_specifier

b9 = bits_specifier(9)
b6 = bits_specifier(6)

data = bytearray(4)
write_specifier(b9, data, 0, 0b1_1111_1111)
write_specifier(b6, data, 9, 0b11_1111)

assert read_specifier(b9, data, 0) == 0b1_1111_1111
assert read_specifier(b6, data, 9) == 0b11_1111
```

Both functions work on raw stored bits: combine them with a specifier's
`into_bytes` and `from_bytes` to get checked values. `write_specifier` raises
`OutOfBounds` for a raw value wider than the field, and both raise `IndexError`
when the field does not fit inside the buffer.

The low-level `bitpack.buffers.PushBuffer` and `PopBuffer` assemble and split a
value a few bits (1 to 8) at a time; the access functions are built on them.

## Enumerations

```python
import enum

from bitpack.enum_specifier import enum_specifier


class Mode(enum.Enum):
    OFF = 0
    LOW = 1
    HIGH = 2
    AUTO = 3


mode = enum_specifier(Mode, 2)
assert mode.from_bytes(mode.into_bytes(Mode.HIGH)) is Mode.HIGH
```

Without an explicit width, the enumeration needs a power-of-two number of
members, and the width is derived from that count. A member whose value is not
a non-negative integer fitting the width, a width outside 1 to 128, or a type
that is not an `Enum` is rejected with `SpecifierError`.

## Errors

- `bitpack.errors.OutOfBounds` is raised when a value is too wide for its field.
- `bitpack.errors.InvalidBitPattern` is raised when stored bits do not decode to
  a valid value, for example a stored `3` for an enumeration without such a
  member. The offending raw value is kept as `invalid_bytes`.

Both derive from `ValueError`.

## Layout parameters and field settings

`bitpack.params.parse_params(text)` reads parameters written as
`bytes = 4, bits = 32, filled = true` into `Param` records, turning integer,
`true`/`false` and string literals into Python values. Malformed text raises
`ConfigError`.

`bitpack.params.feed_params(params, sink)` accepts either such records or the
text itself, checks each value and calls `sink.bytes(value, span)`,
`sink.bits(value, span)` or `sink.filled(value, span)`. Unknown names, non-integer
`bytes`/`bits` values and non-boolean `filled` values raise `ConfigError`;
deciding about repeated or conflicting parameters is left to the sink.

`bitpack.field_config.FieldConfig` collects the settings of one field:
`add_bits` records a fixed width (once only), and `add_skip` records which
accessors to leave out (`SkipWhich.ALL`, `GETTERS` or `SETTERS`; getters and
setters given separately combine to all, repeats raise `ConfigError`).
`field_infos(fields, configs)` yields a `FieldInfo` for each `(name, specifier)`
pair, naming unnamed fields by their position.

## What it does not do

bitpack provides the building blocks only. It does not generate struct classes
with per-field accessors from a field list, does not compute a layout's total
size or check it against the `bytes`, `bits` or `filled` parameters, and does
not apply `FieldConfig` settings to anything; those steps are up to the code
using it.
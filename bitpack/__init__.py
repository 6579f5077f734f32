"""Bit field specifiers, bit-level access to byte buffers and layout configuration."""

__version__ = "0.14.0"

__all__ = [
    "access",
    "buffers",
    "enum_specifier",
    "errors",
    "field_config",
    "params",
    "specifiers",
]
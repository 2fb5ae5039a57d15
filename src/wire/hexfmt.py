# src/wire/hexfmt.py
"""
Numeric formatting for the text wire format.

All numbers in the output files are lowercase hex, no prefix, no padding.
Floats are written as their IEEE-754 bit patterns.
"""

from __future__ import annotations

import struct

from datagen.errors import EncoderMisuseError


U32_MASK = 0xFFFFFFFF
U64_LIMIT = 1 << 64

_F32 = struct.Struct("<f")
_U32 = struct.Struct("<I")
_F64 = struct.Struct("<d")
_U64 = struct.Struct("<Q")

# Canonical NaN patterns (what floatToIntBits / doubleToLongBits produce).
_F32_NAN_BITS = 0x7FC00000
_F64_NAN_BITS = 0x7FF8000000000000


def hex_u(value: int) -> str:
    """
    Format a non-negative integer below 2**64 as lowercase hex.

    Zero is "0". Negative or oversized input is an encoder bug: signed values
    must be mapped (see wrap_u32) before they reach the writer.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncoderMisuseError(f"hex_u expects int, got {type(value).__name__}")
    if value < 0:
        raise EncoderMisuseError(f"hex_u got negative value {value}")
    if value >= U64_LIMIT:
        raise EncoderMisuseError(f"hex_u got value wider than 64 bits: {value}")
    return format(value, "x")


def wrap_u32(value: int) -> int:
    """Two's complement projection of a signed int onto u32."""
    return value & U32_MASK


def f32_bits(value: float) -> int:
    """Round to single precision and return the raw 32-bit pattern."""
    if value != value:
        return _F32_NAN_BITS
    return _U32.unpack(_F32.pack(value))[0]


def f64_bits(value: float) -> int:
    """Raw 64-bit pattern of a double."""
    if value != value:
        return _F64_NAN_BITS
    return _U64.unpack(_F64.pack(value))[0]


__all__ = ["U32_MASK", "hex_u", "wrap_u32", "f32_bits", "f64_bits"]

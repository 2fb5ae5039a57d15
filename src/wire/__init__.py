# wire package
# src/wire/__init__.py
"""
Text wire format used by every output file.

- hexfmt:  lowercase hex, IEEE-754 bit patterns, u32 wrapping
- section: `;name;tag;size` headers and plain bodies
- rle:     run-length column bodies
- delta:   `value - prev - 1` column helper
- buffer:  the run's scratch buffer
"""

from __future__ import annotations

from .buffer import ScratchBuffer
from .delta import DeltaEncoder, delta_column
from .hexfmt import f32_bits, f64_bits, hex_u, wrap_u32
from .rle import RunLengthWriter, write_rle
from .section import (
    TypeTag,
    format_row,
    write_array_section,
    write_head,
    write_rle_section,
    write_str_section,
    write_u32_section,
    write_u64_section,
)

__all__ = [
    "ScratchBuffer",
    "DeltaEncoder",
    "delta_column",
    "f32_bits",
    "f64_bits",
    "hex_u",
    "wrap_u32",
    "RunLengthWriter",
    "write_rle",
    "TypeTag",
    "format_row",
    "write_array_section",
    "write_head",
    "write_rle_section",
    "write_str_section",
    "write_u32_section",
    "write_u64_section",
]

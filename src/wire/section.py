# src/wire/section.py
"""
Section emitter.

A section is a header line

    ;<name>;<type-tag>;<hex-size>

followed by its body. `size` is always the logical item count; only RLE
columns may have fewer body lines than items. Anything after a `#` in the
name is a human-readable field description with no machine meaning.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Sequence

from datagen.errors import EncoderMisuseError

from .buffer import ScratchBuffer
from .hexfmt import hex_u
from .rle import write_rle


class TypeTag(str, Enum):
    """Closed set of body encodings."""

    STR = "str"
    U32 = "u32"
    U64 = "u64"
    U32_ARRAY = "[u32]"
    U32_RLE = "u32+rle"


def write_head(buf: ScratchBuffer, name: str, tag: TypeTag, size: int) -> None:
    if ";" in name or "\n" in name:
        raise EncoderMisuseError(f"section name {name!r} contains a separator")
    buf.line(f";{name};{tag.value};{hex_u(size)}")
    buf.sections += 1


def write_str_section(buf: ScratchBuffer, name: str, values: Sequence[str]) -> None:
    write_head(buf, name, TypeTag.STR, len(values))
    for value in values:
        buf.line(value)


def write_u32_section(buf: ScratchBuffer, name: str, values: Sequence[int]) -> None:
    write_head(buf, name, TypeTag.U32, len(values))
    for value in values:
        buf.line(hex_u(value))


def write_u64_section(buf: ScratchBuffer, name: str, values: Sequence[int]) -> None:
    write_head(buf, name, TypeTag.U64, len(values))
    for value in values:
        buf.line(hex_u(value))


def format_row(row: Iterable[int]) -> str:
    """Space-separated hex; an empty row is an empty string."""
    return " ".join(hex_u(x) for x in row)


def write_array_section(
    buf: ScratchBuffer,
    name: str,
    rows: Sequence[Sequence[int]],
) -> None:
    write_head(buf, name, TypeTag.U32_ARRAY, len(rows))
    for row in rows:
        buf.line(format_row(row))


def write_rle_section(
    buf: ScratchBuffer,
    name: str,
    values: Iterable[int],
    size: int,
) -> None:
    """
    Header plus RLE body. `size` must equal the number of values produced;
    the header is written first, so a mismatch is only detected afterwards
    and is treated as a programmer error.
    """
    write_head(buf, name, TypeTag.U32_RLE, size)
    written = write_rle(buf, values)
    if written != size:
        raise EncoderMisuseError(
            f"RLE column {name!r} declared {size} items but produced {written}"
        )

# tests/wire_reader.py
"""
Minimal reader for the text wire format, used only to check what the
encoders wrote. Sections are keyed by the part of the name before '#'.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple


@dataclass
class Section:
    name: str
    tag: str
    size: int
    lines: List[str] = field(default_factory=list)
    values: List[Any] = field(default_factory=list)


def decode_rle(lines: Iterator[str], size: int) -> Tuple[List[int], List[str]]:
    values: List[int] = []
    used: List[str] = []
    while len(values) < size:
        line = next(lines)
        used.append(line)
        if line.startswith("~"):
            count, value = line[1:].split(" ")
            values.extend([int(value, 16)] * int(count, 16))
        else:
            values.append(int(line, 16))
    assert len(values) == size, "RLE run overshoots the declared size"
    return values, used


def parse_sections(text: str) -> Dict[str, Section]:
    lines = iter(text.split("\n"))
    out: Dict[str, Section] = {}
    for line in lines:
        if line == "":
            continue
        assert line.startswith(";"), f"expected a header, got {line!r}"
        _, name, tag, size_hex = line.split(";")
        size = int(size_hex, 16)
        section = Section(name=name, tag=tag, size=size)
        if tag == "u32+rle":
            section.values, section.lines = decode_rle(lines, size)
        else:
            section.lines = [next(lines) for _ in range(size)]
            if tag == "str":
                section.values = list(section.lines)
            elif tag in ("u32", "u64"):
                section.values = [int(x, 16) for x in section.lines]
            elif tag == "[u32]":
                section.values = [[int(x, 16) for x in l.split()] for l in section.lines]
            else:
                raise AssertionError(f"unknown type tag {tag!r}")
        out[name.split("#", 1)[0]] = section
    return out


def section_names(text: str) -> List[str]:
    return [l.split(";")[1].split("#", 1)[0] for l in text.split("\n") if l.startswith(";")]

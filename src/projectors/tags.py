# src/projectors/tags.py
"""
Tag emitter.

For one registry: tags sorted by name, each written as the name line and a
line of ascending member ids (`<hex> ` per member, so the line keeps a
trailing space; an empty tag gives an empty line). No section headers.
"""

from __future__ import annotations

from host.protocol import Host
from wire import ScratchBuffer, hex_u


def write_tags(buf: ScratchBuffer, host: Host, registry: str) -> None:
    for tag in sorted(host.tags(registry), key=lambda t: t.name):
        buf.line(tag.name)
        buf.line("".join(f"{hex_u(i)} " for i in sorted(tag.member_ids)))

# intern package
# src/intern/__init__.py
"""Dense-id intern tables shared by the projectors."""

from __future__ import annotations

from .table import (
    InternTable,
    collapse_uniform,
    float32_table,
    float64_table,
    shape_table,
    string_table,
    tuple_table,
)

__all__ = [
    "InternTable",
    "collapse_uniform",
    "float32_table",
    "float64_table",
    "shape_table",
    "string_table",
    "tuple_table",
]

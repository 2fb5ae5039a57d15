# src/intern/table.py
"""
Structural intern tables.

An InternTable hands out dense ids in first-seen order:

  - ids are contiguous from 0
  - a value keeps the id it got on first insertion
  - looking up an equal value returns that id
  - iteration yields values in id order

Equality goes through a `key` function so composite values (lists of ints,
lists of boxes) compare structurally and floats can compare by bit pattern.
The table stores an immutable copy of every value it keeps.
"""

from __future__ import annotations

from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from wire.hexfmt import f32_bits, f64_bits

V = TypeVar("V")

KeyFn = Callable[[Any], Hashable]


class InternTable(Generic[V]):
    """
    Value -> dense id deduplicator.

    Parameters
    ----------
    name:
        Used in error messages only.
    key:
        Maps a value to its identity. Defaults to the value itself.
    store:
        Maps a value to the copy kept in the table (e.g. list -> tuple).
    seed:
        Values interned up front; they take ids 0, 1, ... in order.
    """

    def __init__(
        self,
        name: str,
        key: Optional[KeyFn] = None,
        store: Optional[Callable[[Any], V]] = None,
        seed: Iterable[Any] = (),
    ) -> None:
        self.name = name
        self._key: KeyFn = key or (lambda v: v)
        self._store: Callable[[Any], V] = store or (lambda v: v)
        self._ids: Dict[Hashable, int] = {}
        self._values: List[V] = []
        for value in seed:
            self.intern(value)

    def intern(self, value: Any) -> int:
        """Return the id of `value`, inserting it if unseen."""
        k = self._key(value)
        found = self._ids.get(k)
        if found is not None:
            return found
        new_id = len(self._values)
        self._ids[k] = new_id
        self._values.append(self._store(value))
        return new_id

    def get(self, value: Any) -> Optional[int]:
        return self._ids.get(self._key(value))

    def lookup(self, value: Any) -> int:
        """Id of a value that must already be present."""
        found = self._ids.get(self._key(value))
        if found is None:
            raise KeyError(f"{self.name}: value {value!r} was never interned")
        return found

    def value(self, id_: int) -> V:
        return self._values[id_]

    def items(self) -> Iterator[Tuple[int, V]]:
        return iter(enumerate(self._values))

    def __contains__(self, value: Any) -> bool:
        return self._key(value) in self._ids

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[V]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"InternTable({self.name!r}, size={len(self._values)})"


# ---------------------------------------------------------------------------
# Factories for the tables the projectors use
# ---------------------------------------------------------------------------

IntTuple = Tuple[int, ...]


def string_table(name: str) -> InternTable[str]:
    return InternTable(name)


def tuple_table(name: str, seed_empty: bool = False) -> InternTable[IntTuple]:
    """Integer tuples; optionally seeded with () at id 0."""
    return InternTable(
        name,
        key=tuple,
        store=tuple,
        seed=[()] if seed_empty else (),
    )


def float32_table(name: str = "float32") -> InternTable[int]:
    """
    Single-precision floats keyed (and stored) by their bit pattern.

    Seeded with 0.0 -> 0 and 1.0 -> 1.
    """
    return InternTable(name, key=f32_bits, store=f32_bits, seed=[0.0, 1.0])


def float64_table(name: str = "float64") -> InternTable[int]:
    """Doubles keyed (and stored) by bit pattern, seeded with 0.0 and 1.0."""
    return InternTable(name, key=f64_bits, store=f64_bits, seed=[0.0, 1.0])


def _shape_key(boxes: Sequence[Sequence[float]]) -> Tuple[Tuple[int, ...], ...]:
    return tuple(tuple(f64_bits(c) for c in box) for box in boxes)


def _shape_store(boxes: Sequence[Sequence[float]]) -> Tuple[Tuple[float, ...], ...]:
    return tuple(tuple(box) for box in boxes)


def shape_table(name: str = "shape") -> InternTable[Tuple[Tuple[float, ...], ...]]:
    """Ordered lists of boxes (six doubles each), compared coordinate-bitwise."""
    return InternTable(name, key=_shape_key, store=_shape_store)


def collapse_uniform(ids: Sequence[int]) -> IntTuple:
    """
    Per-state tuples whose elements are all equal shrink to a 1-tuple.

    An empty sequence stays empty.
    """
    if ids and all(x == ids[0] for x in ids):
        return (ids[0],)
    return tuple(ids)

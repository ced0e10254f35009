"""Combination iterators: odometer, lockstep, and row enumeration.

Each iterator owns private cursor state and yields immutable
:class:`Combination` objects, so a caller may keep a combination after the
iterator advances.  Iterators are single-pass and single-reader: once
exhausted, build a new one to enumerate again.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from typing import Any

from paramatrix.domain.dimensions import Combination, Dimension
from paramatrix.domain.types import EnumerationMode


class OdometerIterator(Iterator[Combination]):
    """Cross product of all dimensions as a mixed-radix counter.

    The last dimension varies fastest and the first varies slowest.  An
    empty dimension set, or a set containing any empty dimension, yields
    nothing.

    Example:
        >>> dims = [Dimension(values=[1, 2]), Dimension(values=["A", "B"])]
        >>> [c.values for c in OdometerIterator(dims)]
        [(1, 'A'), (1, 'B'), (2, 'A'), (2, 'B')]
    """

    def __init__(self, dimensions: Sequence[Dimension]) -> None:
        self._columns: tuple[tuple[Any, ...], ...] = tuple(d.values for d in dimensions)
        self._sizes: tuple[int, ...] = tuple(len(c) for c in self._columns)
        self._indexes: list[int] = [0] * len(self._sizes)
        self._ordinal = 0
        self._empty = not self._sizes or 0 in self._sizes

    @property
    def total(self) -> int:
        """Number of combinations in the full cross product."""
        return 0 if self._empty else math.prod(self._sizes)

    def __iter__(self) -> OdometerIterator:
        return self

    def __length_hint__(self) -> int:
        return self.total - self._ordinal

    def has_next(self) -> bool:
        """Exhausted exactly when the first dimension's index passes its size."""
        if self._empty:
            return False
        return self._indexes[0] < self._sizes[0]

    def __next__(self) -> Combination:
        if not self.has_next():
            raise StopIteration
        indices = tuple(self._indexes)
        values = tuple(column[i] for column, i in zip(self._columns, indices, strict=True))
        combination = Combination(values=values, indices=indices, ordinal=self._ordinal)
        self._ordinal += 1
        self._tick()
        return combination

    def _tick(self) -> None:
        # Rightmost column first; carry left on overflow.  The first column
        # is never reset so has_next() can see it run past its bound.
        for column in range(len(self._sizes) - 1, -1, -1):
            self._indexes[column] += 1
            if self._indexes[column] < self._sizes[column]:
                return
            if column > 0:
                self._indexes[column] = 0


class LockstepIterator(Iterator[Combination]):
    """Positional zip of dimensions, one combination per declared row.

    Dimension *i* is row *i* of a table.  Combination *k* takes the *k*-th
    value of every row, so every value in it sits at index *k*.  The
    sequence length is the number of rows, capped by the shortest row.
    """

    def __init__(self, dimensions: Sequence[Dimension]) -> None:
        self._rows: tuple[tuple[Any, ...], ...] = tuple(d.values for d in dimensions)
        if self._rows:
            self._count = min(len(self._rows), *(len(r) for r in self._rows))
        else:
            self._count = 0
        self._position = 0

    @property
    def total(self) -> int:
        return self._count

    def __iter__(self) -> LockstepIterator:
        return self

    def __length_hint__(self) -> int:
        return self._count - self._position

    def __next__(self) -> Combination:
        if self._position >= self._count:
            raise StopIteration
        k = self._position
        self._position += 1
        values = tuple(row[k] for row in self._rows)
        return Combination(values=values, indices=(k,) * len(values), ordinal=k)


class RowIterator(Iterator[Combination]):
    """One combination per pre-built argument row.

    Lockstep enumeration over the transposed table: combination *k* is
    row *k* verbatim.  Rows may differ in width.
    """

    def __init__(self, dimensions: Sequence[Dimension]) -> None:
        self._rows: tuple[tuple[Any, ...], ...] = tuple(d.values for d in dimensions)
        self._position = 0

    @property
    def total(self) -> int:
        return len(self._rows)

    def __iter__(self) -> RowIterator:
        return self

    def __length_hint__(self) -> int:
        return len(self._rows) - self._position

    def __next__(self) -> Combination:
        if self._position >= len(self._rows):
            raise StopIteration
        k = self._position
        self._position += 1
        row = self._rows[k]
        return Combination(values=row, indices=(k,) * len(row), ordinal=k)


_ITERATORS: dict[EnumerationMode, type[OdometerIterator | LockstepIterator | RowIterator]] = {
    EnumerationMode.ODOMETER: OdometerIterator,
    EnumerationMode.LOCKSTEP: LockstepIterator,
    EnumerationMode.ROWS: RowIterator,
}


def iterate(
    mode: EnumerationMode, dimensions: Sequence[Dimension]
) -> OdometerIterator | LockstepIterator | RowIterator:
    """Build a fresh iterator for *mode* over *dimensions*."""
    return _ITERATORS[mode](dimensions)

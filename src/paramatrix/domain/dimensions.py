"""Dimensions and combinations.

A Dimension is one ordered list of candidate values, optionally named for
attribute binding.  A Combination is one produced tuple: a value from each
dimension plus the index of that value within its dimension.

INVARIANT: Combination values are always in dimension declaration order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, field_validator


class Dimension(BaseModel):
    """An immutable, possibly empty sequence of opaque candidate values.

    Attributes:
        name: Attribute name for injection, or None for positional binding.
        values: Candidate values in declaration order.
    """

    model_config = {"frozen": True}

    name: str | None = None
    values: tuple[Any, ...] = ()

    @field_validator("values", mode="before")
    @classmethod
    def _capture(cls, value: Any) -> tuple[Any, ...]:
        if isinstance(value, (str, bytes)):
            raise ValueError("Dimension values must be a collection, not a string")
        return tuple(value)

    @property
    def size(self) -> int:
        """Number of candidate values."""
        return len(self.values)

    def __len__(self) -> int:
        return len(self.values)


def dimensions_from(
    values: Iterable[Iterable[Any]],
    names: Iterable[str | None] | None = None,
) -> tuple[Dimension, ...]:
    """Capture raw value lists as a tuple of Dimensions.

    *names*, when given, are zipped onto the value lists in order.
    """
    captured = [tuple(v) for v in values]
    if names is None:
        return tuple(Dimension(values=v) for v in captured)
    return tuple(
        Dimension(name=n, values=v) for n, v in zip(names, captured, strict=True)
    )


@dataclass(frozen=True, slots=True)
class Combination:
    """One selected value per dimension plus each value's index.

    Attributes:
        values: Selected values, one per dimension.
        indices: Index of each value within its dimension.
        ordinal: 0-based position of this combination in its sequence.
    """

    values: tuple[Any, ...]
    indices: tuple[int, ...]
    ordinal: int = 0

    def __len__(self) -> int:
        return len(self.values)

    def describe(self) -> str:
        return ", ".join(
            f"{i}:{v!r}" for i, v in zip(self.indices, self.values, strict=True)
        )

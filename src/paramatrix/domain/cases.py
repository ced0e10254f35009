"""Cases: one bound subject, its selected operations, and its name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from paramatrix.domain.dimensions import Combination
from paramatrix.domain.errors import BindingError


@dataclass(frozen=True)
class Case:
    """One fully bound subject ready for the hosting framework to execute.

    A failed case carries the binding error and no subject; the host is
    expected to report it as an individual failure.

    Attributes:
        name: Rendered case name.
        combination: The combination the subject was bound from.
        operations: Names of the operations to run against the subject.
        subject: The fresh subject instance, or None when binding failed.
        error: Why binding failed, or None.
        source: Name of the declaration this case came from.
    """

    name: str
    combination: Combination
    operations: tuple[str, ...]
    subject: Any = None
    error: BindingError | None = None
    source: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def test_ids(self) -> tuple[str, ...]:
        """Per-operation identifiers, e.g. ``test_add[0, 1]``."""
        return tuple(f"{op}{self.name}" for op in self.operations)

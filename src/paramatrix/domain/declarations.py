"""Declarations: the unit of input to the engine.

A declaration couples a dimension set with an operation-matching pattern,
a case-name template, and an optional ordered list of attribute names.
Subject types declare sources with the decorators below; each decorated
function returns the raw values that become the declaration's dimensions.

Example::

    class TestAdder:
        left: int = 0
        right: int = 0

        @combinations(tests="test_.*", name="{0}+{1}")
        def operands():
            return {"left": [1, 2], "right": [10, 20]}

        def test_sum(self) -> None:
            assert self.left + self.right > 0
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel

from paramatrix.domain.dimensions import Dimension
from paramatrix.domain.naming import DEFAULT_TEMPLATE
from paramatrix.domain.types import BindingStrategy, EnumerationMode

SPEC_ATTRIBUTE = "__paramatrix_declaration__"
MATCH_ALL = ".*"
ROWS_TEMPLATE = "[{index}]"


class Declaration(BaseModel):
    """One source of dimensions plus its matching rule and name template.

    Attributes:
        source: Name of the declaring source (used in failure reports).
        mode: Odometer, lockstep, or row enumeration.
        dimensions: The dimension set, in declaration order.
        tests: Regex an operation name must fully match to run; None
            defers to the engine default (match everything).
        name: Case-name template; None selects the mode's default.
        attributes: Attribute names for injection; empty means constructor.
    """

    model_config = {"frozen": True}

    source: str = "<inline>"
    mode: EnumerationMode = EnumerationMode.ODOMETER
    dimensions: tuple[Dimension, ...] = ()
    tests: str | None = None
    name: str | None = None
    attributes: tuple[str, ...] = ()

    @property
    def strategy(self) -> BindingStrategy:
        if self.attributes:
            return BindingStrategy.ATTRIBUTES
        return BindingStrategy.CONSTRUCTOR

    @property
    def template(self) -> str:
        """The effective name template."""
        if self.name:
            return self.name
        if self.mode is EnumerationMode.ROWS:
            return ROWS_TEMPLATE
        return DEFAULT_TEMPLATE

    @property
    def width(self) -> int:
        """Number of dimensions (rows, in row mode)."""
        return len(self.dimensions)


class DeclarationSpec(BaseModel):
    """Decorator metadata recorded on a source function."""

    model_config = {"frozen": True}

    mode: EnumerationMode
    tests: str | None = None
    name: str | None = None
    attributes: tuple[str, ...] = ()
    keyed: bool = False


_F = TypeVar("_F")


def _declare(spec: DeclarationSpec) -> Callable[[_F], _F]:
    def decorator(func: Any) -> Any:
        target = func.__func__ if isinstance(func, (staticmethod, classmethod)) else func
        setattr(target, SPEC_ATTRIBUTE, spec)
        if isinstance(func, (staticmethod, classmethod)):
            return func
        return staticmethod(func)

    return decorator


def combinations(*, tests: str | None = None, name: str | None = None) -> Callable[[_F], _F]:
    """Source returning ``{attribute: values}``; cross product, injected by name."""
    return _declare(
        DeclarationSpec(mode=EnumerationMode.ODOMETER, tests=tests, name=name, keyed=True)
    )


def permutations(*, tests: str | None = None, name: str | None = None) -> Callable[[_F], _F]:
    """Source returning one value list per constructor argument; cross product."""
    return _declare(DeclarationSpec(mode=EnumerationMode.ODOMETER, tests=tests, name=name))


def lockstep(
    *,
    tests: str | None = None,
    name: str | None = None,
    attributes: tuple[str, ...] | list[str] = (),
) -> Callable[[_F], _F]:
    """Source returning one value list per dimension; zipped positionally."""
    return _declare(
        DeclarationSpec(
            mode=EnumerationMode.LOCKSTEP,
            tests=tests,
            name=name,
            attributes=tuple(attributes),
        )
    )


def parameters(
    *,
    tests: str | None = None,
    name: str | None = None,
    attributes: tuple[str, ...] | list[str] = (),
) -> Callable[[_F], _F]:
    """Source returning one complete argument row per case."""
    return _declare(
        DeclarationSpec(
            mode=EnumerationMode.ROWS,
            tests=tests,
            name=name,
            attributes=tuple(attributes),
        )
    )

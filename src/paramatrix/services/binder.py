"""Binder: turns one combination into one fresh subject instance.

Constructor strategy passes the combination's values as positional
arguments.  Attribute strategy builds the subject with no arguments and
applies each value through its resolved slot, in declaration order.

INVARIANT: Every bind() call builds a new instance; nothing is shared
between combinations.
"""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Mapping, Sequence
from typing import Any

from paramatrix.domain.dimensions import Combination
from paramatrix.domain.errors import BindingError, DeclarationError
from paramatrix.domain.slots import Slot, check_value
from paramatrix.domain.types import BindingStrategy, ErrorCode

logger = logging.getLogger(__name__)


def check_constructor(subject_type: Any, strategy: BindingStrategy) -> inspect.Signature | None:
    """Validate that *subject_type* can be instantiated under *strategy*.

    Returns the constructor signature, or None when it cannot be
    introspected (some builtins and extension types).

    Raises:
        DeclarationError: ``INVALID_CONSTRUCTOR``.
    """
    if not inspect.isclass(subject_type):
        raise DeclarationError(
            ErrorCode.INVALID_CONSTRUCTOR,
            f"Subject {subject_type!r} is not a class",
        )
    name = subject_type.__qualname__
    if inspect.isabstract(subject_type):
        raise DeclarationError(
            ErrorCode.INVALID_CONSTRUCTOR,
            f"Subject {name} is abstract and has no usable constructor",
            detail={"subject": name},
        )
    try:
        signature = inspect.signature(subject_type)
    except (TypeError, ValueError):
        logger.debug("No introspectable constructor on %s", name)
        return None

    if strategy is BindingStrategy.ATTRIBUTES:
        try:
            signature.bind()
        except TypeError as exc:
            raise DeclarationError(
                ErrorCode.INVALID_CONSTRUCTOR,
                f"Subject {name} must be constructible without arguments "
                f"for attribute injection: {exc}",
                detail={"subject": name, "signature": str(signature)},
            ) from exc
    return signature


class Binder:
    """Binds combinations of one declaration to fresh subject instances.

    Built once per declaration from its resolved slots and constructor
    signature; bind() is then called once per combination.
    """

    def __init__(
        self,
        subject_type: type,
        strategy: BindingStrategy,
        *,
        slots: Mapping[str, Slot] | None = None,
        attribute_names: Sequence[str] = (),
        signature: inspect.Signature | None = None,
        check_types: bool = True,
    ) -> None:
        self.subject_type = subject_type
        self.strategy = strategy
        self.slots = dict(slots or {})
        self.attribute_names = tuple(attribute_names)
        self.signature = signature
        self.check_types = check_types
        self._parameter_types = _constructor_hints(subject_type) if check_types else {}

    def bind(self, combination: Combination) -> object:
        """Build one subject for *combination*.

        Raises:
            BindingError: ``TYPE_MISMATCH``, ``ARITY_MISMATCH``, or
                ``BIND_FAILED``; fatal to this combination only.
        """
        if self.strategy is BindingStrategy.ATTRIBUTES:
            return self._bind_attributes(combination)
        return self._bind_constructor(combination)

    def _bind_constructor(self, combination: Combination) -> object:
        values = combination.values
        if self.signature is not None:
            try:
                bound = self.signature.bind(*values)
            except TypeError as exc:
                raise BindingError(
                    ErrorCode.ARITY_MISMATCH,
                    f"{self.subject_type.__qualname__}{self.signature} cannot take "
                    f"{len(values)} positional argument(s): {exc}",
                    detail={"arguments": len(values), "signature": str(self.signature)},
                ) from exc
            if self.check_types:
                self._check_arguments(bound)
        return _construct(self.subject_type, values)

    def _check_arguments(self, bound: inspect.BoundArguments) -> None:
        for name, value in bound.arguments.items():
            expected = self._parameter_types.get(name, Any)
            parameter = bound.signature.parameters[name]
            if parameter.kind is parameter.VAR_POSITIONAL:
                for item in value:
                    check_value(name, item, expected)
            else:
                check_value(name, value, expected)

    def _bind_attributes(self, combination: Combination) -> object:
        values = combination.values
        if len(values) != len(self.attribute_names):
            raise BindingError(
                ErrorCode.ARITY_MISMATCH,
                f"Number of attribute names ({len(self.attribute_names)}) does not match "
                f"the number of values ({len(values)})",
                detail={"attributes": list(self.attribute_names), "values": len(values)},
            )
        subject = _construct(self.subject_type, ())
        for name, value in zip(self.attribute_names, values, strict=True):
            slot = self.slots[name]
            if self.check_types:
                check_value(name, value, slot.expected_type)
            try:
                slot.apply(subject, value)
            except Exception as exc:
                raise BindingError(
                    ErrorCode.BIND_FAILED,
                    f"Binding {name!r} via {slot.kind.value} failed: {exc}",
                    detail={
                        "attribute": name,
                        "slot": slot.kind.value,
                        "exception": type(exc).__name__,
                    },
                ) from exc
        return subject


def _construct(subject_type: type, values: Sequence[Any]) -> object:
    try:
        return subject_type(*values)
    except Exception as exc:
        raise BindingError(
            ErrorCode.BIND_FAILED,
            f"Constructing {subject_type.__qualname__} failed: {exc}",
            detail={"exception": type(exc).__name__},
        ) from exc


def _constructor_hints(subject_type: type) -> dict[str, Any]:
    init = getattr(subject_type, "__init__", None)
    if init is None or init is object.__init__:
        return {}
    try:
        hints = typing.get_type_hints(init)
    except (NameError, SyntaxError, TypeError):
        logger.debug("Unresolvable constructor annotations on %s", subject_type.__qualname__)
        return {}
    hints.pop("return", None)
    return hints

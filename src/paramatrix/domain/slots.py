"""Capability resolution: attribute names to bindable slots.

A slot is where one declared attribute value lands on a subject instance:
either a public field (plain assignment) or a public setter method
(``value`` -> ``setValue``).  Slots are resolved once per declaration and
reused for every combination of it.
"""

from __future__ import annotations

import inspect
import logging
import types
import typing
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Union

from paramatrix.domain.errors import BindingError, DeclarationError
from paramatrix.domain.types import ErrorCode, SlotKind

logger = logging.getLogger(__name__)

DEFAULT_SETTER_PREFIX = "set"

# Sentinel for "no expected type known".
_UNCHECKED: Any = Any


@dataclass(frozen=True, slots=True)
class FieldSlot:
    """A public field assigned directly."""

    name: str
    expected_type: Any = _UNCHECKED

    @property
    def kind(self) -> SlotKind:
        return SlotKind.FIELD

    def apply(self, subject: object, value: Any) -> None:
        setattr(subject, self.name, value)


@dataclass(frozen=True, slots=True)
class SetterSlot:
    """A public one-argument setter method invoked with the value."""

    name: str
    method_name: str
    expected_type: Any = _UNCHECKED

    @property
    def kind(self) -> SlotKind:
        return SlotKind.SETTER

    def apply(self, subject: object, value: Any) -> None:
        getattr(subject, self.method_name)(value)


Slot = FieldSlot | SetterSlot


def setter_name(attribute: str, prefix: str = DEFAULT_SETTER_PREFIX) -> str:
    """Setter method name for *attribute* (``value`` -> ``setValue``)."""
    return prefix + attribute[:1].upper() + attribute[1:]


def resolve_slots(
    subject_type: type,
    attribute_names: Iterable[str],
    *,
    setter_prefix: str = DEFAULT_SETTER_PREFIX,
) -> dict[str, Slot]:
    """Resolve every attribute name to a slot on *subject_type*.

    Fields win over setters.  Matching is exact and case-sensitive.
    An empty name list resolves to an empty mapping, which callers read as
    the constructor binding strategy.

    Raises:
        DeclarationError: ``NO_ACCESSIBLE_SLOT`` naming the first
            attribute with neither a field nor a setter.
    """
    names = list(attribute_names)
    if not names:
        return {}

    hints = _type_hints(subject_type)
    fields = public_fields(subject_type, hints)

    slots: dict[str, Slot] = {}
    for name in names:
        if not name:
            raise DeclarationError(
                ErrorCode.NO_ACCESSIBLE_SLOT,
                f"Empty attribute name on {subject_type.__qualname__}",
                detail={"attribute": name},
            )
        if name in fields:
            slots[name] = FieldSlot(name=name, expected_type=hints.get(name, _UNCHECKED))
            continue
        method_name = setter_name(name, setter_prefix)
        parameter_type = _setter_parameter_type(subject_type, method_name)
        if parameter_type is None:
            raise DeclarationError(
                ErrorCode.NO_ACCESSIBLE_SLOT,
                f"No public field or set method for attribute {name!r} "
                f"on {subject_type.__qualname__}",
                detail={"attribute": name, "setter": method_name},
            )
        slots[name] = SetterSlot(name=name, method_name=method_name, expected_type=parameter_type)

    logger.debug(
        "Resolved slots for %s: %s",
        subject_type.__qualname__,
        {n: s.kind.value for n, s in slots.items()},
    )
    return slots


def public_fields(subject_type: type, hints: dict[str, Any] | None = None) -> set[str]:
    """Names on *subject_type* that accept plain assignment."""
    if hints is None:
        hints = _type_hints(subject_type)
    found: set[str] = set(hints)
    for klass in reversed(subject_type.__mro__):
        if klass is object:
            continue
        slot_names = klass.__dict__.get("__slots__", ())
        if isinstance(slot_names, str):
            slot_names = (slot_names,)
        found.update(slot_names)
        for attr, raw in klass.__dict__.items():
            if isinstance(raw, property):
                if raw.fset is not None:
                    found.add(attr)
                else:
                    found.discard(attr)
            elif isinstance(raw, (staticmethod, classmethod)) or inspect.isroutine(raw):
                found.discard(attr)
            elif hasattr(type(raw), "__set__"):
                found.add(attr)
            elif not callable(raw) and not attr.startswith("__"):
                found.add(attr)
    found -= _class_vars(subject_type)
    return {name for name in found if not name.startswith("_")}


def _class_vars(subject_type: type) -> set[str]:
    names: set[str] = set()
    for klass in subject_type.__mro__:
        for name, annotation in getattr(klass, "__annotations__", {}).items():
            if isinstance(annotation, str):
                if annotation.split("[", 1)[0].rsplit(".", 1)[-1] == "ClassVar":
                    names.add(name)
            elif typing.get_origin(annotation) is typing.ClassVar or annotation is typing.ClassVar:
                names.add(name)
    return names


def _setter_parameter_type(subject_type: type, method_name: str) -> Any | None:
    """Expected value type of a one-argument setter, or None if absent."""
    if method_name.startswith("_"):
        return None
    method = getattr(subject_type, method_name, None)
    if method is None or not callable(method):
        return None
    try:
        signature = inspect.signature(method)
    except (TypeError, ValueError):
        return None

    parameters = list(signature.parameters.values())
    raw = inspect.getattr_static(subject_type, method_name, None)
    if not isinstance(raw, (staticmethod, classmethod)) and parameters:
        parameters = parameters[1:]  # self
    positional = [p for p in parameters if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)]
    if len(positional) != 1 or len(parameters) != 1:
        return None

    try:
        hints = typing.get_type_hints(getattr(method, "__func__", method))
    except (NameError, SyntaxError, TypeError):
        logger.debug("Unresolvable annotations on %s", method_name, exc_info=True)
        hints = {}
    return hints.get(positional[0].name, _UNCHECKED)


def _type_hints(subject_type: type) -> dict[str, Any]:
    """Resolved annotations across the MRO; unresolvable ones are unchecked."""
    try:
        hints = typing.get_type_hints(subject_type)
    except (NameError, SyntaxError, TypeError):
        logger.debug("Unresolvable annotations on %s", subject_type.__qualname__, exc_info=True)
        hints = {}
        for klass in reversed(subject_type.__mro__):
            for name in getattr(klass, "__annotations__", {}):
                hints[name] = _UNCHECKED
    return {
        name: hint
        for name, hint in hints.items()
        if typing.get_origin(hint) is not typing.ClassVar
    }


def matches_type(value: Any, expected: Any) -> bool:
    """Whether *value* is acceptable for an annotation.

    Unions match any member, generics match their origin class, and the
    numeric tower is honoured.  Annotations that are not classes (type
    variables, literals, protocols without runtime support) always match.
    """
    if expected is Any:
        return True
    if expected is None or expected is type(None):
        return value is None
    origin = typing.get_origin(expected)
    if origin is Union or origin is types.UnionType:
        return any(matches_type(value, arg) for arg in typing.get_args(expected))
    if origin is typing.Annotated:
        return matches_type(value, typing.get_args(expected)[0])
    if origin is typing.Literal:
        return value in typing.get_args(expected)
    if origin is not None:
        expected = origin
    if not isinstance(expected, type):
        return True
    if expected is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if expected is complex:
        return isinstance(value, (int, float, complex)) and not isinstance(value, bool)
    try:
        return isinstance(value, expected)
    except TypeError:
        return True


def check_value(slot_name: str, value: Any, expected: Any) -> None:
    """Raise ``TYPE_MISMATCH`` when *value* does not fit *expected*."""
    if matches_type(value, expected):
        return
    raise BindingError(
        ErrorCode.TYPE_MISMATCH,
        f"Value {value!r} for {slot_name!r} is not of type {_type_label(expected)}",
        detail={"slot": slot_name, "value": repr(value), "expected": _type_label(expected)},
    )


def _type_label(expected: Any) -> str:
    return getattr(expected, "__qualname__", None) or repr(expected)

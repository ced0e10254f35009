"""Declaration discovery: find and invoke a subject type's sources.

A source is a function in the subject's class body decorated with one of
:func:`~paramatrix.domain.declarations.combinations`,
:func:`~paramatrix.domain.declarations.permutations`,
:func:`~paramatrix.domain.declarations.lockstep`, or
:func:`~paramatrix.domain.declarations.parameters`.  Each source is
invoked once and its return value captured as a :class:`Declaration`.

A broken source fails only its own declaration.  A subject with no
sources at all raises :class:`NoSourceError`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from paramatrix.domain.declarations import SPEC_ATTRIBUTE, Declaration, DeclarationSpec
from paramatrix.domain.dimensions import Dimension
from paramatrix.domain.errors import DeclarationError, NoSourceError
from paramatrix.domain.types import ErrorCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeclarationOutcome:
    """A discovered source: its declaration, or why it could not be built."""

    source: str
    declaration: Declaration | None = None
    error: DeclarationError | None = None


def find_sources(subject_type: type) -> dict[str, tuple[Any, DeclarationSpec]]:
    """Decorated sources on *subject_type*, base classes first, overrides win."""
    sources: dict[str, tuple[Any, DeclarationSpec]] = {}
    for klass in reversed(subject_type.__mro__):
        if klass is object:
            continue
        for name, raw in klass.__dict__.items():
            func = raw.__func__ if isinstance(raw, (staticmethod, classmethod)) else raw
            spec = getattr(func, SPEC_ATTRIBUTE, None)
            if isinstance(spec, DeclarationSpec):
                sources[name] = (raw, spec)
            else:
                sources.pop(name, None)
    return sources


def discover_declarations(subject_type: type) -> list[DeclarationOutcome]:
    """Invoke every source on *subject_type* and capture its declaration.

    Raises:
        NoSourceError: *subject_type* declares no sources.
    """
    sources = find_sources(subject_type)
    if not sources:
        raise NoSourceError(subject_type.__qualname__)

    outcomes: list[DeclarationOutcome] = []
    for name, (raw, spec) in sources.items():
        source = f"{subject_type.__qualname__}.{name}"
        try:
            try:
                returned = _invoke(subject_type, raw)
            except Exception as exc:
                raise DeclarationError(
                    ErrorCode.SOURCE_FAILED,
                    f"{source}() raised {type(exc).__name__}: {exc}",
                    detail={"source": source, "exception": type(exc).__name__},
                ) from exc
            declaration = build_declaration(source, spec, returned)
        except DeclarationError as exc:
            logger.warning("Declaration source %s rejected: %s", source, exc.message)
            outcomes.append(DeclarationOutcome(source=source, error=exc))
            continue
        outcomes.append(DeclarationOutcome(source=source, declaration=declaration))
    return outcomes


def build_declaration(source: str, spec: DeclarationSpec, returned: Any) -> Declaration:
    """Capture a source's return value as a Declaration.

    Raises:
        DeclarationError: ``INVALID_SOURCE`` when *returned* has the wrong shape.
    """
    if spec.keyed:
        if not isinstance(returned, Mapping) or not all(isinstance(k, str) for k in returned):
            raise _wrong_shape(source, "a mapping of attribute names to value lists")
        dimensions = tuple(
            Dimension(name=key, values=_values(source, values)) for key, values in returned.items()
        )
        attributes = tuple(returned)
    else:
        if not _is_collection(returned) or isinstance(returned, Mapping):
            raise _wrong_shape(source, "an iterable of value lists")
        dimensions = tuple(Dimension(values=_values(source, row)) for row in returned)
        attributes = spec.attributes

    return Declaration(
        source=source,
        mode=spec.mode,
        dimensions=dimensions,
        tests=spec.tests,
        name=spec.name,
        attributes=attributes,
    )


def _invoke(subject_type: type, raw: Any) -> Any:
    if isinstance(raw, classmethod):
        return raw.__func__(subject_type)
    if isinstance(raw, staticmethod):
        return raw.__func__()
    return raw()


def _values(source: str, values: Any) -> tuple[Any, ...]:
    if not _is_collection(values):
        raise _wrong_shape(source, "value lists, not scalars or strings")
    return tuple(values)


def _is_collection(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes))


def _wrong_shape(source: str, expected: str) -> DeclarationError:
    return DeclarationError(
        ErrorCode.INVALID_SOURCE,
        f"{source}() must return {expected}",
        detail={"source": source},
    )

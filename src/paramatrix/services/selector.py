"""Operation discovery and selection.

Operations are the subject's public test methods.  A declaration's
``tests`` pattern must match an operation's whole name for that operation
to run against the declaration's cases.
"""

from __future__ import annotations

import inspect
import re
from collections.abc import Iterable

from paramatrix.domain.declarations import MATCH_ALL, SPEC_ATTRIBUTE
from paramatrix.domain.errors import DeclarationError
from paramatrix.domain.types import ErrorCode

DEFAULT_OPERATION_PREFIX = "test"


def discover_operations(
    subject_type: type, *, prefix: str = DEFAULT_OPERATION_PREFIX
) -> tuple[str, ...]:
    """Public callables on *subject_type* whose names start with *prefix*.

    Walks the MRO base-first so inherited operations keep their position;
    an override replaces the inherited definition in place.
    """
    found: dict[str, None] = {}
    for klass in reversed(subject_type.__mro__):
        if klass is object:
            continue
        for name, raw in klass.__dict__.items():
            if name.startswith("_") or not name.startswith(prefix):
                continue
            func = raw.__func__ if isinstance(raw, (staticmethod, classmethod)) else raw
            if inspect.isfunction(func) and not hasattr(func, SPEC_ATTRIBUTE):
                found[name] = None
            else:
                found.pop(name, None)
    return tuple(found)


def compile_pattern(pattern: str | None) -> re.Pattern[str]:
    """Compile a matching rule; None or empty matches everything.

    Raises:
        DeclarationError: ``INVALID_PATTERN``.
    """
    try:
        return re.compile(pattern or MATCH_ALL)
    except re.error as exc:
        raise DeclarationError(
            ErrorCode.INVALID_PATTERN,
            f"Invalid operation pattern {pattern!r}: {exc}",
            detail={"pattern": pattern},
        ) from exc


def select_operations(pattern: str | None, operations: Iterable[str]) -> tuple[str, ...]:
    """Operations whose whole name matches *pattern*, in input order."""
    regex = compile_pattern(pattern)
    return tuple(op for op in operations if regex.fullmatch(op))

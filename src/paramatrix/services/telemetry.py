"""Expansion timing: Span trees built by @traced and trace_span.

Off unless --verbose turns it on; a disabled check costs one ContextVar
read.  When on, the outermost @traced call owns the root span and the
finished tree lands in ``ExpansionResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from paramatrix.services.result import ExpansionResult

log = structlog.get_logger("paramatrix.telemetry")

_enabled: ContextVar[bool] = ContextVar("paramatrix_telemetry", default=False)
_active: ContextVar[Span | None] = ContextVar("paramatrix_span", default=None)

_P = ParamSpec("_P")
_R = TypeVar("_R")


@dataclass
class Span:
    name: str
    children: list[Span] = field(default_factory=list)
    notes: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        """Zero until the span is closed."""
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def close(self) -> None:
        self.finished = time.perf_counter()

    def note(self, key: str, value: Any) -> None:
        self.notes[key] = value

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.notes:
            data["notes"] = dict(self.notes)
        if self.children:
            data["children"] = [child.as_dict() for child in self.children]
        return data


@contextmanager
def _activate(span: Span) -> Generator[Span]:
    token = _active.set(span)
    try:
        yield span
    finally:
        span.close()
        _active.reset(token)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a block as a child of the active span.

    Yields None when telemetry is off or no @traced call is running.
    """
    parent = _active.get() if _enabled.get() else None
    if parent is None:
        yield None
        return
    child = Span(name=name)
    parent.children.append(child)
    with _activate(child):
        yield child


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Run *func* under a root span; ExpansionResult returns carry the tree."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        raised = True
        try:
            with _activate(span):
                result = func(*args, **kwargs)
            raised = False
        finally:
            log.debug(
                "span.complete",
                span_name=span.name,
                duration_ms=round(span.duration_ms, 2),
                ok=not raised,
                children=len(span.children),
            )

        if isinstance(result, ExpansionResult):
            meta = {**(result.meta or {}), "telemetry": span.as_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Turn span collection on for the current context."""
    _enabled.set(True)

"""ExpansionResult and EngineError: the engine's reporting contract.

INVARIANT: A declaration-level failure produces exactly one EngineError
and zero cases.  Per-case failures live on the cases themselves.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, InstanceOf

from paramatrix.domain.cases import Case
from paramatrix.domain.errors import ParamatrixError


class EngineError(BaseModel):
    """Structured error payload within an ExpansionResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: ParamatrixError) -> EngineError:
        return cls(code=str(exc.code), message=exc.message, detail=dict(exc.detail))


class ExpansionResult(BaseModel):
    """Outcome of expanding one declaration of one subject type.

    Attributes:
        ok: False when the declaration itself was invalid.
        op: Name of the operation (e.g. ``"expand"``).
        subject: Qualified name of the subject type.
        declaration: Name of the declaration source.
        cases: Cases built, including per-case failures.
        warnings: Non-fatal issues (plugin hook failures).
        error: Declaration-level error if ``ok`` is False.
        meta: Optional metadata (telemetry, counts).
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    ok: bool
    op: str = "expand"
    subject: str = ""
    declaration: str = ""
    cases: tuple[InstanceOf[Case], ...] = ()
    warnings: list[str] = Field(default_factory=list)
    error: EngineError | None = None
    meta: dict[str, Any] | None = None

    @property
    def failed_cases(self) -> tuple[Case, ...]:
        return tuple(c for c in self.cases if not c.ok)

    @property
    def failure_count(self) -> int:
        """Declaration failure counts once; otherwise one per failed case."""
        if not self.ok:
            return 1
        return len(self.failed_cases)


class CollectionReport(BaseModel):
    """All expansion results for one subject type."""

    model_config = {"frozen": True}

    subject: str
    results: list[ExpansionResult] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(r.ok and not r.failed_cases for r in self.results)

    @property
    def case_count(self) -> int:
        return sum(len(r.cases) for r in self.results)

    @property
    def failure_count(self) -> int:
        return sum(r.failure_count for r in self.results)

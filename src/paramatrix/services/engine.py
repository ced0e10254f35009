"""Engine: plans declarations and expands them into cases.

The engine is the single entry point for a hosting test framework::

    engine = Engine()
    report = engine.collect(TestAdder)
    for result in report.results:
        for case in result.cases:
            ...  # run case.operations against case.subject

All declaration-level work (attribute count, constructor eligibility, slot
resolution, operation selection) happens once in :meth:`Engine.plan`,
before any combination is enumerated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import structlog

from paramatrix.config.models import EngineConfig
from paramatrix.domain.cases import Case
from paramatrix.domain.declarations import Declaration
from paramatrix.domain.errors import BindingError, DeclarationError
from paramatrix.domain.iterators import iterate
from paramatrix.domain.naming import format_name
from paramatrix.domain.slots import resolve_slots
from paramatrix.domain.types import BindingStrategy, EnumerationMode, ErrorCode
from paramatrix.plugins.manager import PluginManager
from paramatrix.services.binder import Binder, check_constructor
from paramatrix.services.discovery import discover_declarations
from paramatrix.services.result import CollectionReport, EngineError, ExpansionResult
from paramatrix.services.selector import discover_operations, select_operations
from paramatrix.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

__all__ = ["Case", "CasePlan", "Engine"]


class CasePlan:
    """A validated declaration, ready to be enumerated.

    Holds everything resolved once per declaration; :meth:`cases` then
    builds one :class:`Case` per combination, lazily.
    """

    def __init__(
        self,
        subject_type: type,
        declaration: Declaration,
        operations: tuple[str, ...],
        binder: Binder,
    ) -> None:
        self.subject_type = subject_type
        self.declaration = declaration
        self.operations = operations
        self.binder = binder

    @property
    def strategy(self) -> BindingStrategy:
        return self.binder.strategy

    def cases(self) -> Iterator[Case]:
        """Yield one case per combination; failed binds yield failed cases.

        Yields nothing when no operation was selected.
        """
        if not self.operations:
            return
        declaration = self.declaration
        template = declaration.template
        for combination in iterate(declaration.mode, declaration.dimensions):
            name = format_name(template, combination)
            try:
                subject = self.binder.bind(combination)
            except BindingError as exc:
                logger.debug("Case %s%s failed to bind: %s", declaration.source, name, exc.message)
                yield Case(
                    name=name,
                    combination=combination,
                    operations=self.operations,
                    error=exc,
                    source=declaration.source,
                )
                continue
            yield Case(
                name=name,
                combination=combination,
                operations=self.operations,
                subject=subject,
                source=declaration.source,
            )


class Engine:
    """Expands declarations of a subject type into bound, named cases."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        plugins: PluginManager | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.plugins = plugins or PluginManager()

    def plan(
        self,
        subject_type: type,
        declaration: Declaration,
        *,
        warnings: list[str] | None = None,
    ) -> CasePlan:
        """Validate *declaration* against *subject_type* and resolve its slots.

        Raises:
            DeclarationError: The declaration cannot produce any case.
        """
        attributes = declaration.attributes
        if (
            attributes
            and declaration.mode is not EnumerationMode.ROWS
            and len(attributes) != declaration.width
        ):
            raise DeclarationError(
                ErrorCode.ATTRIBUTE_COUNT_MISMATCH,
                f"{declaration.source} declares {len(attributes)} attribute name(s) "
                f"for {declaration.width} dimension(s)",
                detail={"attributes": list(attributes), "dimensions": declaration.width},
            )

        strategy = declaration.strategy
        signature = check_constructor(subject_type, strategy)
        slots = resolve_slots(subject_type, attributes, setter_prefix=self.config.setter_prefix)
        operations = select_operations(
            declaration.tests or self.config.default_tests,
            discover_operations(subject_type, prefix=self.config.operation_prefix),
        )
        binder = Binder(
            subject_type,
            strategy,
            slots=slots,
            attribute_names=attributes,
            signature=signature,
            check_types=self.config.check_types,
        )
        logger.debug(
            "Planned %s: strategy=%s operations=%s",
            declaration.source,
            strategy.value,
            list(operations),
        )
        self.plugins.dispatch(
            "post_plan",
            warnings if warnings is not None else [],
            subject=subject_type,
            declaration=declaration,
            strategy=strategy.value,
            operations=operations,
        )
        return CasePlan(subject_type, declaration, operations, binder)

    def iter_cases(self, subject_type: type, declaration: Declaration) -> Iterator[Case]:
        """Plan *declaration* and lazily yield its cases.

        Raises:
            DeclarationError: Before the first case, if the declaration is invalid.
        """
        return self.plan(subject_type, declaration).cases()

    @traced
    def expand(self, subject_type: type, declaration: Declaration) -> ExpansionResult:
        """Expand one declaration into an ExpansionResult.

        Declaration-level failures become ``ok=False`` with one error and
        zero cases.
        """
        warnings: list[str] = []
        subject_name = getattr(subject_type, "__qualname__", repr(subject_type))
        with structlog.contextvars.bound_contextvars(
            subject=subject_name, declaration=declaration.source
        ):
            try:
                with trace_span("plan"):
                    plan = self.plan(subject_type, declaration, warnings=warnings)
            except DeclarationError as exc:
                return self._declaration_failed(
                    subject_type, subject_name, declaration, exc, warnings
                )

            cases: list[Case] = []
            with trace_span("enumerate") as span:
                for case in plan.cases():
                    self.plugins.dispatch(
                        "post_case",
                        warnings,
                        subject=subject_type,
                        declaration=declaration,
                        case=case,
                    )
                    cases.append(case)
                if span is not None:
                    span.note("cases", len(cases))

            error_count = sum(1 for c in cases if not c.ok)
            self.plugins.dispatch(
                "post_expand",
                warnings,
                subject=subject_type,
                declaration=declaration,
                ok=True,
                case_count=len(cases),
                error_count=error_count,
            )

        return ExpansionResult(
            ok=True,
            subject=subject_name,
            declaration=declaration.source,
            cases=tuple(cases),
            warnings=warnings,
            meta={
                "strategy": plan.strategy.value,
                "mode": declaration.mode.value,
                "operations": list(plan.operations),
                "case_count": len(cases),
                "error_count": error_count,
            },
        )

    def collect(self, subject_type: type) -> CollectionReport:
        """Discover every declaration on *subject_type* and expand each.

        Raises:
            NoSourceError: *subject_type* declares no sources.
        """
        subject_name = subject_type.__qualname__
        results: list[ExpansionResult] = []
        for outcome in discover_declarations(subject_type):
            if outcome.declaration is not None:
                results.append(self.expand(subject_type, outcome.declaration))
                continue
            assert outcome.error is not None
            failed = self._declaration_failed(
                subject_type, subject_name, None, outcome.error, [], source=outcome.source
            )
            results.append(failed)
        return CollectionReport(subject=subject_name, results=results)

    def _declaration_failed(
        self,
        subject_type: Any,
        subject_name: str,
        declaration: Declaration | None,
        exc: DeclarationError,
        warnings: list[str],
        *,
        source: str | None = None,
    ) -> ExpansionResult:
        source = source or (declaration.source if declaration is not None else "")
        logger.warning("Declaration %s rejected: %s", source, exc.message)
        self.plugins.dispatch(
            "declaration_failed",
            warnings,
            subject=subject_type,
            declaration=declaration,
            code=str(exc.code),
            message=exc.message,
        )
        return ExpansionResult(
            ok=False,
            subject=subject_name,
            declaration=source,
            warnings=warnings,
            error=EngineError.from_exception(exc),
        )

"""Pluggy hook specifications for paramatrix expansion events.

Hooks are dispatched synchronously from the engine as each declaration is
planned, each case is built, and each expansion finishes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from paramatrix.domain.cases import Case
    from paramatrix.domain.declarations import Declaration

hookspec = pluggy.HookspecMarker("paramatrix")
hookimpl = pluggy.HookimplMarker("paramatrix")


class ParamatrixHookSpec:
    """Hook specifications for the paramatrix plugin system."""

    @hookspec
    def post_plan(
        self,
        subject: type,
        declaration: Declaration,
        strategy: str,
        operations: tuple[str, ...],
    ) -> None:
        """Called once a declaration has resolved its slots and operations."""

    @hookspec
    def post_case(self, subject: type, declaration: Declaration, case: Case) -> None:
        """Called after each case is built, failed cases included."""

    @hookspec
    def post_expand(
        self,
        subject: type,
        declaration: Declaration,
        ok: bool,
        case_count: int,
        error_count: int,
    ) -> None:
        """Called after a declaration has been fully expanded."""

    @hookspec
    def declaration_failed(
        self,
        subject: type,
        declaration: Declaration | None,
        code: str,
        message: str,
    ) -> None:
        """Called when a declaration is rejected before any case is built.

        *declaration* is None when the source itself could not be captured.
        """

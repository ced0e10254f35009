"""Exception hierarchy for paramatrix.

Declaration-level errors invalidate one declaration before any case is
built.  Binding errors invalidate a single case; sibling cases continue.
"""

from __future__ import annotations

from typing import Any

from paramatrix.domain.types import ErrorCode


class ParamatrixError(Exception):
    """Base exception for paramatrix."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.detail: dict[str, Any] = detail or {}


class DeclarationError(ParamatrixError):
    """A declaration is invalid; none of its cases can be built."""


class NoSourceError(DeclarationError):
    """A subject type declares no combination source at all."""

    def __init__(self, subject: str) -> None:
        super().__init__(
            ErrorCode.NO_SOURCE,
            f"No combination source declared on {subject}",
            detail={"subject": subject},
        )
        self.subject = subject


class BindingError(ParamatrixError):
    """One combination could not be bound to a subject instance."""

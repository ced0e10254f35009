"""paramatrix: parameter-combination test engine.

Enumerates combinations of declared dimension values, binds each one to a
fresh instance of a test subject, selects the test operations that apply,
and names the resulting cases for reporting.
"""

from __future__ import annotations

__version__ = "0.3.0"

from paramatrix.domain.declarations import (
    Declaration,
    combinations,
    lockstep,
    parameters,
    permutations,
)
from paramatrix.domain.dimensions import Combination, Dimension
from paramatrix.domain.errors import BindingError, DeclarationError, NoSourceError
from paramatrix.services.engine import Case, CasePlan, Engine

__all__ = [
    "BindingError",
    "Case",
    "CasePlan",
    "Combination",
    "Declaration",
    "DeclarationError",
    "Dimension",
    "Engine",
    "NoSourceError",
    "__version__",
    "combinations",
    "lockstep",
    "parameters",
    "permutations",
]

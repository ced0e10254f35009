"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, paramatrix.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel

from paramatrix.domain.declarations import MATCH_ALL
from paramatrix.domain.slots import DEFAULT_SETTER_PREFIX
from paramatrix.services.selector import DEFAULT_OPERATION_PREFIX


class EngineConfig(BaseModel):
    """[engine] section."""

    model_config = {"frozen": True}

    setter_prefix: str = DEFAULT_SETTER_PREFIX
    operation_prefix: str = DEFAULT_OPERATION_PREFIX
    default_tests: str = MATCH_ALL
    check_types: bool = True

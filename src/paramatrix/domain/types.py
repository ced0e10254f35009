"""Classification enums shared across the engine."""

from __future__ import annotations

from enum import StrEnum


class EnumerationMode(StrEnum):
    """How a declaration's dimensions turn into combinations."""

    ODOMETER = "odometer"
    LOCKSTEP = "lockstep"
    ROWS = "rows"


class BindingStrategy(StrEnum):
    """How a combination is applied to a fresh subject instance."""

    CONSTRUCTOR = "constructor"
    ATTRIBUTES = "attributes"


class SlotKind(StrEnum):
    """Capability tag of a resolved slot."""

    FIELD = "field"
    SETTER = "setter"


class ErrorCode(StrEnum):
    """Stable error codes carried by engine exceptions and result payloads."""

    # Declaration-level
    NO_SOURCE = "NO_SOURCE"
    INVALID_SOURCE = "INVALID_SOURCE"
    SOURCE_FAILED = "SOURCE_FAILED"
    ATTRIBUTE_COUNT_MISMATCH = "ATTRIBUTE_COUNT_MISMATCH"
    NO_ACCESSIBLE_SLOT = "NO_ACCESSIBLE_SLOT"
    INVALID_CONSTRUCTOR = "INVALID_CONSTRUCTOR"
    INVALID_PATTERN = "INVALID_PATTERN"

    # Per-combination
    TYPE_MISMATCH = "TYPE_MISMATCH"
    ARITY_MISMATCH = "ARITY_MISMATCH"
    BIND_FAILED = "BIND_FAILED"

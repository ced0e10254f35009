"""Case name templates.

Two aggregate placeholders are replaced literally first:

- ``{list}``: the combination's per-dimension indices, e.g. ``[0, 1]``
- ``{index}``: the combination's ordinal in its sequence

Positional ``{k}`` placeholders are then replaced by the *k*-th value.
The positional pass runs after the aggregate pass.  Out-of-range
positions are left verbatim.  A value whose ``str()`` raises renders as
its default object repr.

Names are labels only; they never influence selection or binding.
"""

from __future__ import annotations

import logging
import re

from paramatrix.domain.dimensions import Combination

LIST_PLACEHOLDER = "{list}"
INDEX_PLACEHOLDER = "{index}"
DEFAULT_TEMPLATE = LIST_PLACEHOLDER

logger = logging.getLogger(__name__)

_POSITIONAL = re.compile(r"\{(\d+)\}")


def format_name(template: str | None, combination: Combination) -> str:
    """Render *template* for *combination*.

    A None or empty template renders the aggregate index list.
    """
    pattern = template or DEFAULT_TEMPLATE
    pattern = pattern.replace(LIST_PLACEHOLDER, str(list(combination.indices)))
    pattern = pattern.replace(INDEX_PLACEHOLDER, str(combination.ordinal))

    values = combination.values

    def _value(match: re.Match[str]) -> str:
        position = int(match.group(1))
        if position >= len(values):
            return match.group(0)
        value = values[position]
        try:
            return str(value)
        except Exception:
            logger.debug("Unprintable value at position %d", position, exc_info=True)
            return object.__repr__(value)

    return _POSITIONAL.sub(_value, pattern)

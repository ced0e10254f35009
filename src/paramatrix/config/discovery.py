"""Config file discovery and reading.

Walk-up finder locates configuration the way git finds .git/: in each
directory, a ``paramatrix.toml`` wins over a ``pyproject.toml`` carrying a
``[tool.paramatrix]`` table.  The PARAMATRIX_CONFIG env var and the
--config CLI flag bypass the walk.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "paramatrix.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "PARAMATRIX_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for paramatrix configuration.

    Returns the path to the config file, or None if not found.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        dedicated = directory / CONFIG_FILENAME
        if dedicated.is_file():
            return dedicated
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
    return None


def read_config_table(path: Path) -> dict[str, Any]:
    """Return the paramatrix settings table stored in *path*.

    Raises:
        tomllib.TOMLDecodeError: *path* is not valid TOML.
    """
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    if path.name == PYPROJECT_FILENAME:
        return dict(data.get("tool", {}).get("paramatrix", {}))
    return data


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError:
        return False
    return "paramatrix" in data.get("tool", {})

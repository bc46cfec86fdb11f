"""Locating and loading ``config.toml`` together with ``config/features.toml``.

The config directory is searched in this order: ``$PROBLEM_SOLVER_CONFIG_DIR``,
the source checkout that holds this module, then the working directory.
An installed package usually has none of these, so a missing
``config.toml`` yields an empty mapping and callers use their defaults.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]

CONFIG_DIR_ENV = "PROBLEM_SOLVER_CONFIG_DIR"
CONFIG_FILENAME = "config.toml"

_LOGGER = logging.getLogger(__name__)
_MISSING = object()


def config_dir() -> Optional[Path]:
    """Return the first candidate directory that contains ``config.toml``."""

    candidates = []
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        candidates.append(Path(override))
    candidates.append(Path(__file__).resolve().parents[1])
    candidates.append(Path.cwd())
    for candidate in candidates:
        if (candidate / CONFIG_FILENAME).is_file():
            return candidate
    return None


def config_file(relative: str) -> Optional[Path]:
    """Path of ``relative`` inside :func:`config_dir`, ``None`` if absent."""

    base = config_dir()
    if base is None:
        return None
    path = base / relative
    return path if path.is_file() else None


def _config_path() -> Optional[Path]:
    return config_file(CONFIG_FILENAME)


def load_toml(path: Optional[Path]) -> Dict[str, Any]:
    if path is None or not path.is_file():
        return {}
    with path.open("rb") as fh:
        return tomllib.load(fh)


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Load and cache ``config.toml``; ``{}`` when none can be found."""

    path = _config_path()
    if path is None:
        _LOGGER.info("No %s found; using built-in defaults", CONFIG_FILENAME)
    return load_toml(path)


def reload() -> None:
    get_config.cache_clear()


def get_section(path: str, default: Any = _MISSING) -> Any:
    """Retrieve a nested configuration value using dotted notation."""

    data: Any = get_config()
    for part in path.split("."):
        if isinstance(data, dict) and part in data:
            data = data[part]
        elif default is not _MISSING:
            return default
        else:
            raise KeyError(f"Configuration path '{path}' not found")
    return data


__all__ = [
    "CONFIG_DIR_ENV",
    "config_dir",
    "config_file",
    "get_config",
    "get_section",
    "load_toml",
    "reload",
]

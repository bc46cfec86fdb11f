"""Runtime feature flag helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping

from project_config import config_file, load_toml

__all__ = ["coerce_bool", "get_trace_feature", "is_trace_enabled", "reload"]

_FEATURES_FILENAME = "config/features.toml"

# Highest priority first: CLI flag, then the prefixed and plain env variables.
TRACE_OVERRIDE_KEYS = (
    "CLI_SEARCH_TRACE",
    "PUZZLE_SEARCH_TRACE",
    "SEARCH_TRACE",
)


@lru_cache(maxsize=1)
def _load_features() -> dict[str, Any]:
    return load_toml(config_file(_FEATURES_FILENAME))


def reload() -> None:
    """Clear the cached feature configuration."""

    _load_features.cache_clear()


def coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in {"1", "true", "yes", "on"}:
            return True
        if normalised in {"0", "false", "no", "off"}:
            return False
    return None


def get_trace_feature(profile: str | None = None) -> dict[str, Any]:
    """Return the ``[trace]`` block merged with its ``by_profile`` entry."""

    entry = _load_features().get("trace")
    if not isinstance(entry, dict):
        return {}
    merged = {key: value for key, value in entry.items() if key != "by_profile"}
    by_profile = entry.get("by_profile")
    if profile and isinstance(by_profile, dict):
        profile_block = by_profile.get(profile.lower())
        if isinstance(profile_block, dict):
            merged.update(profile_block)
    return merged


def is_trace_enabled(env: Mapping[str, str] | None = None, *, profile: str | None = None) -> bool:
    """Return ``True`` when search events should be written to the event log.

    The first parseable value among :data:`TRACE_OVERRIDE_KEYS` wins over the
    profile's feature flag. ``resolve_settings`` takes its trace switch from
    here.
    """

    enabled = bool(coerce_bool(get_trace_feature(profile).get("enabled", False)))
    for key in TRACE_OVERRIDE_KEYS:
        override = coerce_bool((env or {}).get(key))
        if override is not None:
            return override
    return enabled

"""Search budget and tracing settings resolved from config, env and CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from feature_flags import is_trace_enabled
from project_config import get_config


@dataclass(frozen=True)
class SearchSettings:
    """Finalised search policy after precedence resolution.

    ``max_steps`` and ``time_limit_s`` are ``None`` when unlimited.
    """

    profile: str
    max_steps: Optional[int]
    time_limit_s: Optional[float]
    trace_enabled: bool
    log_dir: str
    log_max_bytes: int


_DEFAULT_LOG_DIR = "logs/search"
_DEFAULT_LOG_MAX_BYTES = 100 * 1024 * 1024


def build_env(overrides: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Merge process environment with optional overrides."""

    env: Dict[str, str] = {str(k): str(v) for k, v in os.environ.items()}
    if overrides:
        env.update({str(k): str(v) for k, v in overrides.items()})
    return env


def _parse_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip():
            return int(value)
    except (TypeError, ValueError):
        return None
    return None


def _parse_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str) and value.strip():
            return float(value)
    except (TypeError, ValueError):
        return None
    return None


def _defaults(profile: str) -> SearchSettings:
    return SearchSettings(
        profile=profile,
        max_steps=None,
        time_limit_s=None,
        trace_enabled=False,
        log_dir=_DEFAULT_LOG_DIR,
        log_max_bytes=_DEFAULT_LOG_MAX_BYTES,
    )


def _apply_overrides(settings: SearchSettings, overrides: Mapping[str, Any]) -> SearchSettings:
    max_steps = settings.max_steps
    time_limit_s = settings.time_limit_s
    log_dir = settings.log_dir
    log_max_bytes = settings.log_max_bytes

    if "max_steps" in overrides:
        maybe_steps = _parse_int(overrides["max_steps"])
        if maybe_steps is not None and maybe_steps >= 0:
            max_steps = maybe_steps or None
    if "time_limit_s" in overrides:
        maybe_limit = _parse_float(overrides["time_limit_s"])
        if maybe_limit is not None and maybe_limit >= 0:
            time_limit_s = maybe_limit or None
    if "log_dir" in overrides:
        value = overrides["log_dir"]
        if isinstance(value, str) and value:
            log_dir = value
    if "log_max_bytes" in overrides:
        maybe_bytes = _parse_int(overrides["log_max_bytes"])
        if maybe_bytes is not None and maybe_bytes > 0:
            log_max_bytes = maybe_bytes

    return replace(
        settings,
        max_steps=max_steps,
        time_limit_s=time_limit_s,
        log_dir=log_dir,
        log_max_bytes=log_max_bytes,
    )


def _config_overrides(profile: str) -> Dict[str, Any]:
    config = get_config()
    payload: Dict[str, Any] = {}

    search_cfg = config.get("search", {})
    if isinstance(search_cfg, dict):
        for key, value in search_cfg.items():
            if key != "by_profile":
                payload[key] = value
        by_profile = search_cfg.get("by_profile")
        if isinstance(by_profile, dict):
            profile_block = by_profile.get(profile.lower())
            if isinstance(profile_block, dict):
                payload.update(profile_block)

    log_cfg = config.get("log", {})
    if isinstance(log_cfg, dict):
        if "dir" in log_cfg:
            payload["log_dir"] = log_cfg["dir"]
        if "max_bytes" in log_cfg:
            payload["log_max_bytes"] = log_cfg["max_bytes"]
    return payload


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    keys = {
        "max_steps": ("PUZZLE_SEARCH_MAX_STEPS", "SEARCH_MAX_STEPS"),
        "time_limit_s": ("PUZZLE_SEARCH_TIME_LIMIT", "SEARCH_TIME_LIMIT"),
        "log_dir": ("PUZZLE_SEARCH_LOG_DIR", "SEARCH_LOG_DIR"),
    }
    payload: Dict[str, Any] = {}
    for field, aliases in keys.items():
        for alias in aliases:
            if alias in env:
                payload[field] = env[alias]
                break
    return payload


def _cli_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    keys = {
        "max_steps": "CLI_SEARCH_MAX_STEPS",
        "time_limit_s": "CLI_SEARCH_TIME_LIMIT",
        "log_dir": "CLI_SEARCH_LOG_DIR",
    }
    payload: Dict[str, Any] = {}
    for field, alias in keys.items():
        if alias in env:
            payload[field] = env[alias]
    return payload


def resolve_settings(profile: str = "dev", env: Mapping[str, str] | None = None) -> SearchSettings:
    """Resolve settings: defaults < config.toml < env < CLI.

    The trace switch follows the same order with the feature flag in place
    of ``config.toml``; see :func:`feature_flags.is_trace_enabled`.
    """

    env_map = build_env(env)
    settings = _defaults(profile)
    settings = _apply_overrides(settings, _config_overrides(profile))
    settings = _apply_overrides(settings, _env_overrides(env_map))
    settings = _apply_overrides(settings, _cli_overrides(env_map))
    return replace(settings, trace_enabled=is_trace_enabled(env_map, profile=profile))


__all__ = ["SearchSettings", "build_env", "resolve_settings"]

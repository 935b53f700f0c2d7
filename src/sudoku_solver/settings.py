"""Solver settings resolved from ``config.toml`` and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from project_config import get_section

from .phases import HEURISTICS_ORDER
from .step_runner import TRACE_LEVELS


@dataclass(frozen=True)
class SolverSettings:
    """Finalised solver policy after precedence resolution."""

    trace_level: str = "none"
    heuristics: Tuple[str, ...] = HEURISTICS_ORDER
    trace_log_dir: Optional[str] = None


_ENV_KEYS = {
    "trace_level": "SUDOKU_TRACE_LEVEL",
    "heuristics": "SUDOKU_HEURISTICS",
    "trace_log_dir": "SUDOKU_TRACE_LOG_DIR",
}


def build_env(overrides: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Merge process environment with optional overrides."""

    env: Dict[str, str] = {str(k): str(v) for k, v in os.environ.items()}
    if overrides:
        env.update({str(k): str(v) for k, v in overrides.items()})
    return env


def _parse_trace_level(value: Any) -> Optional[str]:
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in TRACE_LEVELS:
            return normalised
    return None


def _parse_heuristics(value: Any) -> Optional[Tuple[str, ...]]:
    if isinstance(value, str):
        names = [part.strip() for part in value.split(",") if part.strip()]
    elif isinstance(value, (list, tuple)):
        names = [str(part).strip() for part in value]
    else:
        return None
    if any(name not in HEURISTICS_ORDER for name in names):
        return None
    # The reference order is fixed; configuration only selects.
    return tuple(name for name in HEURISTICS_ORDER if name in names)


def _apply_overrides(settings: SolverSettings, overrides: Mapping[str, Any]) -> SolverSettings:
    if "trace_level" in overrides:
        level = _parse_trace_level(overrides["trace_level"])
        if level is not None:
            settings = replace(settings, trace_level=level)
    if "heuristics" in overrides:
        heuristics = _parse_heuristics(overrides["heuristics"])
        if heuristics is not None:
            settings = replace(settings, heuristics=heuristics)
    if isinstance(overrides.get("trace_log_dir"), str):
        # An empty value switches the solve log off.
        settings = replace(settings, trace_log_dir=overrides["trace_log_dir"].strip() or None)
    return settings


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    return {field: env[alias] for field, alias in _ENV_KEYS.items() if alias in env}


def load_settings(env: Mapping[str, str] | None = None) -> SolverSettings:
    """Resolve settings: defaults < ``[solver]`` section < environment.

    Invalid values at any layer are ignored and the previous layer wins.
    """

    settings = SolverSettings()
    section = get_section("solver", {})
    if isinstance(section, Mapping):
        settings = _apply_overrides(settings, section)
    return _apply_overrides(settings, _env_overrides(build_env(env)))


__all__ = ["SolverSettings", "build_env", "load_settings"]

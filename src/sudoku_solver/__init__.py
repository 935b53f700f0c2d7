"""Constraint-propagation and backtracking solver for the classic 9x9 Sudoku."""

from __future__ import annotations

from contracts.errors import InputShapeError

from .delta import Delta, DeltaOp, DeltaValidationError, Move, canonicalise_deltas, ensure_delta
from .grid import FULL_MASK, Grid, Status
from .trace import SolveTrace, SolveTraceEntry, TraceValidationError
from .step_runner import (
    StepHandler,
    StepResult,
    StepRunner,
    StepTraceEntry,
    StepTraceRecorder,
    register_step,
)

# Trigger step registration on import.
from . import phases as _phases  # noqa: F401
from .propagator import propagate_to_fixpoint
from .search import Outcome, SearchCancelled, SearchContext, SearchStats, branch_moves, search
from .settings import SolverSettings, load_settings
from .solver_port import solve, solve_recursive
from .trace_log import TraceLog

__version__ = "1.0.0"

__all__ = [
    "FULL_MASK",
    "Delta",
    "DeltaOp",
    "DeltaValidationError",
    "Grid",
    "InputShapeError",
    "Move",
    "Outcome",
    "SearchCancelled",
    "SearchContext",
    "SearchStats",
    "SolveTrace",
    "SolveTraceEntry",
    "SolverSettings",
    "Status",
    "StepHandler",
    "StepResult",
    "StepRunner",
    "StepTraceEntry",
    "StepTraceRecorder",
    "TraceLog",
    "TraceValidationError",
    "branch_moves",
    "canonicalise_deltas",
    "ensure_delta",
    "load_settings",
    "propagate_to_fixpoint",
    "register_step",
    "search",
    "solve",
    "solve_recursive",
]

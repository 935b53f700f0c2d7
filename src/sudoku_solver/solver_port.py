"""Facade over propagation and search."""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Optional, Sequence

from .grid import Grid, Status
from .phases import HEURISTICS_ORDER
from .propagator import propagate_to_fixpoint
from .search import Outcome, SearchContext, SearchStats, search
from .settings import SolverSettings, load_settings
from .step_runner import StepRunner
from .trace import SolveTrace
from .trace_log import TraceLog

_LOGGER = logging.getLogger(__name__)


def solve(
    grid: Grid,
    *,
    runner: Optional[StepRunner] = None,
    heuristics: Sequence[str] = HEURISTICS_ORDER,
    depth: int = 0,
) -> Status:
    """Propagate ``grid`` to fixpoint and classify the result."""

    propagate_to_fixpoint(grid, runner=runner, heuristics=heuristics, depth=depth)
    return grid.status()


def solve_recursive(
    grid: Grid,
    *,
    settings: Optional[SolverSettings] = None,
    runner: Optional[StepRunner] = None,
    trace: Optional[SolveTrace] = None,
    stats: Optional[SearchStats] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    trace_log: Optional[TraceLog] = None,
    run_id: Optional[str] = None,
) -> Outcome:
    """Solve ``grid`` in place, searching when propagation alone stalls.

    Returns :attr:`Outcome.SOLVED` with ``grid`` holding the first solution
    found.  :attr:`Outcome.CONTRADICTION` means the puzzle is inconsistent
    before any guess (including duplicate givens) and
    :attr:`Outcome.EXHAUSTED` that every branch failed.  On failure the grid
    is left in an unspecified state; callers needing the puzzle keep a copy.

    Parameters
    ----------
    settings:
        Solver policy; resolved through :func:`load_settings` when omitted.
    runner:
        Pre-built :class:`StepRunner`; overrides the trace options below.
    trace:
        Optional :class:`SolveTrace` sink receiving every grid change.
    stats:
        Optional :class:`SearchStats` filled with search counters.
    should_stop:
        Optional hook checked before every move; ``True`` raises
        :class:`SearchCancelled`.
    trace_log:
        Optional JSONL sink; built from ``settings.trace_log_dir`` when that
        is set.  The run is written once it finishes, under ``run_id`` or an
        id derived from the starting grid.
    """

    settings = settings or load_settings()
    if trace_log is None and settings.trace_log_dir:
        trace_log = TraceLog(settings.trace_log_dir)
    if runner is None:
        if trace is None and trace_log is not None:
            trace = SolveTrace()
        runner = StepRunner(trace_level=settings.trace_level, trace=trace)
    stats = stats if stats is not None else SearchStats()
    if trace_log is not None and run_id is None:
        run_id = uuid.uuid5(uuid.NAMESPACE_OID, grid.state_hash()).hex

    report = grid.conflicts()
    if not report.ok:
        _LOGGER.warning("Puzzle has conflicting givens: %s", "; ".join(issue.msg for issue in report.errors))
        outcome = Outcome.CONTRADICTION
    else:
        outcome = _solve_checked(grid, runner, settings, stats, should_stop)

    _LOGGER.debug("solve_recursive finished: %s %r", outcome.value, grid)
    if trace_log is not None:
        path = trace_log.write_run(runner.trace or SolveTrace(), run_id=run_id, outcome=outcome, stats=stats)
        _LOGGER.debug("Solve run %s written to %s", run_id, path)
    return outcome


def _solve_checked(
    grid: Grid,
    runner: StepRunner,
    settings: SolverSettings,
    stats: SearchStats,
    should_stop: Optional[Callable[[], bool]],
) -> Outcome:
    def _solve(target: Grid, depth: int) -> Status:
        return solve(target, runner=runner, heuristics=settings.heuristics, depth=depth)

    status = _solve(grid, 0)
    if status is not Status.UNDETERMINED:
        return Outcome(status.value)
    context = SearchContext(solve=_solve, runner=runner, stats=stats, should_stop=should_stop)
    return search(grid, context=context)


__all__ = ["solve", "solve_recursive"]

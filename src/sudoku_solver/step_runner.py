"""Execution scaffold for deduction steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .delta import Delta, DeltaOp, Move
from .grid import Grid
from .trace import SolveTrace

StepHandler = Callable[[Grid], Tuple[Iterable[Delta], Mapping[str, Any]]]

TRACE_LEVELS = ("none", "summary", "full")


@dataclass(frozen=True)
class StepTraceEntry:
    """Single record emitted for a solver step."""

    step_kind: str
    step_name: str
    depth: int
    meta: Mapping[str, Any]


@dataclass(frozen=True)
class StepResult:
    """Container with the outcome of a step execution."""

    deltas: Tuple[Delta, ...]
    metrics: Mapping[str, Any]

    @property
    def placements(self) -> int:
        return sum(1 for delta in self.deltas if delta.op is DeltaOp.PLACE)

    @property
    def candidates_removed(self) -> int:
        return sum(1 for delta in self.deltas if delta.op is DeltaOp.ELIM)

    @property
    def progress(self) -> bool:
        return bool(self.deltas)


@dataclass
class StepTraceRecorder:
    """In-memory trace accumulator respecting ``trace_level`` semantics.

    ``none`` keeps nothing, ``summary`` keeps steps that changed the grid and
    ``full`` keeps every invocation.
    """

    trace_level: str = "none"
    entries: List[StepTraceEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.trace_level not in TRACE_LEVELS:
            raise ValueError(f"Unsupported trace level: {self.trace_level!r}")

    def record(self, entry: StepTraceEntry) -> None:
        if self.trace_level == "none":
            return
        if self.trace_level == "summary" and not entry.meta.get("progress"):
            return
        self.entries.append(entry)

    def snapshot(self) -> Tuple[StepTraceEntry, ...]:
        return tuple(self.entries)

    def reset(self) -> None:
        self.entries.clear()


_STEP_REGISTRY: Dict[str, Dict[str, StepHandler]] = {
    "PROPAGATE": {},
    "HEURISTICS": {},
}


def register_step(step_kind: str, name: str, handler: StepHandler) -> None:
    """Register a deduction step under ``step_kind``/``name``.

    Rule modules register themselves on import, which keeps the propagator
    free of direct imports of every rule.
    """

    if step_kind not in _STEP_REGISTRY:
        raise ValueError(f"Unsupported step kind: {step_kind!r}")
    _STEP_REGISTRY[step_kind][name] = handler


def registered_steps(step_kind: str) -> Tuple[str, ...]:
    return tuple(_STEP_REGISTRY.get(step_kind, {}))


class StepRunner:
    """Coordinator that executes deduction steps and traces their effect."""

    def __init__(
        self,
        *,
        trace_level: str = "none",
        trace_recorder: Optional[StepTraceRecorder] = None,
        trace: Optional[SolveTrace] = None,
    ) -> None:
        self.trace_recorder = trace_recorder or StepTraceRecorder(trace_level=trace_level)
        self.trace = trace

    def run_step(self, grid: Grid, step_kind: str, name: str, *, depth: int = 0) -> StepResult:
        """Execute one registered step against ``grid`` and return what it changed.

        Parameters
        ----------
        grid:
            Grid mutated in place by the handler.
        step_kind:
            ``"PROPAGATE"`` or ``"HEURISTICS"``.
        name:
            Name the handler was registered under.
        depth:
            Search depth the step runs at; only used for tracing.
        """

        try:
            handler = _STEP_REGISTRY[step_kind][name]
        except KeyError as exc:
            raise KeyError(f"Unregistered step: {step_kind}/{name}") from exc

        before = grid.state_hash() if self.trace is not None else None
        raw_deltas, metrics = handler(grid)
        result = StepResult(deltas=tuple(raw_deltas), metrics=dict(metrics))
        self._finish(grid, step_kind, name, result, depth=depth, before=before)
        return result

    def apply_move(self, grid: Grid, move: Move, *, technique: str = "guess", depth: int = 0) -> StepResult:
        """Place ``move`` on the grid outside of any registered rule."""

        before = grid.state_hash() if self.trace is not None else None
        result = StepResult(deltas=grid.place(move.row, move.col, move.value), metrics={})
        self._finish(grid, "BRANCH", technique, result, depth=depth, before=before)
        return result

    def restore(self, grid: Grid, snapshot: Sequence[int], *, depth: int = 0) -> None:
        """Roll ``grid`` back to ``snapshot`` and trace the backtrack."""

        before = grid.state_hash() if self.trace is not None else None
        grid.restore(snapshot)
        self._record("BRANCH", "backtrack", {"progress": True}, depth)
        if self.trace is not None and before is not None:
            self.trace.record("backtrack", (), depth=depth, before=before, after=grid.state_hash())

    # Internal helpers -------------------------------------------------

    def _finish(
        self,
        grid: Grid,
        step_kind: str,
        name: str,
        result: StepResult,
        *,
        depth: int,
        before: str | None,
    ) -> None:
        meta = {
            "progress": result.progress,
            "placements": result.placements,
            "candidates_removed": result.candidates_removed,
            **result.metrics,
        }
        self._record(step_kind, name, meta, depth)
        if self.trace is not None and result.progress and before is not None:
            self.trace.record(name, result.deltas, depth=depth, before=before, after=grid.state_hash())

    def _record(self, step_kind: str, step_name: str, meta: Mapping[str, Any], depth: int) -> None:
        entry = StepTraceEntry(step_kind=step_kind, step_name=step_name, depth=depth, meta=dict(meta))
        self.trace_recorder.record(entry)


__all__ = [
    "StepHandler",
    "StepResult",
    "StepRunner",
    "StepTraceEntry",
    "StepTraceRecorder",
    "TRACE_LEVELS",
    "register_step",
    "registered_steps",
]

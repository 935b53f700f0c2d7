"""Outer fixpoint loop over the deduction rules."""

from __future__ import annotations

from typing import Optional, Sequence

from .grid import Grid
from .phases import HEURISTICS_ORDER, SINGLES_ORDER
from .step_runner import StepRunner


def propagate_to_fixpoint(
    grid: Grid,
    *,
    runner: Optional[StepRunner] = None,
    heuristics: Sequence[str] = HEURISTICS_ORDER,
    depth: int = 0,
) -> None:
    """Apply the deduction rules to ``grid`` until a full pass changes nothing.

    Each pass runs peer elimination once, then every single rule
    exhaustively in reference order (naked, hidden by row, column, box), then
    the heuristics, which iterate to their own local fixpoint.  The pass
    repeats while it fills a cell or removes a candidate.

    The grid is mutated in place.  A contradiction is never raised; it shows
    up as an open cell with no candidates, for :meth:`Grid.status` to find.
    """

    runner = runner or StepRunner()
    while True:
        open_before = grid.open_cells
        candidates_before = grid.candidate_count

        runner.run_step(grid, "PROPAGATE", "peers.eliminate", depth=depth)
        for name in SINGLES_ORDER:
            while runner.run_step(grid, "PROPAGATE", name, depth=depth).progress:
                pass
        for name in heuristics:
            runner.run_step(grid, "HEURISTICS", name, depth=depth)

        if grid.open_cells == open_before and grid.candidate_count == candidates_before:
            return


__all__ = ["propagate_to_fixpoint"]

"""Recursive backtracking search over the most constrained cell."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Tuple

from .delta import Move
from .geometry import SIZE
from .grid import Grid, Status, digit_bit, mask_digits
from .step_runner import StepRunner

_LOGGER = logging.getLogger(__name__)


class Outcome(str, Enum):
    """Final result of a recursive solve."""

    SOLVED = "solved"
    CONTRADICTION = "contradiction"
    EXHAUSTED = "exhausted"


class SearchCancelled(RuntimeError):
    """Raised when the caller's stop hook asks the search to end."""


@dataclass
class SearchStats:
    """Counters collected while searching; reusable as a regression baseline."""

    nodes: int = 0
    moves_tried: int = 0
    backtracks: int = 0
    max_depth: int = 0


@dataclass
class SearchContext:
    """Collaborators threaded through every search frame.

    ``solve`` is the full solver for one node: propagate to fixpoint, then
    classify.  It receives the grid and the depth of the node.
    """

    solve: Callable[[Grid, int], Status]
    runner: StepRunner
    stats: SearchStats = field(default_factory=SearchStats)
    should_stop: Optional[Callable[[], bool]] = None


def branch_moves(grid: Grid) -> Tuple[Move, ...]:
    """Moves for the branching cell, in the order they are tried.

    The branching cell is the first open cell in row-major order with the
    smallest candidate set of size two or more.  Its moves are tried from the
    highest value down.
    """

    for size in range(2, SIZE + 1):
        for row in range(SIZE):
            for col in range(SIZE):
                mask = grid.mask(row, col)
                if mask.bit_count() == size:
                    return tuple(Move(row, col, value) for value in reversed(mask_digits(mask)))
    return ()


def search(grid: Grid, *, context: SearchContext, depth: int = 0) -> Outcome:
    """Search an undetermined ``grid`` that is already at a propagation fixpoint.

    Returns :attr:`Outcome.SOLVED` with the grid solved, or
    :attr:`Outcome.EXHAUSTED` when no move of the branching cell leads to a
    solution.  In the latter case the grid is back at its state on entry,
    re-propagated.
    """

    stats = context.stats
    stats.nodes += 1
    stats.max_depth = max(stats.max_depth, depth)
    indent = "  " * depth

    moves = branch_moves(grid)
    _LOGGER.debug("%sPossible choices to continue: %d %s", indent, len(moves), moves)

    for number, move in enumerate(moves, start=1):
        if context.should_stop is not None and context.should_stop():
            raise SearchCancelled(f"search cancelled at depth {depth}")
        if not grid.mask(move.row, move.col) & digit_bit(move.value):
            # Only possible below an inconsistent node.
            _LOGGER.debug("%s%s is no longer a candidate, skipped", indent, move)
            continue

        _LOGGER.debug("%sTry recursively %d / %d: %s", indent, number, len(moves), move)
        snapshot = grid.snapshot()
        stats.moves_tried += 1
        context.runner.apply_move(grid, move, depth=depth + 1)

        status = context.solve(grid, depth + 1)
        if status is Status.UNDETERMINED:
            outcome = search(grid, context=context, depth=depth + 1)
        else:
            outcome = Outcome(status.value)
        if outcome is Outcome.SOLVED:
            return outcome

        _LOGGER.debug("%s%s, try next.", indent, outcome.value)
        stats.backtracks += 1
        context.runner.restore(grid, snapshot, depth=depth)
        context.solve(grid, depth)

    return Outcome.EXHAUSTED


__all__ = [
    "Outcome",
    "SearchCancelled",
    "SearchContext",
    "SearchStats",
    "branch_moves",
    "search",
]

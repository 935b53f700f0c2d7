"""Basic propagation: peer elimination and naked singles."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Tuple

from ..delta import Delta
from ..geometry import SIZE, cell_index
from ..grid import Grid, mask_digits

Metrics = Mapping[str, Any]


def step_eliminate_peers(grid: Grid) -> Tuple[Iterable[Delta], Metrics]:
    """Remove from every open cell the values placed in its row, column and box.

    :meth:`Grid.place` already does this for the peers of each new value, so
    on a consistent grid the global pass only picks up what a restore or an
    external edit left behind.
    """

    return grid.eliminate_placed(), {}


def step_naked_single(grid: Grid) -> Tuple[Iterable[Delta], Metrics]:
    """Fill the first open cell (row-major) that has exactly one candidate."""

    for row in range(SIZE):
        for col in range(SIZE):
            mask = grid.mask(row, col)
            if mask.bit_count() == 1:
                (value,) = mask_digits(mask)
                return grid.place(row, col, value), {"cell": cell_index(row, col)}
    return (), {}


__all__ = ["step_eliminate_peers", "step_naked_single"]

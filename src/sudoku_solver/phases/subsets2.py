"""Naked pair elimination."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Sequence, Tuple

from ..delta import Delta
from ..geometry import UNIT_KINDS, Cell, units
from ..grid import Grid

Metrics = Mapping[str, Any]


def _eliminate_pairs(grid: Grid, cells: Sequence[Cell]) -> List[Delta]:
    # Cells with an empty candidate set take no part, neither as pair
    # members nor as elimination targets.
    if sum(1 for cell in cells if grid.mask(*cell)) <= 2:
        return []

    deltas: List[Delta] = []
    for i, first in enumerate(cells):
        pair = grid.mask(*first)
        if pair.bit_count() != 2:
            continue
        for second in cells[i + 1:]:
            if grid.mask(*second) != pair:
                continue
            for cell in cells:
                if cell == first or cell == second or not grid.mask(*cell):
                    continue
                deltas.extend(grid.eliminate(cell[0], cell[1], pair))
            break
    return deltas


def step_subsets2_pairs(grid: Grid) -> Tuple[Iterable[Delta], Metrics]:
    """Apply naked pairs in rows, columns and boxes until nothing changes.

    Two cells of a unit sharing the same two candidates own those values;
    every other cell of the unit loses them.  Eliminations can expose new
    pairs, hence the local fixpoint loop.
    """

    deltas: List[Delta] = []
    passes = 0
    while True:
        passes += 1
        found = 0
        for kind in UNIT_KINDS:
            for _, _, cells in units(kind):
                removed = _eliminate_pairs(grid, cells)
                found += len(removed)
                deltas.extend(removed)
        if not found:
            break
    return deltas, {"passes": passes}


__all__ = ["step_subsets2_pairs"]

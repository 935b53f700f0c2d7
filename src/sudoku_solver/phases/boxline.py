"""Box–line reduction (pointing candidates)."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Tuple

from ..delta import Delta
from ..geometry import BOX, SIZE, box_cells, box_origin
from ..grid import Grid, digit_bit

Metrics = Mapping[str, Any]


def _reduce_box(grid: Grid, box: int) -> List[Delta]:
    r0, c0 = box_origin(box)
    cells = box_cells(box)
    deltas: List[Delta] = []
    for digit in range(1, SIZE + 1):
        bit = digit_bit(digit)
        holders = [(r, c) for r, c in cells if grid.mask(r, c) & bit]
        if not holders:
            continue
        rows = {r for r, _ in holders}
        if len(rows) == 1:
            (row,) = rows
            for col in range(SIZE):
                if not c0 <= col < c0 + BOX:
                    deltas.extend(grid.eliminate(row, col, bit))
        cols = {c for _, c in holders}
        if len(cols) == 1:
            (col,) = cols
            for row in range(SIZE):
                if not r0 <= row < r0 + BOX:
                    deltas.extend(grid.eliminate(row, col, bit))
    return deltas


def step_box_line(grid: Grid) -> Tuple[Iterable[Delta], Metrics]:
    """Apply pointing reductions in all nine boxes until nothing changes.

    When a value's candidates inside a box sit in a single mini-row, the
    value must go in that row within the box, so it is removed from the rest
    of the row.  Mini-columns are handled the same way.
    """

    deltas: List[Delta] = []
    passes = 0
    while True:
        passes += 1
        found = 0
        for box in range(SIZE):
            removed = _reduce_box(grid, box)
            found += len(removed)
            deltas.extend(removed)
        if not found:
            break
    return deltas, {"passes": passes}


__all__ = ["step_box_line"]

"""Hidden singles by row, column and box."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Tuple

from ..delta import Delta
from ..geometry import SIZE, units
from ..grid import Grid, digit_bit

Metrics = Mapping[str, Any]


def _hidden_single(grid: Grid, kind: str) -> Tuple[Iterable[Delta], Metrics]:
    for _, index, cells in units(kind):
        for digit in range(1, SIZE + 1):
            bit = digit_bit(digit)
            holders = [cell for cell in cells if grid.mask(*cell) & bit]
            if len(holders) == 1:
                row, col = holders[0]
                return grid.place(row, col, digit), {"unit": f"{kind}[{index}]"}
    return (), {}


def step_hidden_single_row(grid: Grid) -> Tuple[Iterable[Delta], Metrics]:
    """Place a value that only one cell of some row can still take."""

    return _hidden_single(grid, "row")


def step_hidden_single_col(grid: Grid) -> Tuple[Iterable[Delta], Metrics]:
    return _hidden_single(grid, "col")


def step_hidden_single_box(grid: Grid) -> Tuple[Iterable[Delta], Metrics]:
    return _hidden_single(grid, "box")


__all__ = ["step_hidden_single_box", "step_hidden_single_col", "step_hidden_single_row"]

"""Cell and unit geometry of the 9x9 board."""

from __future__ import annotations

from functools import lru_cache
from typing import Tuple

SIZE = 9
BOX = 3
CELL_COUNT = SIZE * SIZE

Cell = Tuple[int, int]
Unit = Tuple[str, int, Tuple[Cell, ...]]

UNIT_KINDS = ("row", "col", "box")


def cell_index(row: int, col: int) -> int:
    return row * SIZE + col


def cell_coords(cell: int) -> Cell:
    return divmod(cell, SIZE)


def box_index(row: int, col: int) -> int:
    return (row // BOX) * BOX + col // BOX


def box_origin(box: int) -> Cell:
    """Top-left cell of ``box`` (boxes are numbered row-major, 0..8)."""

    return (box // BOX) * BOX, (box % BOX) * BOX


@lru_cache(maxsize=None)
def row_cells(row: int) -> Tuple[Cell, ...]:
    return tuple((row, col) for col in range(SIZE))


@lru_cache(maxsize=None)
def col_cells(col: int) -> Tuple[Cell, ...]:
    return tuple((row, col) for row in range(SIZE))


@lru_cache(maxsize=None)
def box_cells(box: int) -> Tuple[Cell, ...]:
    r0, c0 = box_origin(box)
    return tuple((r, c) for r in range(r0, r0 + BOX) for c in range(c0, c0 + BOX))


@lru_cache(maxsize=None)
def units(kind: str | None = None) -> Tuple[Unit, ...]:
    """Return ``(kind, index, cells)`` for all rows, then columns, then boxes.

    ``kind`` restricts the result to one of :data:`UNIT_KINDS`.
    """

    builders = {"row": row_cells, "col": col_cells, "box": box_cells}
    if kind is not None and kind not in builders:
        raise ValueError(f"Unsupported unit kind: {kind!r}")
    kinds = UNIT_KINDS if kind is None else (kind,)
    return tuple((name, index, builders[name](index)) for name in kinds for index in range(SIZE))


@lru_cache(maxsize=None)
def peers(row: int, col: int) -> Tuple[Cell, ...]:
    """The 20 cells sharing a row, column or box with ``(row, col)``, row-major."""

    related = set(row_cells(row)) | set(col_cells(col)) | set(box_cells(box_index(row, col)))
    related.discard((row, col))
    return tuple(sorted(related))


__all__ = [
    "BOX",
    "CELL_COUNT",
    "Cell",
    "SIZE",
    "UNIT_KINDS",
    "Unit",
    "box_cells",
    "box_index",
    "box_origin",
    "cell_coords",
    "cell_index",
    "col_cells",
    "peers",
    "row_cells",
    "units",
]

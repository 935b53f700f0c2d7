from __future__ import annotations

import pytest

from sudoku_solver.geometry import (
    box_cells,
    box_index,
    box_origin,
    cell_coords,
    cell_index,
    peers,
    units,
)


def test_peers_of_every_cell_are_twenty_distinct_related_cells() -> None:
    for row in range(9):
        for col in range(9):
            related = peers(row, col)
            assert len(related) == 20
            assert len(set(related)) == 20
            assert (row, col) not in related
            for r, c in related:
                assert r == row or c == col or box_index(r, c) == box_index(row, col)


def test_peers_are_row_major() -> None:
    related = peers(4, 4)
    assert list(related) == sorted(related)
    assert related[0] == (0, 4)


def test_box_numbering() -> None:
    assert box_index(0, 0) == 0
    assert box_index(4, 4) == 4
    assert box_index(8, 0) == 6
    assert box_index(2, 8) == 2
    assert box_origin(5) == (3, 6)
    assert box_cells(8)[0] == (6, 6)
    assert box_cells(8)[-1] == (8, 8)


def test_units_cover_rows_columns_then_boxes() -> None:
    all_units = units()
    assert len(all_units) == 27
    assert [kind for kind, _, _ in all_units] == ["row"] * 9 + ["col"] * 9 + ["box"] * 9
    assert all(len(cells) == 9 for _, _, cells in all_units)
    assert units("col")[3][2] == tuple((row, 3) for row in range(9))


def test_units_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError):
        units("diagonal")


def test_cell_index_round_trip() -> None:
    assert cell_index(0, 0) == 0
    assert cell_index(8, 8) == 80
    assert cell_coords(cell_index(5, 7)) == (5, 7)

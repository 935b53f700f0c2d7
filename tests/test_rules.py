from __future__ import annotations

import pytest

from sudoku_solver import Delta, DeltaOp, Grid, Status, StepRunner, register_step
from sudoku_solver.grid import FULL_MASK, digit_bit, mask_of
from sudoku_solver.phases import (
    step_box_line,
    step_eliminate_peers,
    step_hidden_single_box,
    step_hidden_single_col,
    step_hidden_single_row,
    step_naked_single,
    step_subsets2_pairs,
)
from sudoku_solver.step_runner import registered_steps


def _keep_only(grid: Grid, row: int, col: int, digits: set[int]) -> None:
    grid.eliminate(row, col, FULL_MASK & ~mask_of(digits))


def _remove_everywhere_but(grid: Grid, cells, digit: int, keep: tuple[int, int]) -> None:
    for row, col in cells:
        if (row, col) != keep:
            grid.eliminate(row, col, digit_bit(digit))


def _elims(deltas) -> list[Delta]:
    return [delta for delta in deltas if delta.op is DeltaOp.ELIM]


def test_naked_single_places_and_clears_peers(empty_grid: Grid) -> None:
    _keep_only(empty_grid, 4, 4, {7})

    deltas, metrics = step_naked_single(empty_grid)

    assert deltas[0] == Delta.place(4, 4, 7)
    assert len(_elims(deltas)) == 20
    assert metrics == {"cell": 40}
    assert empty_grid.value(4, 4) == 7


def test_naked_single_without_candidates_does_nothing(empty_grid: Grid) -> None:
    assert step_naked_single(empty_grid) == ((), {})


def test_hidden_single_in_row(empty_grid: Grid) -> None:
    _remove_everywhere_but(empty_grid, [(2, col) for col in range(9)], 5, keep=(2, 6))

    deltas, metrics = step_hidden_single_row(empty_grid)

    assert deltas[0] == Delta.place(2, 6, 5)
    assert metrics == {"unit": "row[2]"}


def test_hidden_single_in_column(empty_grid: Grid) -> None:
    _remove_everywhere_but(empty_grid, [(row, 3) for row in range(9)], 9, keep=(7, 3))

    deltas, metrics = step_hidden_single_col(empty_grid)

    assert deltas[0] == Delta.place(7, 3, 9)
    assert metrics == {"unit": "col[3]"}


def test_hidden_single_in_box(empty_grid: Grid) -> None:
    box = [(row, col) for row in range(3, 6) for col in range(3, 6)]
    _remove_everywhere_but(empty_grid, box, 1, keep=(5, 5))

    deltas, metrics = step_hidden_single_box(empty_grid)

    assert deltas[0] == Delta.place(5, 5, 1)
    assert metrics == {"unit": "box[4]"}
    assert step_hidden_single_row(Grid()) == ((), {})


def test_peer_elimination_is_a_no_op_after_construction(euler: Grid) -> None:
    assert step_eliminate_peers(euler) == ((), {})


def test_pair_elimination_clears_row_and_box(empty_grid: Grid) -> None:
    _keep_only(empty_grid, 0, 0, {1, 2})
    _keep_only(empty_grid, 0, 1, {1, 2})

    deltas, metrics = step_subsets2_pairs(empty_grid)

    # Seven row-mates plus the six box-mates outside row 0, two digits each.
    assert len(_elims(deltas)) == 26
    assert metrics["passes"] == 2
    assert empty_grid.candidates(0, 5) == set(range(3, 10))
    assert empty_grid.candidates(2, 2) == set(range(3, 10))
    assert empty_grid.candidates(4, 0) == set(range(1, 10))
    assert empty_grid.candidates(0, 0) == {1, 2}


def test_pair_elimination_skips_empty_sets_in_rows_and_columns(empty_grid: Grid) -> None:
    # The same layout once along row 8 and once along column 8, each with an
    # open cell that has already run out of candidates.
    _keep_only(empty_grid, 8, 0, {3, 4})
    _keep_only(empty_grid, 8, 4, {3, 4})
    empty_grid.eliminate(8, 7, FULL_MASK)
    _keep_only(empty_grid, 0, 8, {6, 7})
    _keep_only(empty_grid, 4, 8, {6, 7})
    empty_grid.eliminate(7, 8, FULL_MASK)

    step_subsets2_pairs(empty_grid)

    assert empty_grid.mask(8, 7) == 0
    assert empty_grid.mask(7, 8) == 0
    assert empty_grid.candidates(8, 2) == set(range(1, 10)) - {3, 4}
    assert empty_grid.candidates(2, 8) == set(range(1, 10)) - {6, 7}


def test_pair_elimination_in_box_when_row_is_otherwise_full() -> None:
    grid = Grid.from_rows(
        [
            "..3456789",
            ".........",
            ".........",
            ".........",
            ".........",
            ".........",
            ".........",
            ".........",
            ".........",
        ]
    )
    assert grid.candidates(0, 0) == grid.candidates(0, 1) == {1, 2}
    before = grid.state_hash()

    step_subsets2_pairs(grid)

    # Box 0 still gets the eliminations; row 0 has nothing else to clear.
    assert 1 not in grid.candidates(1, 0)
    assert grid.state_hash() != before
    assert grid.candidates(0, 0) == {1, 2}


def test_third_identical_pair_exposes_contradiction(empty_grid: Grid) -> None:
    for col in range(3):
        _keep_only(empty_grid, 0, col, {1, 2})

    step_subsets2_pairs(empty_grid)

    assert empty_grid.mask(0, 2) == 0
    assert empty_grid.status() is Status.CONTRADICTION


def test_box_line_reduction_along_mini_row(empty_grid: Grid) -> None:
    for row in (0, 2):
        for col in range(3):
            empty_grid.eliminate(row, col, digit_bit(4))

    deltas, _ = step_box_line(empty_grid)

    assert len(deltas) == 6
    for col in range(3, 9):
        assert 4 not in empty_grid.candidates(1, col)
        assert 4 in empty_grid.candidates(0, col)
    assert 4 in empty_grid.candidates(1, 0)


def test_box_line_reduction_along_mini_column(empty_grid: Grid) -> None:
    for row in range(6, 9):
        for col in (6, 8):
            empty_grid.eliminate(row, col, digit_bit(6))

    deltas, metrics = step_box_line(empty_grid)

    assert _elims(deltas) == [Delta.elim(row, 7, 6) for row in range(6)]
    assert metrics["passes"] == 2
    assert 6 in empty_grid.candidates(7, 7)


def test_box_line_reduction_covers_the_last_box_band(empty_grid: Grid) -> None:
    for row in (7, 8):
        for col in range(6, 9):
            empty_grid.eliminate(row, col, digit_bit(2))

    step_box_line(empty_grid)

    assert 2 not in empty_grid.candidates(6, 0)
    assert 2 in empty_grid.candidates(6, 6)


def test_register_step_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError):
        register_step("BRANCH", "custom", step_naked_single)


def test_runner_rejects_unregistered_step(empty_grid: Grid) -> None:
    with pytest.raises(KeyError):
        StepRunner().run_step(empty_grid, "HEURISTICS", "fish.swordfish")


def test_rules_are_registered_in_reference_order() -> None:
    assert registered_steps("PROPAGATE") == (
        "peers.eliminate",
        "singles.naked",
        "singles.hidden_row",
        "singles.hidden_col",
        "singles.hidden_box",
    )
    assert registered_steps("HEURISTICS") == ("subsets2.pairs", "boxline.pointing")
    assert registered_steps("BRANCH") == ()

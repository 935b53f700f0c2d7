"""Shared puzzle fixtures."""

from __future__ import annotations

import pytest

from sudoku_solver import Grid

EMPTY = ["........."] * 9

# Rejected by any consistent assignment although no given repeats.
WRONG = [
    "34......5",
    ".867.....",
    "...8..19.",
    ".32.1....",
    ".5.....7.",
    "....8.34.",
    ".61..9...",
    ".....852.",
    "5.......3",
]

MEDIUM = [
    "..27.46..",
    "......2.7",
    "8......9.",
    "7..386.4.",
    ".3..9..8.",
    ".8.517..3",
    ".6......5",
    "2.8......",
    "..18.94..",
]

DIFFICULT1 = [
    "3192.....",
    "......7.1",
    "...63....",
    "67.8.35..",
    "9.......3",
    "..21.5.47",
    "....62...",
    "2.3......",
    ".....7259",
]

DIFFICULT2 = [
    "3.......5",
    ".867.....",
    "...8..19.",
    ".32.1....",
    ".5.....7.",
    "....8.34.",
    ".61..9...",
    ".....852.",
    "5.......3",
]

DIFFICULT3 = [
    "...41...3",
    "7....2..5",
    ".58.7....",
    "5....72..",
    "..2...5..",
    "..72....1",
    "....9.62.",
    "3..5....4",
    "6...84...",
]

EXPERT = [
    "8......3.",
    "........5",
    "9..7..1.4",
    "..186..2.",
    ".7.1...5.",
    "3....4...",
    "62....9..",
    ".....1...",
    ".59..32..",
]

EULER = [
    "003020600",
    "900305001",
    "001806400",
    "008102900",
    "700000008",
    "006708200",
    "002609500",
    "800203009",
    "005010300",
]

EULER_SOLUTION = [
    "483921657",
    "967345821",
    "251876493",
    "548132976",
    "729564138",
    "136798245",
    "372689514",
    "814253769",
    "695417382",
]

SOLVED = [
    "123456789",
    "456789123",
    "789123456",
    "214365897",
    "365897214",
    "897214365",
    "531642978",
    "642978531",
    "978531642",
]

# SOLVED with (0, 8) turned into a second 5 of row 0 and (5, 8) cleared:
# the cleared cell needs 5, which column 8 now holds.
CORRUPTED = [
    "123456785",
    "456789123",
    "789123456",
    "214365897",
    "365897214",
    "89721436.",
    "531642978",
    "642978531",
    "978531642",
]

SAMPLES = {
    "medium": MEDIUM,
    "difficult1": DIFFICULT1,
    "difficult2": DIFFICULT2,
    "difficult3": DIFFICULT3,
    "expert": EXPERT,
    "euler": EULER,
}


def givens_kept(puzzle: list[str], grid: Grid) -> bool:
    for row, line in enumerate(puzzle):
        for col, ch in enumerate(line[:9]):
            if ch in "123456789" and grid.value(row, col) != int(ch):
                return False
    return True


@pytest.fixture
def empty_grid() -> Grid:
    return Grid.from_rows(EMPTY)


@pytest.fixture
def difficult2() -> Grid:
    return Grid.from_rows(DIFFICULT2)


@pytest.fixture
def euler() -> Grid:
    return Grid.from_rows(EULER)


@pytest.fixture
def corrupted() -> Grid:
    return Grid.from_rows(CORRUPTED)

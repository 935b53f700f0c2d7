"""Grid data model: placed values plus a candidate bitmask per cell.

Candidate sets live in a fixed 9-bit universe, so each one is stored as an
``int`` mask where bit ``i`` stands for value ``i + 1``.  Callers that want
plain sets use :meth:`Grid.candidates`.
"""

from __future__ import annotations

import hashlib
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from contracts.errors import InputShapeError, ValidationReport, make_error, make_report, make_warning

from .delta import Delta
from .geometry import CELL_COUNT, SIZE, box_cells, col_cells, peers, row_cells, units

FULL_MASK = (1 << SIZE) - 1

_EMPTY_CHARS = frozenset("0. ")
_DIGIT_CHARS = frozenset("123456789")
_MARGIN = "|"


class Status(str, Enum):
    """Classification of a grid after propagation."""

    SOLVED = "solved"
    CONTRADICTION = "contradiction"
    UNDETERMINED = "undetermined"


def digit_bit(digit: int) -> int:
    return 1 << (digit - 1)


def mask_digits(mask: int) -> Tuple[int, ...]:
    """Digits contained in ``mask`` in ascending order."""

    return tuple(d for d in range(1, SIZE + 1) if mask & (1 << (d - 1)))


def mask_of(digits: Iterable[int]) -> int:
    mask = 0
    for digit in digits:
        mask |= digit_bit(digit)
    return mask


class Grid:
    """Mutable 9x9 board owned by a single solving attempt."""

    __slots__ = ("_values", "_masks")

    def __init__(self, values: Sequence[Sequence[int]] | None = None) -> None:
        self._values: List[List[int]] = [[0] * SIZE for _ in range(SIZE)]
        self._masks: List[List[int]] = [[0] * SIZE for _ in range(SIZE)]
        if values is not None:
            if len(values) != SIZE or any(len(row) != SIZE for row in values):
                raise InputShapeError("bad-shape", "values must be a 9x9 sequence")
            for r, row in enumerate(values):
                for c, value in enumerate(row):
                    value = int(value)
                    if not 0 <= value <= SIZE:
                        raise InputShapeError("bad-value", f"row {r}, col {c}: {value!r}")
                    self._values[r][c] = value
        self.recompute_candidates()

    # Construction -----------------------------------------------------

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Grid":
        """Build a grid from nine text rows.

        ``'0'``, ``'.'`` and ``' '`` mark an empty cell, ``'1'``-``'9'`` a
        given.  Only the first nine characters of each row are read.
        """

        rows = list(rows)
        if len(rows) < SIZE:
            raise InputShapeError("too-few-rows", f"expected {SIZE} rows, got {len(rows)}")
        if len(rows) > SIZE:
            raise InputShapeError("too-many-rows", f"expected {SIZE} rows, got {len(rows)}")

        values = []
        for r, line in enumerate(rows):
            if len(line) < SIZE:
                raise InputShapeError("short-row", f"row {r} has {len(line)} characters")
            parsed = []
            for c, ch in enumerate(line[:SIZE]):
                if ch in _EMPTY_CHARS:
                    parsed.append(0)
                elif ch in _DIGIT_CHARS:
                    parsed.append(int(ch))
                else:
                    raise InputShapeError("bad-character", f"row {r}, col {c}: {ch!r}")
            values.append(parsed)
        return cls(values)

    @classmethod
    def from_text(cls, text: str) -> "Grid":
        """Build a grid from a multi-line block.

        Rows may start with a ``|`` margin after their indentation; the
        marker and everything before it are dropped, and every other line
        must be blank.  Without markers the indentation shared by the
        non-blank lines is removed, never so much that a row would lose one
        of its nine cells, so ``' '`` keeps working as an empty cell.
        Whitespace-only lines too short to be a row are dropped from both
        ends of the block.
        """

        lines = text.splitlines()
        if any(line.lstrip().startswith(_MARGIN) for line in lines):
            rows = []
            for number, line in enumerate(lines):
                stripped = line.lstrip()
                if stripped.startswith(_MARGIN):
                    rows.append(stripped[len(_MARGIN):])
                elif stripped:
                    raise InputShapeError("missing-margin", f"line {number}: {line!r}")
            return cls.from_rows(rows)

        filled = [line for line in lines if line.strip()]
        indent = min((len(line) - len(line.lstrip()) for line in filled), default=0)
        indent = max(0, min([indent] + [len(line) - SIZE for line in filled]))
        width = indent + SIZE
        while lines and not lines[0].strip() and len(lines[0]) < width:
            lines.pop(0)
        while lines and not lines[-1].strip() and len(lines[-1]) < width:
            lines.pop()
        return cls.from_rows([line[indent:] for line in lines])

    @classmethod
    def from_values(cls, values: Sequence[Sequence[int]]) -> "Grid":
        return cls(values)

    def copy(self) -> "Grid":
        clone = Grid.__new__(Grid)
        clone._values = [row[:] for row in self._values]
        clone._masks = [row[:] for row in self._masks]
        return clone

    # Cell access ------------------------------------------------------

    def value(self, row: int, col: int) -> int:
        return self._values[row][col]

    def mask(self, row: int, col: int) -> int:
        return self._masks[row][col]

    def candidates(self, row: int, col: int) -> frozenset[int]:
        return frozenset(mask_digits(self._masks[row][col]))

    def is_open(self, row: int, col: int) -> bool:
        return self._values[row][col] == 0

    def as_lists(self) -> List[List[int]]:
        return [row[:] for row in self._values]

    def to_rows(self, empty: str = ".") -> List[str]:
        return ["".join(str(v) if v else empty for v in row) for row in self._values]

    # Mutation ---------------------------------------------------------

    def place(self, row: int, col: int, value: int) -> Tuple[Delta, ...]:
        """Fill ``(row, col)`` and drop ``value`` from its 20 peers.

        Returns the PLACE delta followed by one ELIM delta per peer that lost
        the candidate.  The cell's own candidate set is cleared.
        """

        deltas = [Delta.place(row, col, value)]
        self._values[row][col] = value
        self._masks[row][col] = 0
        bit = digit_bit(value)
        for r, c in peers(row, col):
            if self._masks[r][c] & bit:
                self._masks[r][c] &= ~bit
                deltas.append(Delta.elim(r, c, value))
        return tuple(deltas)

    def eliminate(self, row: int, col: int, mask: int) -> Tuple[Delta, ...]:
        """Remove the digits in ``mask`` from the cell's candidates."""

        removed = self._masks[row][col] & mask
        if not removed:
            return ()
        self._masks[row][col] &= ~removed
        return tuple(Delta.elim(row, col, digit) for digit in mask_digits(removed))

    def placed_mask(self, row: int, col: int) -> int:
        """Values already placed among the peers of ``(row, col)``."""

        used = 0
        for r, c in peers(row, col):
            value = self._values[r][c]
            if value:
                used |= digit_bit(value)
        return used

    def eliminate_placed(self) -> Tuple[Delta, ...]:
        """Drop every placed value from the candidates of its open peers."""

        deltas: List[Delta] = []
        for row in range(SIZE):
            for col in range(SIZE):
                if self._values[row][col] == 0:
                    deltas.extend(self.eliminate(row, col, self.placed_mask(row, col)))
        return tuple(deltas)

    def recompute_candidates(self) -> None:
        """Rebuild all candidate sets from the placed values alone."""

        for row in range(SIZE):
            for col in range(SIZE):
                if self._values[row][col]:
                    self._masks[row][col] = 0
                else:
                    self._masks[row][col] = FULL_MASK & ~self.placed_mask(row, col)

    def snapshot(self) -> Tuple[int, ...]:
        """Row-major copy of the 81 values."""

        return tuple(value for row in self._values for value in row)

    def restore(self, snapshot: Sequence[int]) -> None:
        """Write back values from :meth:`snapshot` and recompute candidates."""

        if len(snapshot) != CELL_COUNT:
            raise ValueError(f"snapshot must hold {CELL_COUNT} values, got {len(snapshot)}")
        for index, value in enumerate(snapshot):
            self._values[index // SIZE][index % SIZE] = value
        self.recompute_candidates()

    # Status -----------------------------------------------------------

    @property
    def open_cells(self) -> int:
        return sum(row.count(0) for row in self._values)

    @property
    def filled_cells(self) -> int:
        return CELL_COUNT - self.open_cells

    @property
    def candidate_count(self) -> int:
        return sum(mask.bit_count() for row in self._masks for mask in row)

    @property
    def failed_cells(self) -> int:
        """Open cells without any candidate left."""

        return sum(
            1
            for row in range(SIZE)
            for col in range(SIZE)
            if self._values[row][col] == 0 and self._masks[row][col] == 0
        )

    def status(self) -> Status:
        if self.open_cells == 0:
            return Status.SOLVED
        if self.failed_cells > 0:
            return Status.CONTRADICTION
        return Status.UNDETERMINED

    def conflicts(self) -> ValidationReport:
        """Report duplicate values inside a unit and open cells with no candidates."""

        issues = []
        for kind, index, cells in units():
            seen: dict[int, int] = {}
            for r, c in cells:
                value = self._values[r][c]
                if value:
                    seen[value] = seen.get(value, 0) + 1
            for value, count in sorted(seen.items()):
                if count > 1:
                    issues.append(
                        make_error(
                            "unit.duplicate",
                            f"value {value} appears {count} times in {kind} {index}",
                            f"{kind}[{index}]",
                        )
                    )
        for row in range(SIZE):
            for col in range(SIZE):
                if self._values[row][col] == 0 and self._masks[row][col] == 0:
                    issues.append(
                        make_warning("cell.no_candidates", "open cell has no candidates", f"cell[{row}][{col}]")
                    )
        return make_report(issues)

    def is_valid_solution(self) -> bool:
        """True when every unit holds each of 1..9 exactly once."""

        full = list(range(1, SIZE + 1))
        for cells in (row_cells, col_cells, box_cells):
            for index in range(SIZE):
                if sorted(self._values[r][c] for r, c in cells(index)) != full:
                    return False
        return True

    def state_hash(self) -> str:
        """Digest over values and candidate masks, stable across processes."""

        payload = bytes(self.snapshot()) + b"".join(
            mask.to_bytes(2, "big") for row in self._masks for mask in row
        )
        return f"sha256-{hashlib.sha256(payload).hexdigest()}"

    def __repr__(self) -> str:
        return f"Grid(open_cells={self.open_cells}, candidates={self.candidate_count})"


__all__ = [
    "FULL_MASK",
    "Grid",
    "Status",
    "digit_bit",
    "mask_digits",
    "mask_of",
]

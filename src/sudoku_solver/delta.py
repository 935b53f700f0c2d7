"""Move and delta primitives shared across solver components.

A :class:`Move` is a single assignment ``(row, col, value)`` produced by a
deduction rule or by a search guess.  A :class:`Delta` describes one atomic
grid mutation: a candidate elimination or a placement.  Rules report the
deltas they applied so that traces and external renderers can replay the
solving process without the core knowing about them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Mapping, Tuple

from .geometry import cell_coords, cell_index


class DeltaValidationError(ValueError):
    """Raised when a move or delta field is out of range."""


class DeltaOp(str, Enum):
    """Supported delta kinds."""

    ELIM = "ELIM"
    PLACE = "PLACE"

    @classmethod
    def from_value(cls, value: str) -> "DeltaOp":
        try:
            return cls(value)
        except ValueError as exc:
            raise DeltaValidationError(f"Unsupported delta op: {value!r}") from exc


def _check_digit(digit: int) -> None:
    if not 1 <= int(digit) <= 9:
        raise DeltaValidationError(f"digit must be in [1, 9], got {digit!r}")


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable assignment of ``value`` to the cell at ``(row, col)``."""

    row: int
    col: int
    value: int

    def __post_init__(self) -> None:
        if not 0 <= int(self.row) <= 8 or not 0 <= int(self.col) <= 8:
            raise DeltaValidationError(f"cell ({self.row!r}, {self.col!r}) is outside the grid")
        _check_digit(self.value)

    @property
    def cell(self) -> int:
        return cell_index(self.row, self.col)

    def to_delta(self) -> "Delta":
        return Delta(DeltaOp.PLACE, self.cell, self.value)

    def to_payload(self) -> dict:
        return {"row": int(self.row), "col": int(self.col), "value": int(self.value)}


@dataclass(frozen=True, slots=True)
class Delta:
    """Canonical representation of a single state mutation."""

    op: DeltaOp
    cell: int
    digit: int

    def __post_init__(self) -> None:
        if not isinstance(self.op, DeltaOp):
            object.__setattr__(self, "op", DeltaOp.from_value(str(self.op)))
        if not 0 <= int(self.cell) <= 80:
            raise DeltaValidationError(f"cell must be in [0, 80], got {self.cell!r}")
        _check_digit(self.digit)

    @classmethod
    def place(cls, row: int, col: int, digit: int) -> "Delta":
        return cls(DeltaOp.PLACE, cell_index(row, col), digit)

    @classmethod
    def elim(cls, row: int, col: int, digit: int) -> "Delta":
        return cls(DeltaOp.ELIM, cell_index(row, col), digit)

    def sort_key(self) -> Tuple[int, int, int]:
        """Return canonical sorting key (op → cell → digit)."""

        return (0 if self.op is DeltaOp.ELIM else 1, int(self.cell), int(self.digit))

    def to_move(self) -> Move:
        """Convert a placement into the equivalent :class:`Move`."""

        if self.op is not DeltaOp.PLACE:
            raise DeltaValidationError("only PLACE deltas describe a move")
        row, col = cell_coords(self.cell)
        return Move(row, col, self.digit)

    def to_payload(self) -> dict:
        """Convert the delta into a serialisable mapping."""

        return {"op": self.op.value, "cell": int(self.cell), "digit": int(self.digit)}


DeltaLike = Delta | Mapping[str, object]


def ensure_delta(candidate: DeltaLike) -> Delta:
    """Normalise arbitrary delta descriptor to :class:`Delta`."""

    if isinstance(candidate, Delta):
        return candidate
    if isinstance(candidate, Mapping):
        try:
            op = candidate["op"]
            cell = candidate["cell"]
            digit = candidate["digit"]
        except KeyError as exc:
            raise DeltaValidationError("delta mapping is missing required keys") from exc
        return Delta(DeltaOp.from_value(str(op)), int(cell), int(digit))
    raise TypeError(f"Unsupported delta descriptor: {type(candidate)!r}")


def _iter_canonical(deltas: Iterable[DeltaLike]) -> Iterator[Delta]:
    for item in deltas:
        yield ensure_delta(item)


def canonicalise_deltas(deltas: Iterable[DeltaLike]) -> Tuple[Delta, ...]:
    """Return deltas sorted according to the canonical order."""

    return tuple(sorted(_iter_canonical(deltas), key=Delta.sort_key))


__all__ = [
    "Delta",
    "DeltaLike",
    "DeltaOp",
    "DeltaValidationError",
    "Move",
    "canonicalise_deltas",
    "ensure_delta",
]

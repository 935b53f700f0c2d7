"""SolveTrace v1: the move-event log of a solving run."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Mapping, MutableSequence, Sequence

from .delta import Delta, DeltaOp, Move, canonicalise_deltas


class TraceValidationError(ValueError):
    """Raised when a trace entry violates the SolveTrace v1 contract."""


@dataclass(frozen=True, slots=True)
class SolveTraceEntry:
    """Immutable container with SolveTrace v1 payload."""

    step: int
    technique_id: str
    depth: int
    deltas: Sequence[Delta]
    placements: int
    candidates_removed: int
    state_hash_before: str
    state_hash_after: str
    note: str | None = None

    def __post_init__(self) -> None:
        if self.step < 1:
            raise TraceValidationError("step must be >= 1")
        if not self.technique_id:
            raise TraceValidationError("technique_id must be a non-empty string")
        if not 0 <= self.depth <= 81:
            raise TraceValidationError("depth must be in [0, 81]")
        if self.placements < 0:
            raise TraceValidationError("placements must be >= 0")
        if self.candidates_removed < 0:
            raise TraceValidationError("candidates_removed must be >= 0")

    @property
    def move(self) -> Move | None:
        """The placement made by this step, if any."""

        for delta in self.deltas:
            if delta.op is DeltaOp.PLACE:
                return delta.to_move()
        return None

    def to_payload(self) -> dict:
        move = self.move
        payload = {
            "step": int(self.step),
            "technique_id": str(self.technique_id),
            "depth": int(self.depth),
            "move": None if move is None else move.to_payload(),
            "deltas": [delta.to_payload() for delta in canonicalise_deltas(self.deltas)],
            "placements": int(self.placements),
            "candidates_removed": int(self.candidates_removed),
            "state_hash_before": str(self.state_hash_before),
            "state_hash_after": str(self.state_hash_after),
        }
        if self.note is not None:
            payload["note"] = str(self.note)
        return payload


@dataclass
class SolveTrace:
    """Mutable trace accumulator producing SolveTrace v1 JSON payloads.

    A trace is the optional sink threaded through propagation and search.
    Renderers consume it through :meth:`moves` or :meth:`events`.
    """

    entries: MutableSequence[SolveTraceEntry] = field(default_factory=list)

    def append(self, entry: SolveTraceEntry | Mapping[str, object]) -> None:
        if isinstance(entry, Mapping):
            entry = SolveTraceEntry(**entry)
        if self.entries and entry.step <= self.entries[-1].step:
            raise TraceValidationError("trace steps must be strictly increasing")
        self.entries.append(entry)

    def extend(self, entries: Iterable[SolveTraceEntry | Mapping[str, object]]) -> None:
        for entry in entries:
            self.append(entry)

    def record(
        self,
        technique_id: str,
        deltas: Sequence[Delta],
        *,
        depth: int,
        before: str,
        after: str,
        note: str | None = None,
    ) -> SolveTraceEntry:
        """Append the next entry, numbering steps consecutively from 1."""

        entry = SolveTraceEntry(
            step=len(self.entries) + 1,
            technique_id=technique_id,
            depth=depth,
            deltas=tuple(deltas),
            placements=sum(1 for delta in deltas if delta.op is DeltaOp.PLACE),
            candidates_removed=sum(1 for delta in deltas if delta.op is DeltaOp.ELIM),
            state_hash_before=before,
            state_hash_after=after,
            note=note,
        )
        self.append(entry)
        return entry

    def events(self) -> Iterator[SolveTraceEntry]:
        """Iterate over the entries recorded so far, backtracks included."""

        yield from list(self.entries)

    def moves(self) -> Iterator[Move]:
        """Lazily yield every placement in solving order.

        The iterator is single-use; call :meth:`moves` again to replay.
        """

        for entry in self.events():
            move = entry.move
            if move is not None:
                yield move

    def snapshot(self) -> List[SolveTraceEntry]:
        return list(self.entries)

    def to_payload(self) -> list:
        return [entry.to_payload() for entry in self.entries]

    def to_json(self, *, indent: int | None = None) -> str:
        return json.dumps(self.to_payload(), ensure_ascii=False, separators=(",", ":"), indent=indent)


__all__ = ["SolveTrace", "SolveTraceEntry", "TraceValidationError"]

"""Deduction rule registration."""

from __future__ import annotations

from ..step_runner import register_step
from .boxline import step_box_line
from .propagate import step_eliminate_peers, step_naked_single
from .singles import step_hidden_single_box, step_hidden_single_col, step_hidden_single_row
from .subsets2 import step_subsets2_pairs

register_step("PROPAGATE", "peers.eliminate", step_eliminate_peers)
register_step("PROPAGATE", "singles.naked", step_naked_single)
register_step("PROPAGATE", "singles.hidden_row", step_hidden_single_row)
register_step("PROPAGATE", "singles.hidden_col", step_hidden_single_col)
register_step("PROPAGATE", "singles.hidden_box", step_hidden_single_box)
register_step("HEURISTICS", "subsets2.pairs", step_subsets2_pairs)
register_step("HEURISTICS", "boxline.pointing", step_box_line)

# Reference order of the outer fixpoint loop.
SINGLES_ORDER = (
    "singles.naked",
    "singles.hidden_row",
    "singles.hidden_col",
    "singles.hidden_box",
)
HEURISTICS_ORDER = ("subsets2.pairs", "boxline.pointing")

__all__ = [
    "HEURISTICS_ORDER",
    "SINGLES_ORDER",
    "step_box_line",
    "step_eliminate_peers",
    "step_hidden_single_box",
    "step_hidden_single_col",
    "step_hidden_single_row",
    "step_naked_single",
    "step_subsets2_pairs",
]

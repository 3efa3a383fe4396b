"""Result payload for a formula checked at one state.

Inputs/Outputs:
  - Inputs: produced by evaluator.evaluate_states.
  - Outputs: immutable dataclass consumed by app/cli layers.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FormulaCheck:
    state_id: int
    holds: bool

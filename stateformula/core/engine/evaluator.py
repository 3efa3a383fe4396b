"""Formula evaluation for a single state.

Responsibilities:
  - Interpret a formula tree recursively against a PredicateStore.
  - Delegate every atomic test to store.exists_predicate with bound values.

Inputs/Outputs:
  - Inputs: Formula, state id, and a store.
  - Outputs: bool, or FormulaCheck rows for several states.

Invariants:
  - Pure function of (formula, state_id, store contents); no caching.
  - A state with no facts (or no such state) makes every Atomic false.
  - Store failures propagate as StoreUnavailable; they are never read as False.
"""

from __future__ import annotations

from typing import Callable, Iterable

from ..formula.nodes import And, Atomic, Formula, Not, Or, render
from .ports import PredicateStore
from .result import FormulaCheck

_DEBUG_FN: Callable[[str], None] | None = None


def set_evaluator_debug(fn: Callable[[str], None] | None) -> None:
    global _DEBUG_FN
    _DEBUG_FN = fn


def evaluate(formula: Formula, state_id: int, store: PredicateStore) -> bool:
    if isinstance(formula, Atomic):
        holds = store.exists_predicate(
            state_id,
            formula.name,
            formula.attr1,
            formula.attr2,
            formula.attr3,
        )
        if _DEBUG_FN is not None:
            _DEBUG_FN(f"ATOM state={state_id} {render(formula)} -> {holds}")
        return holds
    if isinstance(formula, Not):
        return not evaluate(formula.operand, state_id, store)
    if isinstance(formula, And):
        return all(evaluate(op, state_id, store) for op in formula.operands)
    if isinstance(formula, Or):
        return any(evaluate(op, state_id, store) for op in formula.operands)
    raise ValueError(f"Unsupported formula node: {type(formula).__name__}")


def evaluate_states(
    formula: Formula,
    state_ids: Iterable[int],
    store: PredicateStore,
) -> list[FormulaCheck]:
    return [
        FormulaCheck(state_id=state_id, holds=evaluate(formula, state_id, store))
        for state_id in state_ids
    ]

"""Port definitions for app-level dependencies.

Responsibilities:
  - Define the full fact store contract used by the application facade.
Must not:
  - Implement logic; interfaces only.
"""

from __future__ import annotations

from typing import Protocol

from stateformula.core.domain.models import Predicate, State, Transition
from stateformula.core.engine.ports import PredicateStore
from stateformula.core.formula.nodes import Formula


class FactStore(PredicateStore, Protocol):
    def add_state(self, state: State) -> None:
        ...

    def add_transition(self, transition: Transition) -> None:
        ...

    def add_predicate(self, predicate: Predicate) -> None:
        ...

    def evaluate_formula(self, formula: Formula, state_id: int) -> bool:
        ...

    def list_states(self, initial_only: bool = False) -> list[State]:
        ...

    def list_transitions(self) -> list[Transition]:
        ...

    def count_predicates(self) -> int:
        ...

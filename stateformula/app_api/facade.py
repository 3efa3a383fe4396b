from __future__ import annotations

import sqlite3

from stateformula.core.domain.errors import StoreUnavailable
from stateformula.core.engine.evaluator import evaluate, evaluate_states
from stateformula.core.engine.result import FormulaCheck
from stateformula.core.formula.nodes import Formula
from stateformula.infra.sqlite.repos.fact_store import SqliteFactStore
from .ports import FactStore
from .model_spec import ModelSpec


class TransitionSystemApplication:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._store: FactStore = SqliteFactStore(conn)

    @property
    def store(self) -> FactStore:
        return self._store

    def load(self, spec: ModelSpec) -> None:
        """Insert all entities of spec atomically; any failure rolls back the whole load."""
        try:
            self._conn.execute("BEGIN")
        except sqlite3.Error as exc:
            raise StoreUnavailable(f"Cannot start load transaction: {exc}") from exc
        try:
            for state in spec.states:
                self._store.add_state(state)
            for transition in spec.transitions:
                self._store.add_transition(transition)
            for predicate in spec.predicates:
                self._store.add_predicate(predicate)
            self._conn.commit()
        except Exception:
            self._conn.rollback()
            raise

    def check(self, formula: Formula, state_id: int, compiled: bool = False) -> bool:
        if compiled:
            return self._store.evaluate_formula(formula, state_id)
        return evaluate(formula, state_id, self._store)

    def check_states(
        self,
        formula: Formula,
        initial_only: bool = False,
        compiled: bool = False,
    ) -> list[FormulaCheck]:
        state_ids = [state.state_id for state in self._store.list_states(initial_only=initial_only)]
        if compiled:
            return [
                FormulaCheck(state_id=state_id, holds=self._store.evaluate_formula(formula, state_id))
                for state_id in state_ids
            ]
        return evaluate_states(formula, state_ids, self._store)

"""SQLite repository for states, transitions, and predicate facts.

Responsibilities:
  - Insert entities and translate integrity failures into ConstraintViolation.
  - Answer exact-match existence queries with bound parameters.
  - Run compiled single-query formula checks.
Must not:
  - Commit or roll back; the caller owns the transaction.
  - Treat an absent attribute as a wildcard.
"""

from __future__ import annotations

import sqlite3
from typing import Optional

from stateformula.core.domain.errors import ConstraintViolation, StoreUnavailable
from stateformula.core.domain.models import Predicate, State, Transition
from stateformula.core.engine.evaluator import evaluate
from stateformula.core.formula.nodes import Formula
from stateformula.infra.sqlite.formula_sql import compile_formula

_SQLITE_MIN_INT = -(2**63)
_SQLITE_MAX_INT = 2**63 - 1


def _storable_id(value: int) -> bool:
    return _SQLITE_MIN_INT <= value <= _SQLITE_MAX_INT


class SqliteFactStore:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        try:
            self._conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as exc:
            raise StoreUnavailable(f"Fact store connection unusable: {exc}") from exc

    def _write(self, sql: str, params: tuple[object, ...]) -> None:
        try:
            self._conn.execute(sql, params)
        except sqlite3.IntegrityError as exc:
            raise ConstraintViolation(str(exc)) from exc
        except OverflowError as exc:
            raise ConstraintViolation(f"Identifier out of range: {exc}") from exc
        except sqlite3.Error as exc:
            raise StoreUnavailable(str(exc)) from exc

    def _read(self, sql: str, params: tuple[object, ...] = ()) -> list[sqlite3.Row]:
        try:
            return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise StoreUnavailable(str(exc)) from exc

    def add_state(self, state: State) -> None:
        self._write(
            "INSERT INTO state (state_id, is_initial) VALUES (?, ?)",
            (state.state_id, state.is_initial),
        )

    def add_transition(self, transition: Transition) -> None:
        self._write(
            "INSERT INTO transition (from_state, to_state) VALUES (?, ?)",
            (transition.from_state, transition.to_state),
        )

    def add_predicate(self, predicate: Predicate) -> None:
        self._write(
            """
            INSERT INTO predicate (fact_id, state_id, name, attr1, attr2, attr3)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                predicate.fact_id,
                predicate.state_id,
                predicate.name,
                predicate.attr1,
                predicate.attr2,
                predicate.attr3,
            ),
        )

    def exists_predicate(
        self,
        state_id: int,
        name: str,
        attr1: Optional[str],
        attr2: Optional[str],
        attr3: Optional[str],
    ) -> bool:
        if not _storable_id(state_id):
            return False
        try:
            rows = self._read(
                """
                SELECT EXISTS (
                    SELECT 1
                    FROM state s JOIN predicate p ON s.state_id = p.state_id
                    WHERE s.state_id = ?
                      AND p.name = ?
                      AND p.attr1 IS ?
                      AND p.attr2 IS ?
                      AND p.attr3 IS ?
                )
                """,
                (state_id, name, attr1, attr2, attr3),
            )
        except UnicodeEncodeError:
            # Text that is not valid UTF-8 cannot be stored, so it matches nothing.
            return False
        return bool(rows[0][0])

    def _limit(self, category: int) -> int:
        try:
            return self._conn.getlimit(category)
        except sqlite3.Error as exc:
            raise StoreUnavailable(str(exc)) from exc

    def evaluate_formula(self, formula: Formula, state_id: int) -> bool:
        if not _storable_id(state_id):
            # Unstorable id; -1 can never match a stored state either.
            state_id = -1
        compiled = compile_formula(formula, state_id)
        if (
            compiled.depth >= self._limit(sqlite3.SQLITE_LIMIT_EXPR_DEPTH)
            or len(compiled.params) > self._limit(sqlite3.SQLITE_LIMIT_VARIABLE_NUMBER)
        ):
            # Too large for one statement; same answer, one query per atom.
            return evaluate(formula, state_id, self)
        rows = self._read(compiled.sql, compiled.params)
        return bool(rows[0][0])

    def list_states(self, initial_only: bool = False) -> list[State]:
        if initial_only:
            rows = self._read(
                "SELECT state_id, is_initial FROM state WHERE is_initial = 1 ORDER BY state_id"
            )
        else:
            rows = self._read("SELECT state_id, is_initial FROM state ORDER BY state_id")
        return [State(state_id=row[0], is_initial=bool(row[1])) for row in rows]

    def list_transitions(self) -> list[Transition]:
        rows = self._read(
            "SELECT from_state, to_state FROM transition ORDER BY from_state, to_state"
        )
        return [Transition(from_state=row[0], to_state=row[1]) for row in rows]

    def count_predicates(self) -> int:
        rows = self._read("SELECT COUNT(*) FROM predicate")
        return int(rows[0][0])

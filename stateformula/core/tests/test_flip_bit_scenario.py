"""Tests for formula evaluation on the two-state flip-bit system."""

from __future__ import annotations

import sqlite3

from stateformula.core.domain.models import Predicate, State, Transition
from stateformula.core.engine.evaluator import evaluate
from stateformula.core.formula.nodes import And, Atomic, Not
from stateformula.infra.sqlite.db import get_connection
from stateformula.infra.sqlite.migrator import apply_migrations
from stateformula.infra.sqlite.repos.fact_store import SqliteFactStore


def _flip_bit_store() -> tuple[sqlite3.Connection, SqliteFactStore]:
    conn = get_connection(":memory:")
    apply_migrations(conn)
    store = SqliteFactStore(conn)
    store.add_state(State(state_id=0, is_initial=True))
    store.add_state(State(state_id=1, is_initial=True))
    store.add_predicate(Predicate(fact_id=0, state_id=0, name="b", attr1="0"))
    store.add_predicate(Predicate(fact_id=1, state_id=1, name="b", attr1="1"))
    store.add_transition(Transition(from_state=0, to_state=1))
    store.add_transition(Transition(from_state=1, to_state=0))
    return conn, store


def test_b1_holds_in_state_1() -> None:
    conn, store = _flip_bit_store()
    assert evaluate(Atomic("b", "1", None, None), 1, store) is True
    conn.close()


def test_not_b1_is_false_in_state_1() -> None:
    conn, store = _flip_bit_store()
    assert evaluate(Not(Atomic("b", "1", None, None)), 1, store) is False
    conn.close()


def test_b1_and_b1_holds_in_state_1() -> None:
    conn, store = _flip_bit_store()
    b1 = Atomic("b", "1", None, None)
    assert evaluate(And(b1, b1), 1, store) is True
    conn.close()


def test_b1_does_not_hold_in_state_0() -> None:
    conn, store = _flip_bit_store()
    assert evaluate(Atomic("b", "1", None, None), 0, store) is False
    conn.close()


def test_b0_holds_in_state_0() -> None:
    conn, store = _flip_bit_store()
    assert evaluate(Atomic("b", "0", None, None), 0, store) is True
    conn.close()


def test_compiled_query_matches_recursive_evaluation() -> None:
    conn, store = _flip_bit_store()
    b0 = Atomic("b", "0")
    b1 = Atomic("b", "1")
    formulas = [b0, b1, Not(b1), And(b1, b1), And(b0, Not(b1)), Not(And(b0, b1))]
    for formula in formulas:
        for state_id in (0, 1, 2):
            assert store.evaluate_formula(formula, state_id) == evaluate(formula, state_id, store)
    conn.close()

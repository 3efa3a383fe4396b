"""Tests for the application facade: atomic load and multi-state checks."""

from __future__ import annotations

import pytest

from stateformula.app_api.facade import TransitionSystemApplication
from stateformula.app_api.model_spec import parse_model_spec
from stateformula.core.domain.errors import ConstraintViolation
from stateformula.core.engine.result import FormulaCheck
from stateformula.core.formula.nodes import Atomic, Not, Or
from stateformula.infra.sqlite.db import get_connection
from stateformula.infra.sqlite.migrator import apply_migrations


def _app() -> TransitionSystemApplication:
    conn = get_connection(":memory:")
    apply_migrations(conn)
    conn.commit()
    return TransitionSystemApplication(conn)


def _three_state_spec(extra_predicates: list[dict] | None = None):
    payload = {
        "states": [
            {"state_id": 0, "is_initial": True},
            {"state_id": 1, "is_initial": False},
            {"state_id": 2, "is_initial": True},
        ],
        "transitions": [
            {"from_state": 0, "to_state": 1},
            {"from_state": 1, "to_state": 2},
            {"from_state": 2, "to_state": 2},
        ],
        "predicates": [
            {"fact_id": 0, "state_id": 0, "name": "pc", "attr1": "start"},
            {"fact_id": 1, "state_id": 1, "name": "pc", "attr1": "mid"},
            {"fact_id": 2, "state_id": 2, "name": "pc", "attr1": "done"},
            {"fact_id": 3, "state_id": 2, "name": "halted"},
        ]
        + (extra_predicates or []),
    }
    return parse_model_spec(payload)


def test_load_then_check_single_state() -> None:
    app = _app()
    app.load(_three_state_spec())
    assert app.check(Atomic("pc", "mid"), 1) is True
    assert app.check(Atomic("pc", "mid"), 1, compiled=True) is True
    assert app.check(Atomic("halted"), 1) is False


def test_failed_load_rolls_back_everything() -> None:
    app = _app()
    bad = _three_state_spec([{"fact_id": 9, "state_id": 42, "name": "orphan"}])
    with pytest.raises(ConstraintViolation):
        app.load(bad)
    assert app.store.list_states() == []
    assert app.store.list_transitions() == []
    assert app.store.count_predicates() == 0

    app.load(_three_state_spec())
    assert len(app.store.list_states()) == 3


def test_check_states_over_all_and_initial_states() -> None:
    app = _app()
    app.load(_three_state_spec())
    formula = Or(Atomic("pc", "start"), Atomic("halted"))

    assert app.check_states(formula) == [
        FormulaCheck(0, True),
        FormulaCheck(1, False),
        FormulaCheck(2, True),
    ]
    assert app.check_states(Not(formula), initial_only=True) == [
        FormulaCheck(0, False),
        FormulaCheck(2, False),
    ]
    assert app.check_states(formula, compiled=True) == app.check_states(formula)

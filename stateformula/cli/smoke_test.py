"""Lightweight CLI smoke test entry point for end-to-end sanity checks.

Purpose:
  - Build the two-state flip-bit system in memory and check formulas on it.
  - The system transcribes:  VARIABLE b;  INIT == b=0 \\/ b=1;
    Next == b=0 /\\ b'=1 \\/ b=1 /\\ b'=0
Outputs:
  - Printed formula results (recursive and compiled) to stdout.
Example:
  - PYTHONPATH=. python3 stateformula/cli/smoke_test.py
"""

from __future__ import annotations

from stateformula.app_api.facade import TransitionSystemApplication
from stateformula.app_api.model_spec import parse_model_spec
from stateformula.cli._debug_utils import format_bool
from stateformula.core.formula.nodes import And, Atomic, Not, Or, render
from stateformula.infra.sqlite.db import get_connection
from stateformula.infra.sqlite.migrator import apply_migrations

FLIP_BIT_MODEL = {
    "states": [
        {"state_id": 0, "is_initial": True},
        {"state_id": 1, "is_initial": True},
    ],
    "transitions": [
        {"from_state": 0, "to_state": 1},
        {"from_state": 1, "to_state": 0},
    ],
    "predicates": [
        {"fact_id": 0, "state_id": 0, "name": "b", "attr1": "0"},
        {"fact_id": 1, "state_id": 1, "name": "b", "attr1": "1"},
    ],
}


def main() -> None:
    conn = get_connection(":memory:")
    try:
        apply_migrations(conn)
        conn.commit()
        app = TransitionSystemApplication(conn)
        app.load(parse_model_spec(FLIP_BIT_MODEL))

        states = app.store.list_states()
        transitions = app.store.list_transitions()
        print(f"OK loaded states={len(states)} transitions={len(transitions)}")

        b0 = Atomic("b", "0")
        b1 = Atomic("b", "1")
        checks = [
            (b1, 1),
            (Not(b1), 1),
            (And(b1, b1), 1),
            (b1, 0),
            (b0, 0),
            (Or(b0, b1), 0),
        ]
        mismatches = 0
        for formula, state_id in checks:
            holds = app.check(formula, state_id)
            holds_compiled = app.check(formula, state_id, compiled=True)
            if holds != holds_compiled:
                mismatches += 1
            print(
                f"{render(formula)} @ {state_id}: "
                f"{format_bool(holds)} compiled={format_bool(holds_compiled)}"
            )

        for check in app.check_states(Or(b0, b1), initial_only=True):
            print(f"INIT STATE={check.state_id} HOLDS={format_bool(check.holds)}")

        print("OVERALL: PASS" if mismatches == 0 else f"OVERALL: FAIL mismatches={mismatches}")
    finally:
        conn.close()


if __name__ == "__main__":
    main()

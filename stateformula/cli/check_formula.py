"""Check a formula against states of a loaded transition system.

Purpose:
  - Evaluate one JSON-encoded formula at one state, all states, or initial states.
Inputs:
  - CLI args for DB path, formula source, and state selection.
Outputs:
  - One "STATE=<id> HOLDS=<true|false>" line per checked state; exit code 2
    when the store cannot be queried.
Example:
  - PYTHONPATH=. python3 stateformula/cli/check_formula.py --db flip.db \
      --formula '{"not": {"pred": "b", "args": ["1"]}}' --state 1
"""

from __future__ import annotations

import argparse
from pathlib import Path

from stateformula.app_api.facade import TransitionSystemApplication
from stateformula.core.domain.errors import StoreError
from stateformula.core.engine.evaluator import set_evaluator_debug
from stateformula.core.engine.result import FormulaCheck
from stateformula.core.formula.codec import parse_formula_text
from stateformula.core.formula.nodes import Formula, render
from stateformula.infra.sqlite.db_readonly import get_readonly_connection
from stateformula.cli._debug_utils import _dbg, _debug_enabled, format_bool


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate a formula at transition system states")
    parser.add_argument("--db", required=True, help="Path to SQLite database")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--formula", help="Formula as a JSON string")
    source.add_argument("--formula-file", help="Path to a formula JSON file")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--state", type=int, help="State id to check")
    target.add_argument("--all-states", action="store_true")
    target.add_argument("--initial-states", action="store_true")
    parser.add_argument("--compiled", action="store_true", help="Evaluate as a single SQL query")
    parser.add_argument("--debug", action="store_true")
    return parser.parse_args()


def load_formula(args: argparse.Namespace) -> Formula:
    if args.formula_file:
        text = Path(args.formula_file).read_text(encoding="utf-8")
    else:
        text = args.formula
    return parse_formula_text(text)


def main() -> None:
    args = parse_args()
    try:
        formula = load_formula(args)
    except (ValueError, OSError) as exc:
        print(f"ERROR invalid formula: {exc}")
        raise SystemExit(2)
    _dbg(args, f"formula={render(formula)} compiled={args.compiled}")

    if _debug_enabled(args):
        set_evaluator_debug(lambda msg: _dbg(args, msg))
    try:
        conn = get_readonly_connection(args.db)
        try:
            app = TransitionSystemApplication(conn)
            if args.state is not None:
                checks = [
                    FormulaCheck(
                        state_id=args.state,
                        holds=app.check(formula, args.state, compiled=args.compiled),
                    )
                ]
            else:
                checks = app.check_states(
                    formula,
                    initial_only=args.initial_states,
                    compiled=args.compiled,
                )
        finally:
            conn.close()
    except StoreError as exc:
        print(f"ERROR {type(exc).__name__}: {exc}")
        raise SystemExit(2)
    finally:
        set_evaluator_debug(None)

    for check in checks:
        print(f"STATE={check.state_id} HOLDS={format_bool(check.holds)}")
    _dbg(args, f"checked={len(checks)} holding={sum(1 for c in checks if c.holds)}")


if __name__ == "__main__":
    main()

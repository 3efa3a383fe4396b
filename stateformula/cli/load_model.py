"""Load a transition system model file into a SQLite fact store.

Purpose:
  - Provision the schema and insert states, transitions, and facts.
Inputs:
  - CLI args for DB path and model JSON file.
Outputs:
  - Printed row counts to stdout; exit code 2 on constraint/store errors.
Example:
  - PYTHONPATH=. python3 stateformula/cli/load_model.py --db flip.db --model flip_bit.json
"""

from __future__ import annotations

import argparse

from stateformula.app_api.facade import TransitionSystemApplication
from stateformula.app_api.model_spec import load_model_spec
from stateformula.core.domain.errors import StoreError
from stateformula.infra.sqlite.db import get_connection
from stateformula.infra.sqlite.migrator import apply_migrations
from stateformula.cli._debug_utils import _dbg


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load a transition system model into SQLite")
    parser.add_argument("--db", required=True, help="Path to SQLite database")
    parser.add_argument("--model", required=True, help="Path to model JSON file")
    parser.add_argument("--debug", action="store_true")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    try:
        spec = load_model_spec(args.model)
    except ValueError as exc:
        print(f"ERROR invalid model: {exc}")
        raise SystemExit(2)
    _dbg(
        args,
        f"model={args.model} states={len(spec.states)} "
        f"transitions={len(spec.transitions)} predicates={len(spec.predicates)}",
    )

    conn = get_connection(args.db)
    try:
        apply_migrations(conn)
        conn.commit()
        app = TransitionSystemApplication(conn)
        try:
            app.load(spec)
        except StoreError as exc:
            print(f"ERROR {type(exc).__name__}: {exc}")
            raise SystemExit(2)

        state_count = len(app.store.list_states())
        transition_count = len(app.store.list_transitions())
        predicate_count = app.store.count_predicates()
        print(f"STATES={state_count} TRANSITIONS={transition_count} PREDICATES={predicate_count}")
    finally:
        conn.close()


if __name__ == "__main__":
    main()

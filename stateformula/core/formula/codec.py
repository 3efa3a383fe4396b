"""JSON codec for formula trees.

Shapes:
  - {"pred": name, "args": [a1, a2, a3]}  (args optional, padded with null)
  - {"not": F}
  - {"and": [F, ...]}
  - {"or": [F, ...]}
"""

from __future__ import annotations

import json
from typing import Any

from .nodes import And, Atomic, Formula, Not, Or

_MAX_ARGS = 3


def _atomic_from_json(payload: dict[str, Any]) -> Atomic:
    name = payload["pred"]
    if not isinstance(name, str):
        raise ValueError("Field 'pred' must be str")
    args = payload.get("args", [])
    if not isinstance(args, list):
        raise ValueError("Field 'args' must be a list")
    if len(args) > _MAX_ARGS:
        raise ValueError(f"Field 'args' takes at most {_MAX_ARGS} values, got {len(args)}")
    for arg in args:
        if arg is not None and not isinstance(arg, str):
            raise ValueError("Field 'args' items must be str or null")
    padded = list(args) + [None] * (_MAX_ARGS - len(args))
    return Atomic(name, padded[0], padded[1], padded[2])


def formula_from_json(payload: Any) -> Formula:
    if not isinstance(payload, dict) or len(payload) == 0:
        raise ValueError("Formula must be a non-empty JSON object")

    if "pred" in payload:
        extra = set(payload) - {"pred", "args"}
        if extra:
            raise ValueError(f"Unexpected keys in predicate formula: {sorted(extra)}")
        return _atomic_from_json(payload)

    if len(payload) != 1:
        raise ValueError(f"Formula object must have exactly one operator key, got {sorted(payload)}")

    (key, value), = payload.items()
    if key == "not":
        return Not(formula_from_json(value))
    if key in ("and", "or"):
        if not isinstance(value, list):
            raise ValueError(f"Field '{key}' must be a list")
        operands = [formula_from_json(item) for item in value]
        return And(*operands) if key == "and" else Or(*operands)
    raise ValueError(f"Unknown formula operator: {key}")


def formula_to_json(formula: Formula) -> dict[str, Any]:
    if isinstance(formula, Atomic):
        return {"pred": formula.name, "args": list(formula.attrs)}
    if isinstance(formula, Not):
        return {"not": formula_to_json(formula.operand)}
    if isinstance(formula, And):
        return {"and": [formula_to_json(op) for op in formula.operands]}
    if isinstance(formula, Or):
        return {"or": [formula_to_json(op) for op in formula.operands]}
    raise ValueError(f"Unsupported formula node: {type(formula).__name__}")


def parse_formula_text(text: str) -> Formula:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Formula is not valid JSON: {exc}") from exc
    return formula_from_json(payload)

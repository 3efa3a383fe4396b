"""Compile a formula tree into one parameterized SQLite query.

Responsibilities:
  - Turn each Atomic into an EXISTS subquery over predicate/state.
  - Map Not/And/Or onto SQL NOT/AND/OR.
Must not:
  - Place any value (names, attributes, state id) in the SQL text; every
    value goes to params in placeholder order.

Attribute slots use SQLite's null-safe IS comparison, so an absent (NULL)
attribute matches only NULL and a concrete value matches only itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from stateformula.core.formula.nodes import And, Atomic, Formula, Not, Or

_ATOMIC_SQL = (
    "EXISTS ("
    "SELECT 1 FROM predicate p JOIN state s ON s.state_id = p.state_id "
    "WHERE s.state_id = ? AND p.name = ? "
    "AND p.attr1 IS ? AND p.attr2 IS ? AND p.attr3 IS ?"
    ")"
)


# Upper bound on the expression-tree height of one atomic EXISTS subquery
# (five chained comparisons plus the EXISTS node).
_ATOMIC_DEPTH = 8


@dataclass(frozen=True)
class CompiledFormula:
    sql: str
    params: tuple[object, ...]
    depth: int


def _join_balanced(parts: list[tuple[str, int]], op: str) -> tuple[str, int]:
    # Halves recursively; tree height stays near log2(len(parts)).
    if len(parts) == 1:
        return parts[0]
    mid = len(parts) // 2
    left_sql, left_depth = _join_balanced(parts[:mid], op)
    right_sql, right_depth = _join_balanced(parts[mid:], op)
    return f"({left_sql} {op} {right_sql})", max(left_depth, right_depth) + 1


def _compile_expr(
    formula: Formula, state_id: int, params: list[Optional[object]]
) -> tuple[str, int]:
    if isinstance(formula, Atomic):
        params.extend((state_id, formula.name, formula.attr1, formula.attr2, formula.attr3))
        return _ATOMIC_SQL, _ATOMIC_DEPTH
    if isinstance(formula, Not):
        sql, depth = _compile_expr(formula.operand, state_id, params)
        return f"(NOT {sql})", depth + 1
    if isinstance(formula, And):
        if not formula.operands:
            return "1", 1
        return _join_balanced([_compile_expr(op, state_id, params) for op in formula.operands], "AND")
    if isinstance(formula, Or):
        if not formula.operands:
            return "0", 1
        return _join_balanced([_compile_expr(op, state_id, params) for op in formula.operands], "OR")
    raise ValueError(f"Unsupported formula node: {type(formula).__name__}")


def compile_formula(formula: Formula, state_id: int) -> CompiledFormula:
    params: list[Optional[object]] = []
    expr, depth = _compile_expr(formula, state_id, params)
    return CompiledFormula(sql=f"SELECT {expr}", params=tuple(params), depth=depth)

"""Formula expression tree over state facts.

Responsibilities:
  - Represent atomic fact tests, negation, conjunction, and disjunction as
    immutable values, independent of any state.
  - Provide a readable rendering for diagnostics.

Invariants:
  - Atomic attributes are matched exactly; None means "absent", never "any".
  - Values are carried as data and never spliced into query text.
  - And() is true and Or() is false when given no operands.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..domain.validation import require_attr, require_text


@dataclass(frozen=True)
class Atomic:
    name: str
    attr1: Optional[str] = None
    attr2: Optional[str] = None
    attr3: Optional[str] = None

    def __post_init__(self) -> None:
        require_text(self.name, "name")
        require_attr(self.attr1, "attr1")
        require_attr(self.attr2, "attr2")
        require_attr(self.attr3, "attr3")

    @property
    def attrs(self) -> tuple[Optional[str], Optional[str], Optional[str]]:
        return (self.attr1, self.attr2, self.attr3)


@dataclass(frozen=True)
class Not:
    operand: "Formula"

    def __post_init__(self) -> None:
        _check_operand(self.operand, "Not")


@dataclass(frozen=True, init=False)
class And:
    operands: tuple["Formula", ...]

    def __init__(self, *operands: "Formula") -> None:
        for operand in operands:
            _check_operand(operand, "And")
        object.__setattr__(self, "operands", tuple(operands))


@dataclass(frozen=True, init=False)
class Or:
    operands: tuple["Formula", ...]

    def __init__(self, *operands: "Formula") -> None:
        for operand in operands:
            _check_operand(operand, "Or")
        object.__setattr__(self, "operands", tuple(operands))


Formula = Union[Atomic, Not, And, Or]

FORMULA_TYPES = (Atomic, Not, And, Or)


def _check_operand(value: object, owner: str) -> None:
    if not isinstance(value, FORMULA_TYPES):
        raise ValueError(f"{owner} operand must be a formula, got {type(value).__name__}")


def _render_attr(value: Optional[str]) -> str:
    if value is None:
        return "-"
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render(formula: Formula) -> str:
    if isinstance(formula, Atomic):
        args = ", ".join(_render_attr(a) for a in formula.attrs)
        return f"{formula.name}({args})"
    if isinstance(formula, Not):
        return f"NOT {render(formula.operand)}"
    if isinstance(formula, And):
        if not formula.operands:
            return "TRUE"
        return "(" + " AND ".join(render(op) for op in formula.operands) + ")"
    if isinstance(formula, Or):
        if not formula.operands:
            return "FALSE"
        return "(" + " OR ".join(render(op) for op in formula.operands) + ")"
    raise ValueError(f"Unsupported formula node: {type(formula).__name__}")

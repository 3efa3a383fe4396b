"""Domain models for transition system states, transitions, and facts.

Responsibilities:
  - Define immutable data carriers for the persisted entities.
  - Validate field types at construction.

Invariants:
  - An attribute of None means "absent" and is distinct from every string,
    including the empty string.
  - Models carry no storage behavior.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .validation import require_attr, require_id, require_text


@dataclass(frozen=True)
class State:
    state_id: int
    is_initial: bool = False

    def __post_init__(self) -> None:
        require_id(self.state_id, "state_id")
        if not isinstance(self.is_initial, bool):
            raise ValueError("Field 'is_initial' must be bool")


@dataclass(frozen=True)
class Transition:
    from_state: int
    to_state: int

    def __post_init__(self) -> None:
        require_id(self.from_state, "from_state")
        require_id(self.to_state, "to_state")


@dataclass(frozen=True)
class Predicate:
    """Ground fact name(attr1, attr2, attr3) holding in one state.

    fact_id is the sole identity; two facts with the same content are
    equivalent for queries but both may be stored.
    """

    fact_id: int
    state_id: int
    name: str
    attr1: Optional[str] = None
    attr2: Optional[str] = None
    attr3: Optional[str] = None

    def __post_init__(self) -> None:
        require_id(self.fact_id, "fact_id")
        require_id(self.state_id, "state_id")
        require_text(self.name, "name")
        require_attr(self.attr1, "attr1")
        require_attr(self.attr2, "attr2")
        require_attr(self.attr3, "attr3")

    @property
    def attrs(self) -> tuple[Optional[str], Optional[str], Optional[str]]:
        return (self.attr1, self.attr2, self.attr3)

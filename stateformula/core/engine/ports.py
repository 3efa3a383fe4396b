from __future__ import annotations

from typing import Optional, Protocol


class PredicateStore(Protocol):
    def exists_predicate(
        self,
        state_id: int,
        name: str,
        attr1: Optional[str],
        attr2: Optional[str],
        attr3: Optional[str],
    ) -> bool:
        ...

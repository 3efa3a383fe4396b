"""Error taxonomy for fact storage and formula evaluation.

Responsibilities:
  - Separate constraint failures on writes from an unreachable store.

Invariants:
  - "No matching fact" is never an error; it is a False result.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base class for fact store failures."""


class ConstraintViolation(StoreError):
    """Duplicate key or dangling state reference on insert."""


class StoreUnavailable(StoreError):
    """The store cannot be queried (closed connection, missing schema, I/O failure)."""

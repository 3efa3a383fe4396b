"""Field validators shared by domain models and formula nodes.

Invariants:
  - Text must be encodable as UTF-8; nothing else can be stored or matched.
  - None is the only non-text attribute value accepted ("absent").
"""

from __future__ import annotations


def require_id(value: object, field: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"Field '{field}' must be int")
    if value < 0:
        raise ValueError(f"Field '{field}' must be >= 0")


def require_text(value: object, field: str) -> None:
    if not isinstance(value, str):
        raise ValueError(f"Field '{field}' must be str")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"Field '{field}' is not valid UTF-8 text: {exc}") from exc


def require_attr(value: object, field: str) -> None:
    if value is None:
        return
    if not isinstance(value, str):
        raise ValueError(f"Field '{field}' must be str or None")
    require_text(value, field)

"""SQLite connection helpers for read-only formula checks."""

from __future__ import annotations

import sqlite3

from stateformula.core.domain.errors import StoreUnavailable


def get_readonly_connection(db_path: str) -> sqlite3.Connection:
    try:
        conn = sqlite3.connect(f"file:{db_path}?mode=ro", uri=True)
        conn.execute("PRAGMA query_only = ON")
    except sqlite3.Error as exc:
        raise StoreUnavailable(f"Cannot open fact store {db_path}: {exc}") from exc
    conn.row_factory = sqlite3.Row
    return conn

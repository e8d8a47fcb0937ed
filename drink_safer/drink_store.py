"""SQLite-backed storage for the drink log."""

from __future__ import annotations

import sqlite3
from datetime import datetime

from drink_safer.drinks import DrinkEntry


def init_db(db_path: str) -> None:
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS drinks (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                id TEXT NOT NULL UNIQUE,
                created_at TEXT NOT NULL,
                drink_type TEXT NOT NULL,
                volume REAL NOT NULL,
                alcohol_content REAL NOT NULL
            )
            """
        )
        conn.commit()


def insert_drink(db_path: str, entry: DrinkEntry) -> None:
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            INSERT INTO drinks (id, created_at, drink_type, volume, alcohol_content)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                entry.id,
                entry.timestamp.isoformat(),
                entry.drink_type,
                float(entry.volume),
                float(entry.alcohol_content),
            ),
        )
        conn.commit()


def delete_drinks(db_path: str, drink_ids: list[str]) -> int:
    if not drink_ids:
        return 0
    with sqlite3.connect(db_path) as conn:
        cur = conn.executemany("DELETE FROM drinks WHERE id = ?", [(i,) for i in drink_ids])
        conn.commit()
        return cur.rowcount


def delete_all(db_path: str) -> int:
    with sqlite3.connect(db_path) as conn:
        cur = conn.execute("DELETE FROM drinks")
        conn.commit()
        return cur.rowcount


def list_drinks(db_path: str) -> list[DrinkEntry]:
    """All entries in insertion order."""
    with sqlite3.connect(db_path) as conn:
        conn.row_factory = sqlite3.Row
        rows = conn.execute(
            """
            SELECT id, created_at, drink_type, volume, alcohol_content
            FROM drinks
            ORDER BY seq ASC
            """
        ).fetchall()

    return [
        DrinkEntry(
            id=row["id"],
            timestamp=datetime.fromisoformat(row["created_at"]),
            drink_type=row["drink_type"],
            volume=row["volume"],
            alcohol_content=row["alcohol_content"],
        )
        for row in rows
    ]

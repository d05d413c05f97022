"""SQLite storage for the preference snapshot."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

import aiosqlite

SCHEMA = """
CREATE TABLE IF NOT EXISTS preference_snapshot (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    payload TEXT NOT NULL,
    written_at TEXT NOT NULL
)
"""


@asynccontextmanager
async def get_db(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Async context manager for DB connections with Row factory.

    Creates the parent directory and the schema if needed.

    Args:
        db_path: Path to the database file.

    Yields:
        aiosqlite.Connection configured with Row factory for dict-like access.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    async with aiosqlite.connect(db_path) as db:
        db.row_factory = aiosqlite.Row
        await db.execute(SCHEMA)
        yield db


class SnapshotRepository:
    """Single-row durable record holding the serialized preference store."""

    def __init__(self, db_path: Path):
        self.db_path = db_path

    async def read(self) -> str | None:
        """Return the stored payload, or None if nothing was written yet."""
        async with get_db(self.db_path) as db:
            cursor = await db.execute("SELECT payload FROM preference_snapshot WHERE id = 1")
            row = await cursor.fetchone()
        return row["payload"] if row else None

    async def write(self, payload: str) -> None:
        """Replace the stored payload."""
        async with get_db(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO preference_snapshot (id, payload, written_at)
                VALUES (1, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    payload = excluded.payload,
                    written_at = excluded.written_at
                """,
                (payload, datetime.now(UTC).isoformat()),
            )
            await db.commit()

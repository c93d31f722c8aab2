# ABOUTME: SQLite storage for the append-only log of every slug a record has held.
# ABOUTME: Answers "is this slug used by someone else" and "who last held this slug".

import re
import sqlite3
from dataclasses import dataclass, field
from datetime import UTC, datetime

_TABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Schema for a history table
_HISTORY_SCHEMA = """
CREATE TABLE IF NOT EXISTS {table} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    sluggable_type VARCHAR NOT NULL,
    sluggable_id VARCHAR NOT NULL,
    slug VARCHAR NOT NULL,
    created_at VARCHAR NOT NULL
)
"""

_HISTORY_INDEX = "CREATE INDEX IF NOT EXISTS idx_{table}_slug ON {table}(slug, sluggable_type)"


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class HistoryEntry:
    """One slug held by one record.

    Attributes:
        owner_type: Module-qualified record type name.
        owner_id: Primary key of the owning record, as text.
        slug: The slug that was assigned.
        created_at: When the slug was assigned (UTC).
    """

    owner_type: str
    owner_id: str
    slug: str
    created_at: datetime = field(default_factory=_utcnow)


class SqliteSlugHistory:
    """Slug history table on an existing SQLite connection.

    Owner ids are stored as text so integer and UUID keys share one table.
    Writes do not commit; they join the caller's transaction.
    """

    def __init__(self, conn: sqlite3.Connection, table: str) -> None:
        if not _TABLE_NAME.match(table):
            raise ValueError(f"History table must be a plain identifier, got {table!r}")
        self.conn = conn
        self.table = table

    def ensure_schema(self) -> None:
        """Create the history table and its lookup index if they don't exist."""
        self.conn.execute(_HISTORY_SCHEMA.format(table=self.table))
        self.conn.execute(_HISTORY_INDEX.format(table=self.table))

    def exists(self) -> bool:
        """Check if the history table is present in the database."""
        result = self.conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
            [self.table],
        ).fetchone()
        return result is not None

    def append(self, entry: HistoryEntry) -> None:
        """Insert a history entry.

        Args:
            entry: The entry to record.
        """
        self.conn.execute(
            f"INSERT INTO {self.table} (sluggable_type, sluggable_id, slug, created_at) VALUES (?, ?, ?, ?)",  # noqa: S608
            [entry.owner_type, entry.owner_id, entry.slug, entry.created_at.isoformat(timespec="microseconds")],
        )

    def is_taken(self, slug: str, owner_type: str, excluding_owner_id: object = None) -> bool:
        """Check if any other record of a type has ever held a slug.

        Args:
            slug: Slug to check.
            owner_type: Record type name the slug belongs to.
            excluding_owner_id: Owner whose own entries are ignored, None to ignore nobody.

        Returns:
            True if another owner has held the slug.
        """
        query = f"SELECT 1 FROM {self.table} WHERE slug = ? AND sluggable_type = ?"  # noqa: S608
        params: list[str] = [slug, owner_type]
        if excluding_owner_id is not None:
            query += " AND sluggable_id != ?"
            params.append(str(excluding_owner_id))

        result = self.conn.execute(query + " LIMIT 1", params).fetchone()
        return result is not None

    def latest_owner_id(self, slug: str, owner_type: str) -> str | None:
        """Get the owner of the most recent entry for a slug.

        Args:
            slug: Slug to look up.
            owner_type: Record type name the slug belongs to.

        Returns:
            The owner id as text, or None if the slug was never recorded.
        """
        result = self.conn.execute(
            f"""
            SELECT sluggable_id FROM {self.table}
            WHERE slug = ? AND sluggable_type = ?
            ORDER BY created_at DESC, id DESC
            LIMIT 1
            """,  # noqa: S608
            [slug, owner_type],
        ).fetchone()
        return result[0] if result else None

    def slugs_for(self, owner_type: str, owner_id: object) -> list[str]:
        """Get every slug a record has held, oldest first.

        Args:
            owner_type: Record type name.
            owner_id: Primary key of the record.

        Returns:
            List of slugs ordered by creation time.
        """
        result = self.conn.execute(
            f"""
            SELECT slug FROM {self.table}
            WHERE sluggable_type = ? AND sluggable_id = ?
            ORDER BY created_at, id
            """,  # noqa: S608
            [owner_type, str(owner_id)],
        ).fetchall()
        return [row[0] for row in result]

    def entries_for(self, owner_type: str, owner_id: object) -> list[HistoryEntry]:
        """Get every history entry of a record, oldest first."""
        result = self.conn.execute(
            f"""
            SELECT sluggable_type, sluggable_id, slug, created_at FROM {self.table}
            WHERE sluggable_type = ? AND sluggable_id = ?
            ORDER BY created_at, id
            """,  # noqa: S608
            [owner_type, str(owner_id)],
        ).fetchall()
        return [
            HistoryEntry(owner_type=row[0], owner_id=row[1], slug=row[2], created_at=datetime.fromisoformat(row[3]))
            for row in result
        ]

    def count(self) -> int:
        """Get the number of history entries."""
        result = self.conn.execute(f"SELECT COUNT(*) FROM {self.table}").fetchone()  # noqa: S608
        return result[0] if result else 0

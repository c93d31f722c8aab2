# ABOUTME: SQLite record store that assigns slugs as part of every save.
# ABOUTME: Groups the row write and the slug history append in one transaction, and resolves identifiers.

import logging
import re
import sqlite3
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sluggable.records import Record
from sluggable.slugging.assigner import assign_slug
from sluggable.slugging.options import SluggingOptions, get_options
from sluggable.slugging.resolver import INTEGER_KEY, UUID_KEY, resolve, resolve_strict
from sluggable.slugging.slug_config import SlugConfig, SlugConfigRegistry, registry
from sluggable.slugging.uniqueness import UniquenessChecker
from sluggable.store.history import HistoryEntry, SqliteSlugHistory

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_PRIMARY_KEY_COLUMNS = {
    INTEGER_KEY: "id INTEGER PRIMARY KEY AUTOINCREMENT",
    UUID_KEY: "id VARCHAR PRIMARY KEY",
}


def _check_identifier(name: str, what: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"{what} must be a plain identifier, got {name!r}")
    return name


class SqliteRecordStore:
    """Records of one type in one SQLite table.

    The slug column is NOT NULL UNIQUE, so a concurrent writer that wins the
    race for a slug makes the other writer's commit fail with
    sqlite3.IntegrityError. That error is passed through unchanged.

    Args:
        conn: Open SQLite connection.
        record_type: Record subclass stored in the table.
        primary_key: "integer" for autoincrement ids, "uuid" for generated UUID4 text ids.
        registry: Where the record type's slug config is declared. Defaults to the global registry.
        options: Fixed slug options. Defaults to the process-wide options current at each save.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        record_type: type[Record],
        primary_key: str = INTEGER_KEY,
        registry: SlugConfigRegistry | None = None,
        options: SluggingOptions | None = None,
    ) -> None:
        if primary_key not in _PRIMARY_KEY_COLUMNS:
            raise ValueError(f"Unsupported primary key kind: {primary_key!r}")

        self.conn = conn
        self.record_type = record_type
        self.primary_key = primary_key
        self.table = _check_identifier(record_type.__table__, "Table name")
        self.columns = tuple(_check_identifier(c, "Column name") for c in record_type.__columns__)
        self._registry = registry
        self._options = options
        self._depth = 0

    @property
    def config(self) -> SlugConfig | None:
        """Slug config currently declared for the record type."""
        source = registry if self._registry is None else self._registry
        return source.lookup(self.record_type)

    @property
    def options(self) -> SluggingOptions:
        """Slug options for the next save."""
        return self._options if self._options is not None else get_options()

    @property
    def history(self) -> SqliteSlugHistory | None:
        """Slug history of the record type, None if its config keeps none.

        Accessing it never creates the history table.
        """
        config = self.config
        if config is None or config.history is None:
            return None
        return SqliteSlugHistory(self.conn, config.history)

    def _writable_history(self) -> SqliteSlugHistory | None:
        history = self.history
        if history is not None:
            history.ensure_schema()
        return history

    def _readable_history(self) -> SqliteSlugHistory | None:
        history = self.history
        if history is None or history.exists():
            return history
        return None

    def ensure_schema(self) -> None:
        """Create the records table (and the history table, if configured) if they don't exist."""
        column_defs = ",\n    ".join(
            [
                _PRIMARY_KEY_COLUMNS[self.primary_key],
                *(f"{c} VARCHAR" for c in self.columns),
                "slug VARCHAR NOT NULL UNIQUE",
            ]
        )
        self.conn.execute(f"CREATE TABLE IF NOT EXISTS {self.table} (\n    {column_defs}\n)")

        config = self.config
        if config is not None and config.history is not None:
            SqliteSlugHistory(self.conn, config.history).ensure_schema()
        self.conn.commit()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Group writes into one transaction.

        Commits when the outermost block exits normally and rolls back when it
        raises. Nested blocks join the outer transaction.
        """
        outermost = self._depth == 0
        if outermost and not self.conn.in_transaction:
            self.conn.execute("BEGIN")
        self._depth += 1
        try:
            yield self.conn
        except BaseException:
            if outermost:
                self.conn.rollback()
            raise
        else:
            if outermost:
                self.conn.commit()
        finally:
            self._depth -= 1

    def _select(self) -> str:
        return ", ".join(["id", *self.columns, "slug"])

    def _load(self, row: tuple[Any, ...] | None) -> Record | None:
        if row is None:
            return None
        values = dict(zip(["id", *self.columns, "slug"], row, strict=True))
        record = self.record_type(**values)
        record.mark_persisted()
        return record

    def get(self, pk: Any) -> Record | None:
        """Get a record by primary key.

        Args:
            pk: Primary key value.

        Returns:
            The record, or None if not found.
        """
        result = self.conn.execute(
            f"SELECT {self._select()} FROM {self.table} WHERE id = ?",  # noqa: S608
            [pk],
        ).fetchone()
        return self._load(result)

    def find_by_slug(self, slug: str) -> Record | None:
        """Get a record by its current slug.

        Args:
            slug: Slug to look up.

        Returns:
            The record, or None if no record holds the slug.
        """
        result = self.conn.execute(
            f"SELECT {self._select()} FROM {self.table} WHERE slug = ?",  # noqa: S608
            [slug],
        ).fetchone()
        return self._load(result)

    def slug_taken(self, slug: str, excluding_pk: Any = None) -> bool:
        """Check if a record other than `excluding_pk` currently holds a slug.

        Args:
            slug: Slug to check.
            excluding_pk: Primary key of a record to ignore, None to ignore nobody.

        Returns:
            True if the slug is held by another record.
        """
        query = f"SELECT 1 FROM {self.table} WHERE slug = ?"  # noqa: S608
        params: list[Any] = [slug]
        if excluding_pk is not None:
            query += " AND id != ?"
            params.append(excluding_pk)

        result = self.conn.execute(query + " LIMIT 1", params).fetchone()
        return result is not None

    def count(self) -> int:
        """Get the number of records in the table."""
        result = self.conn.execute(f"SELECT COUNT(*) FROM {self.table}").fetchone()  # noqa: S608
        return result[0] if result else 0

    def _insert(self, record: Record) -> None:
        row = record.to_row()
        if self.primary_key == UUID_KEY and record.id is None:
            record.id = str(uuid.uuid4())
        if record.id is not None:
            row = {"id": record.id, **row}

        names = ", ".join(row)
        placeholders = ", ".join("?" for _ in row)
        cursor = self.conn.execute(
            f"INSERT INTO {self.table} ({names}) VALUES ({placeholders})",  # noqa: S608
            list(row.values()),
        )
        if record.id is None:
            record.id = cursor.lastrowid

    def _update(self, record: Record) -> None:
        row = record.to_row()
        # Column names come from the validated record type, not user input
        set_clause = ", ".join(f"{column} = ?" for column in row)
        self.conn.execute(
            f"UPDATE {self.table} SET {set_clause} WHERE id = ?",  # noqa: S608
            [*row.values(), record.id],
        )

    def save(self, record: Record) -> Record:
        """Insert or update a record, assigning its slug first.

        The slug computation, the row write and the history entry for a new
        slug happen in one transaction. If any of them fails nothing is
        written and the record's id and slug are restored.

        Args:
            record: Record to save.

        Returns:
            The same record, now persisted.

        Raises:
            InvalidSourceError: If a slug source returns a value with no text form.
            sqlite3.IntegrityError: If another writer committed the same slug first.
        """
        config = self.config
        options = self.options
        is_new = record.is_new
        original_id = record.id
        previous_slug = record.slug

        try:
            with self.transaction():
                history = self._writable_history()
                new_slug = None
                if config is not None:
                    checker = UniquenessChecker(self, history, self.record_type.type_name(), options)
                    new_slug = assign_slug(record, config, checker, options, is_new)

                if is_new:
                    self._insert(record)
                else:
                    self._update(record)

                if history is not None and new_slug is not None and (is_new or new_slug != previous_slug):
                    history.append(HistoryEntry(self.record_type.type_name(), str(record.id), new_slug))
        except BaseException:
            record.id = original_id
            record.slug = previous_slug
            raise

        record.mark_persisted()
        return record

    def create(self, **values: Any) -> Record:
        """Build and save a new record."""
        return self.save(self.record_type(**values))

    def update(self, record: Record, **values: Any) -> Record:
        """Assign column values and save the record."""
        record.set(**values)
        return self.save(record)

    def delete(self, record: Record) -> bool:
        """Delete a record. Its slug history is kept.

        Returns:
            True if deleted, False if not found.
        """
        with self.transaction():
            cursor = self.conn.execute(f"DELETE FROM {self.table} WHERE id = ?", [record.id])  # noqa: S608
        return cursor.rowcount > 0

    def from_slug(self, identifier: object) -> Record | None:
        """Find a record by primary key, slug or past slug; None if nothing matches."""
        return resolve(identifier, self, self._readable_history())

    def from_slug_strict(self, identifier: object) -> Record:
        """Find a record by primary key, slug or past slug.

        Raises:
            NotFoundError: If nothing matches.
        """
        return resolve_strict(identifier, self, self._readable_history())


def record_type_for_table(
    conn: sqlite3.Connection,
    table: str,
    owner_type: str | None = None,
) -> tuple[type[Record], str]:
    """Build a Record subclass matching an existing table.

    Args:
        conn: Open SQLite connection.
        table: Table with `id` and `slug` columns.
        owner_type: Type name the table's records use in slug history. Defaults to the table name.

    Returns:
        Tuple of (record type, primary key kind).

    Raises:
        ValueError: If the table doesn't exist or lacks `id`/`slug` columns.
    """
    _check_identifier(table, "Table name")
    columns = conn.execute(f"PRAGMA table_info('{table}')").fetchall()
    if not columns:
        raise ValueError(f"Table not found: {table}")

    col_types = {row[1]: (row[2] or "").upper() for row in columns}
    if "id" not in col_types or "slug" not in col_types:
        raise ValueError(f"Table {table} needs 'id' and 'slug' columns")

    primary_key = INTEGER_KEY if col_types["id"] == "INTEGER" else UUID_KEY
    name = owner_type or table
    record_type = type(
        f"{table.title().replace('_', '')}Record",
        (Record,),
        {
            "__table__": table,
            "__columns__": tuple(c for c in col_types if c not in ("id", "slug")),
            "type_name": classmethod(lambda cls: name),
        },
    )
    return record_type, primary_key

"""ABOUTME: SQLite storage for sluggable records and their slug history.
ABOUTME: The record store runs slug assignment inside each save."""

from sluggable.store.history import HistoryEntry, SqliteSlugHistory
from sluggable.store.sqlite_store import SqliteRecordStore, record_type_for_table

__all__ = [
    "HistoryEntry",
    "SqliteRecordStore",
    "SqliteSlugHistory",
    "record_type_for_table",
]

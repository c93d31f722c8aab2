"""Contains configurations for the test run."""

import re
import sqlite3
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from sluggable.records import Record
from sluggable.slugging.options import reset_options
from sluggable.slugging.slug_config import SlugConfigRegistry
from sluggable.store.sqlite_store import SqliteRecordStore

UUID_PATTERN = r"[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}"
UUID_SLUG = re.compile(rf"^{UUID_PATTERN}$")


def suffixed(base: str) -> re.Pattern[str]:
    """Pattern for `base` followed by a random disambiguation suffix."""
    return re.compile(rf"^{re.escape(base)}-{UUID_PATTERN}$")


class Widget(Record):
    """Record type used throughout the store tests."""

    __table__ = "widgets"
    __columns__ = ("name", "other_text", "more_text")

    def method_returning_nil(self) -> None:
        return None

    def method_returning_empty_string(self) -> str:
        return ""

    def method_returning_false(self) -> bool:
        return False

    def method_returning_object(self) -> object:
        return object()


class UuidWidget(Widget):
    """Widget stored in a table keyed by UUIDs."""

    __table__ = "uuid_widgets"


StoreFactory = Callable[..., SqliteRecordStore]


@pytest.fixture(autouse=True)
def _reset_slug_options() -> Iterator[None]:
    """Each test starts and ends with the default process-wide slug options."""
    reset_options()
    yield
    reset_options()


@pytest.fixture
def conn(tmp_path: Path) -> Iterator[sqlite3.Connection]:
    """Open a connection to a temporary database."""
    connection = sqlite3.connect(str(tmp_path / "records.sqlite"))
    yield connection
    connection.close()


@pytest.fixture
def configs() -> SlugConfigRegistry:
    """Fresh registry so declarations don't leak between tests."""
    return SlugConfigRegistry()


@pytest.fixture
def make_store(conn: sqlite3.Connection, configs: SlugConfigRegistry) -> StoreFactory:
    """Declare a slug config and return a store with its schema in place."""

    def _make(record_type: type[Record] = Widget, primary_key: str = "integer", **config: Any) -> SqliteRecordStore:
        configs.declare(record_type, **config)
        store = SqliteRecordStore(conn, record_type, primary_key=primary_key, registry=configs)
        store.ensure_schema()
        return store

    return _make

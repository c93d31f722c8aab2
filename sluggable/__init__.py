"""ABOUTME: Unique, URL-safe slugs for stored records.
ABOUTME: Assigns slugs on save and resolves slugs, ids or past slugs back to records."""

__version__ = "0.1.0"

from sluggable.errors import InvalidSourceError, NotFoundError, SlugError  # noqa: E402
from sluggable.records import Record  # noqa: E402
from sluggable.slugging.slug_config import SlugConfig, SlugConfigRegistry, registry, sluggable  # noqa: E402
from sluggable.store.sqlite_store import SqliteRecordStore  # noqa: E402

__all__ = [
    "InvalidSourceError",
    "NotFoundError",
    "Record",
    "SlugConfig",
    "SlugConfigRegistry",
    "SlugError",
    "SqliteRecordStore",
    "__version__",
    "registry",
    "sluggable",
]

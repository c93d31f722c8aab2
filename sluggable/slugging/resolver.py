"""ABOUTME: Finds the record an external identifier refers to.
ABOUTME: Tries the primary key when the identifier looks like one, then the slug, then the slug history."""

import logging
import uuid
from typing import Any, Protocol

from sluggable.errors import NotFoundError

logger = logging.getLogger(__name__)

INTEGER_KEY = "integer"
UUID_KEY = "uuid"

_MIN_INTEGER_KEY = -(2**63)
_MAX_INTEGER_KEY = 2**63 - 1


class RecordLookup(Protocol):
    """Store side of identifier resolution."""

    primary_key: str
    record_type: type

    def get(self, pk: Any) -> Any | None: ...

    def find_by_slug(self, slug: str) -> Any | None: ...


class OwnerHistory(Protocol):
    """History side of identifier resolution."""

    def latest_owner_id(self, slug: str, owner_type: str) -> str | None: ...


def _as_integer_key(identifier: object) -> int | None:
    if isinstance(identifier, bool):
        return None
    if isinstance(identifier, int):
        key = identifier
    elif isinstance(identifier, str) and identifier.isascii() and identifier.isdecimal():
        key = int(identifier)
    else:
        return None
    # SQLite integers are signed 64-bit
    if not _MIN_INTEGER_KEY <= key <= _MAX_INTEGER_KEY:
        return None
    return key


def _as_uuid_key(identifier: object) -> str | None:
    if isinstance(identifier, uuid.UUID):
        return str(identifier)
    if isinstance(identifier, str):
        try:
            return str(uuid.UUID(identifier))
        except ValueError:
            return None
    return None


def primary_key_candidate(identifier: object, primary_key: str) -> Any | None:
    """Return the primary key value an identifier stands for, if it looks like one.

    Args:
        identifier: Caller-supplied identifier.
        primary_key: Primary key kind of the store, "integer" or "uuid".

    Returns:
        The key to look up, or None if the identifier can only be a slug.

    Examples:
        >>> primary_key_candidate("345", "integer")
        345
        >>> primary_key_candidate("345 tra la la", "integer") is None
        True
    """
    if primary_key == INTEGER_KEY:
        return _as_integer_key(identifier)
    if primary_key == UUID_KEY:
        return _as_uuid_key(identifier)
    raise ValueError(f"Unsupported primary key kind: {primary_key!r}")


def resolve(identifier: object, store: RecordLookup, history: OwnerHistory | None = None) -> Any | None:
    """Find a record by primary key, slug or past slug.

    Args:
        identifier: Primary key, slug, or a slug the record held before.
        store: Records to search.
        history: Slug history of the record type, None if it keeps none.

    Returns:
        The matching record, or None if nothing matches.
    """
    pk = primary_key_candidate(identifier, store.primary_key)
    if pk is not None:
        record = store.get(pk)
        if record is not None:
            return record

    slug = str(identifier)
    record = store.find_by_slug(slug)
    if record is not None:
        return record

    if history is None:
        return None

    owner_id = history.latest_owner_id(slug, store.record_type.type_name())
    if owner_id is None:
        return None

    logger.debug("Resolved stale slug %r through history to owner %s", slug, owner_id)
    owner_pk = int(owner_id) if store.primary_key == INTEGER_KEY else owner_id
    return store.get(owner_pk)


def resolve_strict(identifier: object, store: RecordLookup, history: OwnerHistory | None = None) -> Any:
    """Like `resolve`, but raises when nothing matches.

    Raises:
        NotFoundError: If no record matches by primary key, slug or history.
    """
    record = resolve(identifier, store, history)
    if record is None:
        raise NotFoundError(store.record_type.__name__, identifier)
    return record

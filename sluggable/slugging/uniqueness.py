"""ABOUTME: Decides whether a slug candidate may be assigned to a record.
ABOUTME: Checks reserved words, live records and, when configured, the slug history."""

import logging
from typing import Any, Protocol

from sluggable.slugging.options import SluggingOptions

logger = logging.getLogger(__name__)


class LiveSlugs(Protocol):
    """Store side of the uniqueness check."""

    def slug_taken(self, slug: str, excluding_pk: Any = None) -> bool: ...


class PastSlugs(Protocol):
    """History side of the uniqueness check."""

    def is_taken(self, slug: str, owner_type: str, excluding_owner_id: object = None) -> bool: ...


class UniquenessChecker:
    """Availability of slug candidates for records of one type.

    A record's own current and past slugs never count against it, so
    regenerating a slug may land on the value it already holds.
    """

    def __init__(
        self,
        live: LiveSlugs,
        history: PastSlugs | None,
        owner_type: str,
        options: SluggingOptions,
    ) -> None:
        self.live = live
        self.history = history
        self.owner_type = owner_type
        self.options = options

    def is_available(self, candidate: str, excluding_owner: Any = None) -> bool:
        """Check whether a candidate slug is free for a record.

        Args:
            candidate: Slug to check.
            excluding_owner: Primary key of the record the slug is for, None for unsaved records.

        Returns:
            True if the candidate can be assigned verbatim.
        """
        if self.options.is_reserved(candidate):
            logger.debug("Slug %r is reserved", candidate)
            return False

        if self.live.slug_taken(candidate, excluding_owner):
            logger.debug("Slug %r is held by another %s", candidate, self.owner_type)
            return False

        if self.history is not None and self.history.is_taken(candidate, self.owner_type, excluding_owner):
            logger.debug("Slug %r was held by another %s before", candidate, self.owner_type)
            return False

        return True

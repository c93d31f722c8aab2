"""ABOUTME: Computes and assigns a record's slug when it is saved.
ABOUTME: Runs source candidates through slugify, truncation and the uniqueness check, with a random fallback."""

import logging
from typing import Any

from sluggable.slugging.disambiguate import disambiguate, random_identifier
from sluggable.slugging.options import SluggingOptions
from sluggable.slugging.slug_config import SlugConfig
from sluggable.slugging.sources import resolve_sources
from sluggable.slugging.uniqueness import UniquenessChecker

logger = logging.getLogger(__name__)


def should_compute(record: Any, config: SlugConfig, is_new: bool) -> bool:
    """Decide whether a save needs a freshly computed slug.

    New records always get one. Existing records only get one when a
    regenerate predicate is configured and holds for the record's in-memory
    state; without a predicate the first slug is kept for good, even if the
    source fields change.

    Args:
        record: Record being saved.
        config: Slug config of the record's type.
        is_new: True on insert, False on update.

    Returns:
        True if a slug must be computed.
    """
    if is_new:
        return True
    if config.regenerate is None:
        return False
    return bool(config.regenerate(record))


def compute_slug(record: Any, config: SlugConfig, checker: UniquenessChecker, options: SluggingOptions) -> str:
    """Compute the slug a record should hold.

    Candidates are slugified, truncated to the maximum length and tried in
    order; the first available one wins. If every usable candidate is taken,
    the first of them gets a random suffix (not re-truncated, not re-checked).
    When no candidate slugifies to anything the slug is a random identifier.

    Args:
        record: Record the slug is for.
        config: Slug config of the record's type.
        checker: Availability check for the record's type.
        options: Slugifier, reserved words and maximum length to use.

    Returns:
        The slug.

    Raises:
        InvalidSourceError: If a source returns a value with no text form.
    """
    owner = record.pk
    first_taken: str | None = None

    for text in resolve_sources(record, config.source):
        candidate = options.slugify(text)
        if not candidate:
            continue

        candidate = candidate[: options.maximum_length]
        if checker.is_available(candidate, owner):
            return candidate
        if first_taken is None:
            first_taken = candidate

    if first_taken is not None:
        slug = disambiguate(first_taken)
        logger.debug("Every slug candidate is taken, using %r", slug)
        return slug

    slug = random_identifier()
    logger.debug("No usable slug source on %r, using %r", record, slug)
    return slug


def assign_slug(
    record: Any,
    config: SlugConfig,
    checker: UniquenessChecker,
    options: SluggingOptions,
    is_new: bool,
) -> str | None:
    """Compute a slug if the save needs one and write it onto the record.

    Args:
        record: Record being saved.
        config: Slug config of the record's type.
        checker: Availability check for the record's type.
        options: Slugifier, reserved words and maximum length to use.
        is_new: True on insert, False on update.

    Returns:
        The newly assigned slug, or None if the record keeps its slug.
    """
    if not should_compute(record, config, is_new):
        return None

    slug = compute_slug(record, config, checker, options)
    record.slug = slug
    logger.debug("Assigned slug %r to %r", slug, record)
    return slug

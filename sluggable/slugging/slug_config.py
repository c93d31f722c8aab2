"""ABOUTME: Per-record-type slug configuration and the registry that maps record types to it.
ABOUTME: Configs are frozen; declaring a config for a type replaces, never merges, the inherited one."""

import logging
import re
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

from sluggable.slugging.sources import NoSource, SourceSpec, parse_source

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

RegeneratePredicate = Callable[[Any], bool]
T = TypeVar("T", bound=type)


def _truthy_field(name: str) -> RegeneratePredicate:
    def predicate(record: Any) -> bool:
        value = getattr(record, name)
        if callable(value):
            value = value()
        return bool(value)

    predicate.__name__ = f"when_{name}"
    return predicate


class SlugConfig(BaseModel):
    """Slug configuration for one record type.

    Attributes:
        source: Where slug text comes from. Accepts the declaration forms of
            `parse_source` (accessor name, list of candidates, None).
        history: Name of the slug history table, or None to keep no history.
        regenerate: Predicate deciding whether an existing record gets a new
            slug on save. A string names a field whose truthiness is used.
            Without a predicate, slugs never change after the first save.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    source: SourceSpec = NoSource()
    history: str | None = None
    regenerate: RegeneratePredicate | None = None

    @field_validator("source", mode="before")
    @classmethod
    def _parse_source(cls, value: object) -> SourceSpec:
        return parse_source(value)

    @field_validator("history")
    @classmethod
    def _check_history_table(cls, value: str | None) -> str | None:
        if value is not None and not _IDENTIFIER.match(value):
            raise ValueError(f"History table must be a plain identifier, got {value!r}")
        return value

    @field_validator("regenerate", mode="before")
    @classmethod
    def _parse_regenerate(cls, value: object) -> object:
        if isinstance(value, str):
            return _truthy_field(value)
        return value


class SlugConfigRegistry:
    """Maps record types to their slug configuration.

    Lookups walk the record type's MRO, so subtypes use the nearest declared
    ancestor's config object as-is until they declare their own.
    """

    def __init__(self) -> None:
        self._configs: dict[type, SlugConfig] = {}

    def declare(self, record_type: type, **options: Any) -> SlugConfig:
        """Declare (or replace) the slug configuration of a record type.

        Args:
            record_type: The record class.
            **options: Fields of SlugConfig (source, history, regenerate).

        Returns:
            The new frozen config.
        """
        config = SlugConfig(**options)
        if record_type in self._configs:
            logger.debug("Replacing slug config of %s", record_type.__qualname__)
        self._configs[record_type] = config
        return config

    def lookup(self, record_type: type) -> SlugConfig | None:
        """Return the config of a record type or its nearest declared ancestor."""
        for klass in record_type.__mro__:
            config = self._configs.get(klass)
            if config is not None:
                return config
        return None

    def forget(self, record_type: type) -> None:
        """Drop the config declared directly on a record type, if any."""
        self._configs.pop(record_type, None)

    def __contains__(self, record_type: object) -> bool:
        return isinstance(record_type, type) and self.lookup(record_type) is not None


registry = SlugConfigRegistry()
"""Registry used by the `sluggable` decorator and by stores without an explicit registry."""


def sluggable(
    source: object = None,
    *,
    history: str | None = None,
    regenerate: RegeneratePredicate | str | None = None,
    using: SlugConfigRegistry | None = None,
) -> Callable[[T], T]:
    """Class decorator declaring the slug configuration of a record type.

    Example:
        >>> @sluggable(["name", ["name", "city"]], history="slug_history")
        ... class Venue(Record):
        ...     __table__ = "venues"
        ...     __columns__ = ("name", "city")
    """

    def decorate(record_type: T) -> T:
        target = registry if using is None else using
        target.declare(record_type, source=source, history=history, regenerate=regenerate)
        return record_type

    return decorate

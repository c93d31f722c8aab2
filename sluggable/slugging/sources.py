"""ABOUTME: Slug source specifications and the candidate texts they produce for a record.
ABOUTME: Evaluates single, joined and prioritized accessor lists with skip-on-empty rules."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from sluggable.errors import InvalidSourceError


@dataclass(frozen=True)
class Single:
    """One accessor whose text is a candidate on its own."""

    accessor: str


@dataclass(frozen=True)
class Joined:
    """Several accessors whose texts are joined with a space into one candidate."""

    accessors: tuple[str, ...]


@dataclass(frozen=True)
class Candidates:
    """Candidates tried in order; the first usable one wins."""

    items: tuple[Single | Joined, ...]


@dataclass(frozen=True)
class NoSource:
    """No textual source; slugs are always generated identifiers."""


SourceSpec = Single | Joined | Candidates | NoSource


@dataclass(frozen=True)
class Text:
    """A usable source value."""

    value: str


@dataclass(frozen=True)
class Empty:
    """A source that returned None or an empty string."""


@dataclass(frozen=True)
class Invalid:
    """A source that returned something with no text form."""

    value: Any


SourceValue = Text | Empty | Invalid


def parse_source(raw: object) -> SourceSpec:
    """Build a source specification from its declaration form.

    Args:
        raw: An accessor name, a list whose items are accessor names or lists of
            accessor names, None, or an already parsed specification.

    Returns:
        The parsed specification.

    Raises:
        ValueError: If the declaration has an unsupported shape.

    Examples:
        >>> parse_source("name")
        Single(accessor='name')
        >>> parse_source(["name", ["name", "other_text"]])
        Candidates(items=(Single(accessor='name'), Joined(accessors=('name', 'other_text'))))
    """
    if raw is None:
        return NoSource()
    if isinstance(raw, Single | Joined | Candidates | NoSource):
        return raw
    if isinstance(raw, str):
        return Single(_accessor_name(raw))
    if isinstance(raw, list | tuple):
        items: list[Single | Joined] = []
        for item in raw:
            if isinstance(item, str):
                items.append(Single(_accessor_name(item)))
            elif isinstance(item, list | tuple) and item and all(isinstance(name, str) for name in item):
                items.append(Joined(tuple(_accessor_name(name) for name in item)))
            else:
                raise ValueError(f"Unsupported slug source candidate: {item!r}")
        return Candidates(tuple(items))
    raise ValueError(f"Unsupported slug source: {raw!r}")


def _accessor_name(name: str) -> str:
    name = name.strip()
    if not name.isidentifier():
        raise ValueError(f"Slug source accessor must be an attribute name, got {name!r}")
    return name


def read_source(record: object, accessor: str) -> SourceValue:
    """Read one accessor from a record and classify the result.

    Callable attributes (methods) are called without arguments.

    Raises:
        InvalidSourceError: If the record has no such attribute.
    """
    try:
        value = getattr(record, accessor)
    except AttributeError as e:
        raise InvalidSourceError(accessor, f"{type(record).__name__} has no such attribute") from e

    if callable(value):
        value = value()

    if value is None or value == "":
        return Empty()
    # bool is rejected along with every other non-str type
    if isinstance(value, str):
        return Text(value)
    return Invalid(value)


def _text_or_raise(accessor: str, value: SourceValue) -> str | None:
    if isinstance(value, Invalid):
        raise InvalidSourceError(accessor, f"returned {value.value!r}, expected a string or None")
    if isinstance(value, Text):
        return value.value
    return None


def _evaluate(record: object, item: Single | Joined) -> str | None:
    if isinstance(item, Single):
        return _text_or_raise(item.accessor, read_source(record, item.accessor))

    parts: list[str] = []
    for accessor in item.accessors:
        text = _text_or_raise(accessor, read_source(record, accessor))
        if text is None:
            return None
        parts.append(text)
    return " ".join(parts)


class SourceCandidates:
    """Lazy, restartable sequence of candidate texts for one record.

    Each iteration re-reads the record, so accessors are only invoked as far
    as the consumer pulls.
    """

    def __init__(self, record: object, spec: SourceSpec) -> None:
        self.record = record
        self.spec = spec

    def __iter__(self) -> Iterator[str]:
        spec = self.spec
        if isinstance(spec, NoSource):
            return
        items = spec.items if isinstance(spec, Candidates) else (spec,)
        for item in items:
            text = _evaluate(self.record, item)
            if text is not None:
                yield text


def resolve_sources(record: object, spec: SourceSpec) -> SourceCandidates:
    """Return the candidate texts a record offers for its slug, in priority order."""
    return SourceCandidates(record, spec)

"""ABOUTME: Tests for the sources module.
ABOUTME: Verifies source declaration parsing and candidate text resolution on records."""

from typing import Any

import pytest

from sluggable.errors import InvalidSourceError
from sluggable.slugging.sources import (
    Candidates,
    Empty,
    Invalid,
    Joined,
    NoSource,
    Single,
    Text,
    parse_source,
    read_source,
    resolve_sources,
)


class Thing:
    """Plain object with attributes and methods used as slug sources."""

    def __init__(self, **values: Any) -> None:
        self.name = "name"
        self.other_text = "other text"
        self.more_text = "more text"
        self.calls = 0
        for key, value in values.items():
            setattr(self, key, value)

    def nothing(self) -> None:
        return None

    def blank(self) -> str:
        return ""

    def false(self) -> bool:
        return False

    def counted(self) -> str:
        self.calls += 1
        return "counted"


class TestParseSource:
    """Tests for parse_source function."""

    def test_none(self) -> None:
        """None means no textual source."""
        assert parse_source(None) == NoSource()

    def test_single_accessor(self) -> None:
        """A string is a single accessor."""
        assert parse_source("name") == Single("name")

    def test_candidate_list(self) -> None:
        """Lists hold single accessors and joined accessor lists."""
        spec = parse_source(["name", ["name", "other_text"], ("name", "more_text")])

        assert spec == Candidates(
            (Single("name"), Joined(("name", "other_text")), Joined(("name", "more_text"))),
        )

    def test_parsed_spec_passes_through(self) -> None:
        """Already parsed specs are returned unchanged."""
        spec = Joined(("a", "b"))
        assert parse_source(spec) is spec

    @pytest.mark.parametrize("raw", [42, ["name", 3], [["name", 3]], [[]], "not an attribute"])
    def test_unsupported_shapes(self, raw: object) -> None:
        """Unsupported declarations raise ValueError."""
        with pytest.raises(ValueError):
            parse_source(raw)


class TestReadSource:
    """Tests for read_source function."""

    def test_text(self) -> None:
        """Non-empty strings are usable text."""
        assert read_source(Thing(), "name") == Text("name")

    @pytest.mark.parametrize("accessor", ["nothing", "blank"])
    def test_empty(self, accessor: str) -> None:
        """None and empty strings are empty, not errors."""
        assert read_source(Thing(), accessor) == Empty()

    def test_methods_are_called(self) -> None:
        """Callable attributes are invoked."""
        thing = Thing()
        assert read_source(thing, "counted") == Text("counted")
        assert thing.calls == 1

    @pytest.mark.parametrize("value", [False, True, 7, object()])
    def test_invalid(self, value: object) -> None:
        """Booleans and other non-string values are invalid."""
        assert isinstance(read_source(Thing(name=value), "name"), Invalid)

    def test_missing_attribute(self) -> None:
        """A missing accessor raises InvalidSourceError."""
        with pytest.raises(InvalidSourceError):
            read_source(Thing(), "does_not_exist")


class TestResolveSources:
    """Tests for resolve_sources function."""

    def test_no_source(self) -> None:
        """No source yields nothing."""
        assert list(resolve_sources(Thing(), NoSource())) == []

    def test_single(self) -> None:
        """A single accessor yields its text."""
        assert list(resolve_sources(Thing(), Single("name"))) == ["name"]

    def test_single_empty(self) -> None:
        """A single accessor returning None yields nothing."""
        assert list(resolve_sources(Thing(), Single("nothing"))) == []

    def test_candidates_in_order(self) -> None:
        """Candidates are yielded in order, joined ones space-separated."""
        spec = parse_source(["name", ["name", "other_text"], ["name", "more_text"], ["name", "other_text", "more_text"]])

        assert list(resolve_sources(Thing(), spec)) == [
            "name",
            "name other text",
            "name more text",
            "name other text more text",
        ]

    def test_empty_candidates_skipped(self) -> None:
        """Candidates returning None or empty strings are skipped."""
        spec = parse_source(["nothing", "blank", "name"])
        assert list(resolve_sources(Thing(), spec)) == ["name"]

    def test_joined_skipped_when_any_part_empty(self) -> None:
        """A joined candidate is dropped entirely if one of its parts is empty."""
        spec = parse_source([["name", "nothing"], ["name", "blank"], ["name", "other_text"]])
        assert list(resolve_sources(Thing(), spec)) == ["name other text"]

    def test_invalid_raises(self) -> None:
        """An invalid value raises InvalidSourceError when reached."""
        spec = parse_source(["false", "name"])

        with pytest.raises(InvalidSourceError):
            list(resolve_sources(Thing(), spec))

    def test_invalid_inside_joined_raises(self) -> None:
        """An invalid part of a joined candidate raises as well."""
        spec = parse_source([["name", "false"]])

        with pytest.raises(InvalidSourceError):
            list(resolve_sources(Thing(), spec))

    def test_lazy(self) -> None:
        """Accessors are only read as far as the consumer iterates."""
        thing = Thing()
        candidates = iter(resolve_sources(thing, parse_source(["name", "counted"])))

        assert next(candidates) == "name"
        assert thing.calls == 0

    def test_restartable(self) -> None:
        """The sequence can be iterated more than once."""
        candidates = resolve_sources(Thing(), parse_source(["name", "other_text"]))
        assert list(candidates) == list(candidates) == ["name", "other text"]

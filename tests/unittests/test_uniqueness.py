"""ABOUTME: Tests for the uniqueness module.
ABOUTME: Verifies reserved words, live slugs and history with the owner's own slugs excluded."""

from typing import Any

from sluggable.slugging.options import SluggingOptions
from sluggable.slugging.uniqueness import UniquenessChecker


class FakeLive:
    """Live slugs keyed by slug, valued by owner pk."""

    def __init__(self, slugs: dict[str, Any]) -> None:
        self.slugs = slugs

    def slug_taken(self, slug: str, excluding_pk: Any = None) -> bool:
        return slug in self.slugs and self.slugs[slug] != excluding_pk


class FakeHistory:
    """History entries as (owner_type, owner_id, slug) tuples."""

    def __init__(self, entries: list[tuple[str, str, str]]) -> None:
        self.entries = entries

    def is_taken(self, slug: str, owner_type: str, excluding_owner_id: object = None) -> bool:
        return any(
            s == slug and t == owner_type and (excluding_owner_id is None or o != str(excluding_owner_id))
            for t, o, s in self.entries
        )


def _checker(
    live: dict[str, Any] | None = None,
    history: list[tuple[str, str, str]] | None = None,
    reserved: frozenset[str] = frozenset(),
) -> UniquenessChecker:
    return UniquenessChecker(
        FakeLive(live or {}),
        None if history is None else FakeHistory(history),
        "Widget",
        SluggingOptions(reserved_words=reserved),
    )


class TestIsAvailable:
    """Tests for UniquenessChecker.is_available."""

    def test_free_slug(self) -> None:
        """A slug nobody holds is available."""
        assert _checker().is_available("blah") is True

    def test_reserved_word(self) -> None:
        """Reserved words are never available."""
        assert _checker(reserved=frozenset({"blah"})).is_available("blah", 1) is False

    def test_held_by_other_record(self) -> None:
        """A slug held by another live record is taken."""
        assert _checker(live={"blah": 1}).is_available("blah", 2) is False

    def test_held_by_unsaved_owner(self) -> None:
        """Unsaved records exclude nobody."""
        assert _checker(live={"blah": 1}).is_available("blah", None) is False

    def test_own_current_slug(self) -> None:
        """A record's own current slug is available to it."""
        assert _checker(live={"blah": 1}).is_available("blah", 1) is True

    def test_held_in_history_by_other(self) -> None:
        """A slug another record held before is taken."""
        assert _checker(history=[("Widget", "1", "blah")]).is_available("blah", 2) is False

    def test_own_past_slug(self) -> None:
        """A record's own past slugs are available to it."""
        assert _checker(history=[("Widget", "1", "blah")]).is_available("blah", 1) is True

    def test_history_of_other_type_ignored(self) -> None:
        """History of another record type does not block."""
        assert _checker(history=[("Gadget", "1", "blah")]).is_available("blah", 2) is True

    def test_history_ignored_when_disabled(self) -> None:
        """Without history only live records count."""
        assert _checker(history=None).is_available("blah", 2) is True

"""ABOUTME: Base class for records that carry a slug.
ABOUTME: Holds the primary key, the slug and one attribute per declared column."""

from typing import Any, ClassVar


class Record:
    """A stored row with a primary key, a unique slug and plain text columns.

    Subclasses declare `__table__` and `__columns__` (excluding `id` and
    `slug`). Methods defined on a subclass can be used as slug sources like
    columns.

    Example:
        >>> class Widget(Record):
        ...     __table__ = "widgets"
        ...     __columns__ = ("name", "other_text")
        >>> Widget(name="Blah").name
        'Blah'
    """

    __table__: ClassVar[str] = ""
    __columns__: ClassVar[tuple[str, ...]] = ()

    def __init__(self, **values: Any) -> None:
        unknown = set(values) - {"id", "slug", *self.__columns__}
        if unknown:
            raise TypeError(f"{type(self).__name__} has no columns {sorted(unknown)}")

        self.id: Any = values.pop("id", None)
        self.slug: str | None = values.pop("slug", None)
        for column in self.__columns__:
            setattr(self, column, values.get(column))
        self._persisted = False

    @property
    def pk(self) -> Any:
        """Primary key value (alias for id)."""
        return self.id

    @property
    def is_new(self) -> bool:
        """True until the record has been written to or loaded from a store."""
        return not self._persisted

    def mark_persisted(self) -> None:
        """Flag the record as stored. Called by stores after insert and on load."""
        self._persisted = True

    def set(self, **values: Any) -> None:
        """Assign column values in memory without saving."""
        unknown = set(values) - {"slug", *self.__columns__}
        if unknown:
            raise TypeError(f"{type(self).__name__} has no columns {sorted(unknown)}")
        for column, value in values.items():
            setattr(self, column, value)

    def to_row(self) -> dict[str, Any]:
        """Return column values, slug included, keyed by column name."""
        row = {column: getattr(self, column) for column in self.__columns__}
        row["slug"] = self.slug
        return row

    @classmethod
    def type_name(cls) -> str:
        """Owner type recorded in slug history entries."""
        return f"{cls.__module__}.{cls.__qualname__}"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r} slug={self.slug!r}>"

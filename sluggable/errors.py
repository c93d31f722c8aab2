"""ABOUTME: Exception hierarchy raised by the slug engine.
ABOUTME: Covers invalid slug sources and failed strict lookups."""


class SlugError(Exception):
    """Base class for all slug engine errors."""


class InvalidSourceError(SlugError, ValueError):
    """A slug source returned a value that has no sensible text form.

    Raised while computing a slug; aborts the surrounding write.
    """

    def __init__(self, accessor: str, message: str) -> None:
        self.accessor = accessor
        super().__init__(f"Slug source {accessor!r}: {message}")


class NotFoundError(SlugError, LookupError):
    """No record matched an identifier by primary key, slug or slug history."""

    def __init__(self, type_name: str, identifier: object) -> None:
        self.type_name = type_name
        self.identifier = identifier
        super().__init__(f"No {type_name} found for {identifier!r}")

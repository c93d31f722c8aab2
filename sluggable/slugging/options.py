"""ABOUTME: Process-wide slug options: slugifier override, reserved words, maximum length.
ABOUTME: Core functions take a SluggingOptions argument; the store passes the current global per call."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace

from sluggable.config import SluggingFileConfig
from sluggable.settings import settings
from sluggable.slugging.normalize import slugify as default_slugify

Slugifier = Callable[[str], str]


@dataclass(frozen=True)
class SluggingOptions:
    """Snapshot of the options that shape slug computation.

    Attributes:
        slugifier: Replacement for the default slugify function, None for the default.
        reserved_words: Slugs that are never assigned verbatim.
        maximum_length: Length a slug candidate is truncated to before disambiguation.
    """

    slugifier: Slugifier | None = None
    reserved_words: frozenset[str] = field(default_factory=frozenset)
    maximum_length: int = 50

    def __post_init__(self) -> None:
        if self.maximum_length <= 0:
            raise ValueError(f"maximum_length must be positive, got {self.maximum_length}")

    def slugify(self, text: str) -> str:
        """Slugify text with the configured slugifier."""
        slugifier = self.slugifier or default_slugify
        return slugifier(text)

    def is_reserved(self, slug: str) -> bool:
        """Check whether a slug is one of the reserved words."""
        return slug in self.reserved_words


def _defaults() -> SluggingOptions:
    return SluggingOptions(
        reserved_words=frozenset(settings.SLUG_RESERVED_WORDS),
        maximum_length=settings.SLUG_MAXIMUM_LENGTH,
    )


_current = _defaults()


def get_options() -> SluggingOptions:
    """Return the options in effect for the next slug computation."""
    return _current


def set_slugifier(slugifier: Slugifier | None) -> None:
    """Replace the slugify function process-wide. None restores the default."""
    global _current  # noqa: PLW0603
    _current = replace(_current, slugifier=slugifier)


def set_reserved_words(words: Iterable[str] | None) -> None:
    """Replace the reserved words process-wide. None clears them."""
    global _current  # noqa: PLW0603
    _current = replace(_current, reserved_words=frozenset(words or ()))


def set_maximum_length(length: int | None) -> None:
    """Replace the maximum slug length process-wide. None restores the settings default."""
    global _current  # noqa: PLW0603
    if length is None:
        length = settings.SLUG_MAXIMUM_LENGTH
    _current = replace(_current, maximum_length=length)


def apply_file_config(config: SluggingFileConfig) -> None:
    """Apply options loaded from slugging.yml."""
    set_reserved_words(config.normalized_reserved_words())
    set_maximum_length(config.maximum_length)


def reset_options() -> None:
    """Restore the defaults from settings, dropping any slugifier override."""
    global _current  # noqa: PLW0603
    _current = _defaults()

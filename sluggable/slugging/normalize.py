"""ABOUTME: Default text normalization for slugs.
ABOUTME: Turns arbitrary text into a lowercase, hyphen-separated, URL-safe token."""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Convert text to a URL-safe slug.

    Handles:
    - Unicode normalization (accents are transliterated, other non-ASCII dropped)
    - Lowercase conversion
    - Any run of non-alphanumeric characters collapsed to a single hyphen
    - Leading/trailing hyphens stripped

    Args:
        text: Input text to slugify.

    Returns:
        Normalized slug string, empty if nothing usable remains.

    Examples:
        >>> slugify("Tra la la!")
        'tra-la-la'
        >>> slugify("  Crème Brûlée  ")
        'creme-brulee'
        >>> slugify("   ")
        ''
    """
    if not text:
        return ""

    # Normalize unicode characters
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")

    text = text.lower()
    text = _NON_ALNUM.sub("-", text)

    return text.strip("-")

"""ABOUTME: Random identifiers used as fallback slugs and as collision suffixes.
ABOUTME: Identifiers are canonical 8-4-4-4-12 hex UUID4 strings."""

import uuid


def random_identifier() -> str:
    """Return a new random identifier in canonical UUID form."""
    return str(uuid.uuid4())


def disambiguate(base: str) -> str:
    """Append a random identifier to a slug candidate that is already taken.

    Args:
        base: The (already truncated) candidate. May be empty.

    Returns:
        `base-<uuid>`, or the bare identifier when base is empty.
    """
    identifier = random_identifier()
    if not base:
        return identifier
    return f"{base}-{identifier}"

"""Slug normalization for field names, field types, and instance keys.

INVARIANT: slugify() is idempotent and only yields ``[a-z0-9_-]``.
"""

from __future__ import annotations

import re
import unicodedata

_DISALLOWED = re.compile(r"[^a-z0-9_]+")


def slugify(text: str) -> str:
    """Normalize free-form text into a URL-safe slug.

    Strips accents, lowercases, and collapses every run of characters
    outside ``[a-z0-9_]`` into a single hyphen. Leading and trailing
    hyphens are removed.

    Examples:
        >>> slugify("Body Text")
        'body-text'
        >>> slugify("  Café -- Menu! ")
        'cafe-menu'
        >>> slugify("custom_cpt")
        'custom_cpt'
    """
    text = unicodedata.normalize("NFKD", str(text))
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    return _DISALLOWED.sub("-", text).strip("-")


def instance_key(name: str) -> str:
    """Slugify *name* for use as an instance key (hyphens become underscores)."""
    return slugify(name).replace("-", "_")

"""Label translation via gettext for the ``attachments`` text domain.

Catalogs are plain values: each :class:`~attachments.infrastructure.site.Site`
loads its own and hands ``catalog.gettext`` to the field factory.
"""

from __future__ import annotations

import gettext
from collections.abc import Callable
from pathlib import Path

TEXT_DOMAIN = "attachments"

Translator = Callable[[str], str]


def load_translations(
    localedir: Path | str | None = None,
    languages: list[str] | None = None,
) -> gettext.NullTranslations:
    """Load the catalog for *languages* from *localedir*.

    Without a locale directory, or when no catalog matches, the identity
    catalog is returned.
    """
    if localedir is None:
        return gettext.NullTranslations()
    return gettext.translation(
        TEXT_DOMAIN,
        localedir=str(localedir),
        languages=languages or None,
        fallback=True,
    )


def identity(message: str) -> str:
    return message

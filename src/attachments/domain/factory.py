"""FieldFactory — validated Field construction from parameter mappings."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from attachments.domain.field_types import FieldTypeRegistry
from attachments.domain.fields import Field
from attachments.domain.i18n import Translator, identity
from attachments.domain.slugs import slugify

logger = logging.getLogger(__name__)

FIELD_DEFAULTS: dict[str, str] = {
    "name": "title",
    "type": "text",
    "label": "Title",
}


class FieldFactory:
    """Build Fields through a :class:`FieldTypeRegistry`.

    An unknown type is a recoverable condition: :meth:`create` returns
    ``None`` and callers branch on the result.
    """

    def __init__(
        self,
        registry: FieldTypeRegistry,
        *,
        translator: Translator = identity,
    ) -> None:
        self._registry = registry
        self._translate = translator

    @property
    def registry(self) -> FieldTypeRegistry:
        return self._registry

    def translate(self, message: str) -> str:
        return self._translate(message)

    def create(self, params: Mapping[str, Any] | None = None, **overrides: Any) -> Field | None:
        """Create a Field from *params* shallow-merged over the defaults.

        Returns ``None`` when ``type`` is not registered.
        """
        merged: dict[str, Any] = {**FIELD_DEFAULTS, **(params or {}), **overrides}

        type_key = merged["type"]
        implementation = self._registry.resolve(type_key)
        if implementation is None:
            logger.debug("Unknown field type %r for field %r", type_key, merged["name"])
            return None

        name = slugify(merged["name"])
        label = self._translate(str(merged["label"]))

        field = implementation(name, label)
        field.type = slugify(type_key)
        return field

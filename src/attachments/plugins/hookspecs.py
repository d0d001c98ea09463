"""Pluggy hook specifications for field types, instances, and detection.

Setup-time hooks run once while a :class:`~attachments.infrastructure.site.Site`
bootstraps: field types first, then instances. Category detection is
queried whenever the current category is needed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from attachments.domain.fields import Field
    from attachments.domain.instances import InstanceRegistry

PROJECT_NAME = "attachments"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class AttachmentsHookSpec:
    """Hook specifications for the attachments plugin system."""

    @hookspec
    def attachments_fields(self, field_types: dict[str, Any]) -> dict[str, Any] | None:
        """Filter the ``{key: source}`` field type mapping.

        Receives the mapping produced by the previous plugin and returns an
        augmented one. Sources are Field subclasses or locator strings.
        Returning None leaves the mapping unchanged.
        """

    @hookspec
    def register_field_types(self) -> dict[str, type[Field]] | None:
        """Return ``{key: FieldSubclass}`` mappings to add to the registry."""

    @hookspec
    def register_instances(self, instances: InstanceRegistry) -> None:
        """Register instances on *instances* after configured ones."""

    @hookspec(firstresult=True)
    def detect_current_category(self) -> str | None:
        """Return the current content category, or None to defer."""

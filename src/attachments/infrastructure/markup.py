"""Form markup for instances, rendered through Jinja2 templates.

Templates live in ``templates/markup/`` and can be overridden per site from
``.attachments/templates/markup/``. Fields whose type cannot be resolved
are still rendered; only the type-specific CSS class is omitted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from markupsafe import Markup

from attachments.domain.fields import BoundField, bind_field
from attachments.infrastructure.templates import build_template_environment

if TYPE_CHECKING:
    from jinja2 import Environment

    from attachments.domain.field_types import TypeResolver
    from attachments.domain.instances import Instance, InstanceRegistry, InstanceResolver

logger = logging.getLogger(__name__)

#: Media attributes carried by every attachment as hidden inputs.
HIDDEN_INPUTS: tuple[str, ...] = ("id", "filename", "icon", "subtype", "type")


class MarkupRenderer:
    """Render meta boxes and attachment templates for registered instances."""

    def __init__(
        self,
        instances: InstanceRegistry,
        types: TypeResolver,
        resolver: InstanceResolver,
        *,
        site_root: Path | None = None,
        env: Environment | None = None,
    ) -> None:
        self._instances = instances
        self._types = types
        self._resolver = resolver
        self._env = env or build_template_environment("markup", site_root=site_root)

    def bind(
        self,
        instance: Instance,
        values: Mapping[str, str] | None = None,
    ) -> list[BoundField]:
        """Bind every field of *instance*, resolving its display type."""
        values = values or {}
        bound: list[BoundField] = []
        for field in instance.fields:
            type_key = self._types.display_type(field)
            if type_key is None:
                logger.debug("Unknown type for field %s in %s", field.name, instance.name)
            bound.append(bind_field(instance.name, field, type_key, value=values.get(field.name)))
        return bound

    def render_field(self, bound: BoundField) -> Markup:
        return Markup(self._env.get_template("field.html.j2").render(bound=bound))

    def render_attachment(
        self,
        instance: Instance,
        values: Mapping[str, str] | None = None,
    ) -> Markup:
        """Render one attachment: every field plus the hidden media inputs."""
        fields = [self.render_field(bound) for bound in self.bind(instance, values)]
        template = self._env.get_template("attachment.html.j2")
        return Markup(
            template.render(instance=instance, fields=fields, hidden_inputs=HIDDEN_INPUTS)
        )

    def render_meta_box(self, instance: Instance) -> Markup:
        return Markup(self._env.get_template("meta_box.html.j2").render(instance=instance))

    def render_footer(self, category: str | None = None) -> Markup:
        """Render the script templates for every instance applicable to *category*."""
        instances = [
            instance
            for name in self._resolver.instances_for_category(category)
            if (instance := self._instances.get(name)) is not None
        ]
        return self.render_templates(instances)

    def render_templates(self, instances: Sequence[Instance]) -> Markup:
        """Render one ``text/template`` script per instance."""
        if not instances:
            return Markup("")
        templates = [(instance.name, self.render_attachment(instance)) for instance in instances]
        return Markup(self._env.get_template("footer.html.j2").render(templates=templates))

"""RenderService — form markup for the instances of a category."""

from __future__ import annotations

from attachments.domain.slugs import instance_key
from attachments.services.base import NOT_FOUND, BaseService
from attachments.services.result import ServiceResult


class RenderService(BaseService):
    """Produce meta box and attachment template markup."""

    def render(self, category: str | None = None, instance: str | None = None) -> ServiceResult:
        """Render markup for every instance applicable to *category*.

        With *instance*, only that instance is rendered, regardless of
        category eligibility.
        """
        op = "render"
        site = self._site
        resolved = site.resolver.resolve_category(category)

        if instance is not None:
            selected = site.instances.get(instance)
            if selected is None:
                return ServiceResult.failure(
                    op,
                    NOT_FOUND,
                    f"No instance registered as {instance_key(instance)!r}",
                    name=instance,
                )
            instances = [selected]
        else:
            instances = [
                inst
                for name in site.resolver.instances_for_category(resolved)
                if (inst := site.instances.get(name)) is not None
            ]

        warnings = [
            f"Unknown type for field {bound.name!r} in {inst.name!r}"
            for inst in instances
            for bound in site.markup.bind(inst)
            if bound.type is None
        ]
        parts = [site.markup.render_meta_box(inst) for inst in instances]
        parts.append(site.markup.render_templates(instances))

        return ServiceResult.success(
            op,
            {
                "category": resolved,
                "instances": [inst.name for inst in instances],
                "markup": "".join(str(part) for part in parts),
            },
            warnings=warnings,
        )

"""InstanceService — instance listing, lookup, and category resolution."""

from __future__ import annotations

from attachments.domain.slugs import instance_key
from attachments.services.base import NOT_FOUND, BaseService
from attachments.services.result import ServiceResult


class InstanceService(BaseService):
    """Read-only operations over the site's instance registry."""

    def list_instances(self, category: str | None = None) -> ServiceResult:
        """List instances, optionally narrowed to *category*.

        Without a category every registered instance is listed. With one,
        only instances eligible for the resolved category are listed.
        """
        instances = self._site.instances
        data: dict[str, object] = {}
        if category is None:
            selected = instances.values()
        else:
            resolved = self._site.resolver.resolve_category(category)
            names = self._site.resolver.instances_for_category(resolved)
            selected = [inst for inst in instances.values() if inst.name in names]
            data["category"] = resolved

        items = [
            {
                "name": inst.name,
                "label": inst.label,
                "categories": sorted(inst.categories),
                "limit": inst.limit,
                "fields": len(inst.fields),
            }
            for inst in selected
        ]
        data["items"] = items
        data["count"] = len(items)
        return ServiceResult.success("list_instances", data)

    def get_instance(self, name: str) -> ServiceResult:
        """Describe one instance with its bound fields."""
        op = "get_instance"
        instance = self._site.instances.get(name)
        if instance is None:
            return ServiceResult.failure(
                op,
                NOT_FOUND,
                f"No instance registered as {instance_key(name)!r}",
                name=name,
                available=self._site.instances.names(),
            )

        data = instance.to_dict()
        data["fields"] = [
            {
                "name": bound.name,
                "type": bound.type,
                "label": bound.label,
                "field_name": bound.field_name,
                "field_id": bound.field_id,
            }
            for bound in self._site.markup.bind(instance)
        ]
        return ServiceResult.success(op, data)

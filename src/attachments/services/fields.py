"""FieldService — field type listing and field previews."""

from __future__ import annotations

from typing import Any

from attachments.services.base import UNKNOWN_FIELD_TYPE, BaseService
from attachments.services.result import ServiceResult


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class FieldService(BaseService):
    """Read-only operations over the site's field type registry."""

    def list_field_types(self) -> ServiceResult:
        """List registered field types in registration order."""
        items = [
            {"key": key, "implementation": _qualified_name(implementation)}
            for key, implementation in self._site.field_types.items()
        ]
        return ServiceResult.success("list_field_types", {"items": items, "count": len(items)})

    def create_field(self, params: dict[str, Any] | None = None) -> ServiceResult:
        """Build a field through the factory and describe it.

        An unknown type is reported as an ``UNKNOWN_FIELD_TYPE`` error.
        """
        op = "create_field"
        field = self._site.factory.create(params or {})
        if field is None:
            requested = (params or {}).get("type", "text")
            return ServiceResult.failure(
                op,
                UNKNOWN_FIELD_TYPE,
                f"Unknown field type: {requested!r}",
                type=requested,
                available=list(self._site.field_types.keys()),
            )
        data = field.to_dict()
        data["implementation"] = _qualified_name(type(field))
        data["resolved_type"] = self._site.types.type_of(field)
        return ServiceResult.success(op, data)

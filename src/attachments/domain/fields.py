"""Field ABC, the built-in text field, and render-time field binding.

A Field is constructed with ``(name, label)`` by its implementation class.
The :class:`~attachments.domain.factory.FieldFactory` tags it with the slug
of the type key it was created under; fields built by hand carry no tag and
are resolved through :class:`~attachments.domain.field_types.TypeResolver`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from markupsafe import Markup, escape

from attachments.domain.slugs import slugify

FIELD_NAME_PREFIX = "attachments"


@dataclass(frozen=True)
class BoundField:
    """A Field placed inside a specific instance for rendering.

    Carries everything a renderer needs: identifiers derived from the
    instance and field names, the resolved type (``None`` if unknown),
    and the runtime value.
    """

    instance: str
    field: Field
    type: str | None
    field_name: str
    field_id: str
    value: str | None = None

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def label(self) -> str:
        return self.field.label

    def html(self) -> Markup:
        """Render the field's input markup."""
        return self.field.html(self)


class Field(ABC):
    """Base class for every field type.

    Subclasses implement :meth:`html`; they may override
    :meth:`format_value_for_input` when the raw value needs conversion
    before it is placed in markup.
    """

    def __init__(self, name: str = "field", label: str = "Field") -> None:
        self.name = slugify(name)
        self.label = label
        self.type: str | None = None
        self.value: str | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, type={self.type!r})"

    @abstractmethod
    def html(self, bound: BoundField) -> Markup:
        """Return the input markup for *bound*."""
        ...

    def format_value_for_input(self, value: str | None) -> Markup:
        """HTML-escape *value* for use inside an attribute."""
        return escape(value if value is not None else "")

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "label": self.label,
            "value": self.value,
        }


class TextField(Field):
    """Single-line text input."""

    def __init__(self, name: str = "text", label: str = "Text") -> None:
        super().__init__(name, label)

    def html(self, bound: BoundField) -> Markup:
        return Markup(
            '<input type="text" name="{name}" id="{id}" '
            'class="attachments attachments-field attachments-field-{slug}" '
            'value="{value}" />'
        ).format(
            name=bound.field_name,
            id=bound.field_id,
            slug=bound.name,
            value=self.format_value_for_input(bound.value),
        )


def field_identifiers(instance: str, name: str) -> tuple[str, str]:
    """Return ``(field_name, field_id)`` for a field inside *instance*."""
    field_name = f"{FIELD_NAME_PREFIX}[{instance}][{name}]"
    field_id = f"{FIELD_NAME_PREFIX}-{instance}-{name}"
    return field_name, field_id


def bind_field(
    instance: str,
    field: Field,
    type_key: str | None,
    *,
    value: str | None = None,
) -> BoundField:
    """Bind *field* to *instance* with a resolved *type_key*.

    *value* overrides the field's own runtime value when given.
    """
    field_name, field_id = field_identifiers(instance, field.name)
    return BoundField(
        instance=instance,
        field=field,
        type=type_key,
        field_name=field_name,
        field_id=field_id,
        value=value if value is not None else field.value,
    )

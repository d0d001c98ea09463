"""Instances — named groups of fields bound to content categories.

An instance describes one attachable record shape: a label, the content
categories it applies to, a field limit, UI text, and an ordered field list.

INVARIANT: registering a name that is already registered replaces the
previous Instance wholesale. Fields are never merged across calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Protocol, Union, runtime_checkable

from pydantic import BaseModel, ConfigDict, field_validator

from attachments.domain.factory import FieldFactory
from attachments.domain.fields import Field
from attachments.domain.slugs import instance_key

logger = logging.getLogger(__name__)

DEFAULT_INSTANCE = "attachments"
DEFAULT_CATEGORY = "post"
UNLIMITED = -1

# Options that fall back to their default when given as None.
_NON_NULL_OPTIONS: tuple[str, ...] = ("label", "limit", "button_text")


class Instance(BaseModel):
    """A registered attachments instance."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    label: str
    categories: frozenset[str]
    limit: int = UNLIMITED
    note: str | None = None
    button_text: str
    fields: tuple[Field, ...] = ()

    @field_validator("categories", mode="before")
    @classmethod
    def _coerce_categories(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            return frozenset({value})
        return frozenset(value)

    def applies_to(self, category: str) -> bool:
        return category in self.categories

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "categories": sorted(self.categories),
            "limit": self.limit,
            "note": self.note,
            "button_text": self.button_text,
            "fields": [field.to_dict() for field in self.fields],
        }


FieldSpec = Union[Field, Mapping[str, Any], None, bool]


class InstanceRegistry:
    """Ordered mapping of instance key -> :class:`Instance`."""

    def __init__(self, factory: FieldFactory) -> None:
        self._factory = factory
        self._instances: dict[str, Instance] = {}

    @property
    def factory(self) -> FieldFactory:
        return self._factory

    def defaults(self) -> dict[str, Any]:
        """Code-baked instance defaults, built fresh on every call."""
        return {
            "label": self._factory.translate("Attachments"),
            "post_type": ["post", "page"],
            "limit": UNLIMITED,
            "note": None,
            "button_text": self._factory.translate("Attach"),
            "fields": self._default_fields(),
        }

    def register(
        self,
        name: str = DEFAULT_INSTANCE,
        params: Mapping[str, Any] | None = None,
    ) -> Instance:
        """Register (or replace) the instance *name*.

        *params* are shallow-merged over :meth:`defaults`. ``post_type`` may
        be a single category or an iterable of them. ``fields`` entries may
        be Field objects or parameter mappings for the factory; entries that
        are falsy or name an unknown field type are dropped. A None
        ``label``, ``limit`` or ``button_text`` keeps the default.
        """
        params = dict(params or {})
        if "fields" in params:
            defaults = {k: v for k, v in self.defaults().items() if k != "fields"}
        else:
            defaults = self.defaults()
        merged = {**defaults, **params}
        for option in _NON_NULL_OPTIONS:
            if merged[option] is None:
                merged[option] = defaults[option]

        key = instance_key(name)
        instance = Instance(
            name=key,
            label=merged["label"],
            categories=merged["post_type"],
            limit=merged["limit"],
            note=merged["note"],
            button_text=merged["button_text"],
            fields=tuple(self._build_fields(key, merged["fields"] or ())),
        )
        if key in self._instances:
            logger.debug("Replacing instance %s", key)
        self._instances[key] = instance
        logger.debug(
            "Registered instance %s (%d fields, categories=%s)",
            key,
            len(instance.fields),
            sorted(instance.categories),
        )
        return instance

    def get(self, name: str) -> Instance | None:
        return self._instances.get(instance_key(name))

    def names(self) -> list[str]:
        return list(self._instances)

    def values(self) -> list[Instance]:
        return list(self._instances.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and instance_key(name) in self._instances

    def __iter__(self) -> Iterator[Instance]:
        return iter(self._instances.values())

    def __len__(self) -> int:
        return len(self._instances)

    def _default_fields(self) -> list[Field | None]:
        return [
            self._factory.create({"name": "title", "type": "text", "label": "Title"}),
            self._factory.create({"name": "caption", "type": "text", "label": "Caption"}),
        ]

    def _is_registered(self, field: Field) -> bool:
        registry = self._factory.registry
        if field.type is not None and field.type in registry:
            return True
        return any(type(field) is implementation for _key, implementation in registry.items())

    def _build_fields(self, instance: str, specs: Sequence[FieldSpec]) -> Iterator[Field]:
        for spec in specs:
            if isinstance(spec, Field):
                if not self._is_registered(spec):
                    logger.debug("Dropping unregistered field %r from %s", spec, instance)
                    continue
                yield spec
            elif isinstance(spec, Mapping):
                field = self._factory.create(spec)
                if field is None:
                    logger.debug("Dropping field %r from instance %s", dict(spec), instance)
                    continue
                yield field
            elif spec:
                logger.debug("Dropping unsupported field spec %r from %s", spec, instance)


# ---------------------------------------------------------------------------
# Category resolution
# ---------------------------------------------------------------------------


@runtime_checkable
class CategoryDetector(Protocol):
    """Host collaborator that knows the current content category."""

    def detect_current_category(self) -> str: ...


class StaticCategoryDetector:
    """Detector that always answers with a fixed category."""

    def __init__(self, category: str = DEFAULT_CATEGORY) -> None:
        self.category = category

    def detect_current_category(self) -> str:
        return self.category


class InstanceResolver:
    """Narrow registered instances to a content category.

    Args:
        instances: The registry to query.
        detector: Fallback source for the current category.
        known_categories: Categories the host recognizes. When non-empty,
            any other category is treated as unresolvable and replaced by
            the detector's answer. Empty means every category is accepted.
    """

    def __init__(
        self,
        instances: InstanceRegistry,
        detector: CategoryDetector | None = None,
        *,
        known_categories: Sequence[str] = (),
    ) -> None:
        self._instances = instances
        self._detector = detector or StaticCategoryDetector()
        self._known = frozenset(known_categories)

    @property
    def detector(self) -> CategoryDetector:
        return self._detector

    def resolve_category(self, category: str | None = None) -> str:
        """Return *category* if the host recognizes it, else the detected one."""
        if category is not None and (not self._known or category in self._known):
            return category
        return self._detector.detect_current_category()

    def instances_for_category(self, category: str | None = None) -> list[str]:
        """Names of instances applicable to *category*, in registration order."""
        resolved = self.resolve_category(category)
        return [instance.name for instance in self._instances if instance.applies_to(resolved)]

    def current_instances(self) -> list[str]:
        """Names of instances applicable to the detected current category."""
        return self.instances_for_category(None)

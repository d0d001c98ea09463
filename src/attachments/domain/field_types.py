"""Field type registry and reverse type resolution.

The registry maps a type key to a :class:`Field` subclass. It is the single
source of truth: :class:`TypeResolver` derives its reverse index from it
lazily and rebuilds the index whenever the registry changes.

INVARIANT: the built-in ``text`` type is always registered. A failed
external registration of ``text`` leaves it in place; a successful one
overwrites it.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Union

from attachments.domain.fields import Field, TextField

if TYPE_CHECKING:
    from collections.abc import ItemsView, KeysView

logger = logging.getLogger(__name__)

#: A field type source: a Field subclass or a locator string (see
#: :func:`attachments.infrastructure.loader.load_field_type`).
FieldTypeSource = Union[type[Field], str]

FieldTypeLoader = Callable[[FieldTypeSource], Union[type[Field], None]]

BUILTIN_FIELD_TYPES: dict[str, type[Field]] = {
    "text": TextField,
}


def _load_class_only(source: FieldTypeSource) -> type[Field] | None:
    if inspect.isclass(source) and issubclass(source, Field):
        return source
    return None


class FieldTypeRegistry:
    """Ordered mapping of type key -> Field implementation.

    Overwriting a key keeps its original position in iteration order.
    """

    def __init__(self, *, builtins: bool = True) -> None:
        self._types: dict[str, type[Field]] = {}
        self._version = 0
        if builtins:
            for key, implementation in BUILTIN_FIELD_TYPES.items():
                self.register(key, implementation)

    def register(self, key: str, implementation: type[Field]) -> None:
        """Insert or overwrite the implementation for *key*."""
        if not (inspect.isclass(implementation) and issubclass(implementation, Field)):
            msg = f"Field type {key!r} must be a Field subclass, got {implementation!r}"
            raise TypeError(msg)
        self._types[key] = implementation
        self._version += 1
        logger.debug("Registered field type %s -> %s", key, implementation.__qualname__)

    def resolve(self, key: str) -> type[Field] | None:
        return self._types.get(key)

    def extend(
        self,
        contributions: Mapping[str, FieldTypeSource],
        loader: FieldTypeLoader | None = None,
    ) -> list[str]:
        """Load and register each ``{key: source}`` contribution.

        Sources that fail to load are skipped with a warning; the registry
        keeps whatever it already had for that key.

        Returns the keys that were registered.
        """
        load = loader or _load_class_only
        registered: list[str] = []
        for key, source in contributions.items():
            implementation = load(source)
            if implementation is None:
                logger.warning("Skipping field type %r: could not load %r", key, source)
                continue
            self.register(key, implementation)
            registered.append(key)
        return registered

    @property
    def version(self) -> int:
        """Monotonic counter bumped on every registration."""
        return self._version

    def keys(self) -> KeysView[str]:
        return self._types.keys()

    def items(self) -> ItemsView[str, type[Field]]:
        return self._types.items()

    def __contains__(self, key: object) -> bool:
        return key in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)


class TypeResolver:
    """Recover the registered type key of a concrete Field.

    Matching is by exact implementation class. When several keys share an
    implementation, the first key in registry order wins; which key that is
    after re-registration is not a contract callers should rely on.
    """

    def __init__(self, registry: FieldTypeRegistry) -> None:
        self._registry = registry
        self._index: dict[type[Field], str] = {}
        self._indexed_version = -1

    def type_of(self, field: Field) -> str | None:
        """Return the type key for *field*, or ``None`` if no type matches."""
        if self._indexed_version != self._registry.version:
            self._rebuild()
        return self._index.get(type(field))

    def display_type(self, field: Field) -> str | None:
        """Prefer the factory's type tag, falling back to reverse lookup."""
        return field.type or self.type_of(field)

    def _rebuild(self) -> None:
        index: dict[type[Field], str] = {}
        for key, implementation in self._registry.items():
            index.setdefault(implementation, key)
        self._index = index
        self._indexed_version = self._registry.version

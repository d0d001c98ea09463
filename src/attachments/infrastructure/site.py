"""Site — the application context that owns every registry.

The Site is the single dependency injected into every service. It builds
its registries in a fixed bootstrap order:

1. **Field types**: built-ins, then ``[field_types]`` from the config, then
   each plugin's ``attachments_fields`` filter, then each plugin's
   ``register_field_types`` result. Every source is loaded; failures are
   logged and skipped.
2. **Instances**: the default ``attachments`` instance (unless disabled),
   then ``[instances.*]`` from the config, then each plugin's
   ``register_instances``.
3. **Resolvers**: category and type resolution over the finished registries.

Registries are read-only after bootstrap. :meth:`reset` rebuilds them from
the same settings and plugins, which is how a stateless host gets
request-scoped registries.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any

from attachments.config.settings import AttachmentsSettings
from attachments.domain.factory import FieldFactory
from attachments.domain.field_types import BUILTIN_FIELD_TYPES, FieldTypeRegistry, TypeResolver
from attachments.domain.i18n import load_translations
from attachments.domain.instances import (
    DEFAULT_INSTANCE,
    CategoryDetector,
    InstanceRegistry,
    InstanceResolver,
)
from attachments.infrastructure.loader import load_field_type
from attachments.plugins.manager import PluginCategoryDetector, PluginManager

if TYPE_CHECKING:
    from pathlib import Path

    from attachments.config.models import AttachmentsConfig
    from attachments.infrastructure.markup import MarkupRenderer

logger = logging.getLogger(__name__)


class Site:
    """Owns the field type registry, instance registry, and resolvers.

    Args:
        settings: Unified settings; discovered from the CWD when omitted.
        plugins: A pre-built plugin manager. When omitted, plugins are
            discovered according to the ``[plugins]`` section.
        detector: Overrides the plugin-backed category detector.
    """

    def __init__(
        self,
        settings: AttachmentsSettings | None = None,
        *,
        plugins: PluginManager | None = None,
        detector: CategoryDetector | None = None,
    ) -> None:
        self.settings = settings or AttachmentsSettings.from_cli()
        self.config: AttachmentsConfig = self.settings.to_config()
        self._plugins = plugins if plugins is not None else self._load_plugins()
        self._detector_override = detector
        self._markup: MarkupRenderer | None = None
        self._build()

    @property
    def root(self) -> Path:
        return self.settings.site_root

    @property
    def plugins(self) -> PluginManager:
        return self._plugins

    @property
    def markup(self) -> MarkupRenderer:
        """Markup renderer (created lazily on first access)."""
        if self._markup is None:
            from attachments.infrastructure.markup import MarkupRenderer

            self._markup = MarkupRenderer(
                self.instances,
                self.types,
                self.resolver,
                site_root=self.root,
            )
        return self._markup

    def reset(self) -> None:
        """Rebuild every registry from the same settings and plugins."""
        logger.debug("Resetting site registries")
        self._markup = None
        self._build()

    # ------------------------------------------------------------------
    # Bootstrap
    # ------------------------------------------------------------------

    def _load_plugins(self) -> PluginManager:
        pm = PluginManager()
        plugins_cfg = self.config.plugins
        if plugins_cfg.enabled:
            pm.discover_and_load(
                local_dir=self.root / plugins_cfg.local_dir,
                entry_points=plugins_cfg.entry_points,
            )
        return pm

    def _build(self) -> None:
        site_cfg = self.config.site
        locale_dir = self.root / site_cfg.locale_dir if site_cfg.locale_dir else None
        self.translations = load_translations(locale_dir, site_cfg.languages)

        self.field_types = self._build_field_types()
        self.factory = FieldFactory(self.field_types, translator=self.translations.gettext)
        self.instances = self._build_instances()
        self.types = TypeResolver(self.field_types)

        detector = self._detector_override or PluginCategoryDetector(
            self._plugins, default=site_cfg.default_category
        )
        self.resolver = InstanceResolver(
            self.instances,
            detector,
            known_categories=site_cfg.categories,
        )
        logger.debug(
            "Site bootstrapped: %d field types, %d instances",
            len(self.field_types),
            len(self.instances),
        )

    def _build_field_types(self) -> FieldTypeRegistry:
        registry = FieldTypeRegistry()
        sources: dict[str, Any] = {**BUILTIN_FIELD_TYPES, **self.config.field_types}
        sources = self._plugins.filter_field_types(sources)
        sources.update(self._plugins.collect_field_types())
        registry.extend(sources, loader=functools.partial(load_field_type, base_dir=self.root))
        return registry

    def _build_instances(self) -> InstanceRegistry:
        instances = InstanceRegistry(self.factory)
        if self.config.site.register_default_instance:
            instances.register(DEFAULT_INSTANCE)
        for name, instance_cfg in self.config.instances.items():
            instances.register(name, instance_cfg.to_params())
        self._plugins.register_instances(instances)
        return instances

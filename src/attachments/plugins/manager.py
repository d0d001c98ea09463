"""Plugin discovery, loading, and setup-hook dispatch.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus local directory discovery from ``.attachments/plugins/``.
Capabilities: field type filters, explicit field type registration,
instance registration, current-category detection.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pluggy

from attachments.domain.instances import DEFAULT_CATEGORY
from attachments.plugins.hookspecs import PROJECT_NAME, AttachmentsHookSpec

if TYPE_CHECKING:
    from attachments.domain.fields import Field
    from attachments.domain.instances import InstanceRegistry

ENTRY_POINT_GROUP = "attachments.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch.

    Setup hooks are invoked per plugin in registration order so that
    filter-style hooks see the output of the plugin before them.
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(AttachmentsHookSpec)
        self._loaded: bool = False

    def discover_and_load(
        self,
        *,
        local_dir: Path | None = None,
        entry_points: bool = True,
    ) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Returns a list of loaded plugin names.
        """
        if entry_points:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered plugins in registration order."""
        return [plugin for _name, plugin in self._iter_plugins()]

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins in registration order."""
        return [name for name, _plugin in self._iter_plugins()]

    # ------------------------------------------------------------------
    # Setup hooks
    # ------------------------------------------------------------------

    def filter_field_types(self, field_types: dict[str, Any]) -> dict[str, Any]:
        """Pass *field_types* through every ``attachments_fields`` implementation."""
        current = dict(field_types)
        for name, plugin in self._iter_plugins():
            hook = getattr(plugin, "attachments_fields", None)
            if hook is None:
                continue
            try:
                result = hook(field_types=dict(current))
            except Exception:
                logger.warning("Field type filter failed in plugin %s", name, exc_info=True)
                continue
            if result is None:
                continue
            if not isinstance(result, dict):
                logger.warning("Plugin %s returned a non-dict field type mapping", name)
                continue
            current = result
        return current

    def collect_field_types(self) -> dict[str, type[Field]]:
        """Merge the ``register_field_types`` results of every plugin."""
        collected: dict[str, type[Field]] = {}
        for name, plugin in self._iter_plugins():
            hook = getattr(plugin, "register_field_types", None)
            if hook is None:
                continue
            try:
                type_map = hook()
            except Exception:
                logger.warning(
                    "Failed to collect field types from plugin %s", name, exc_info=True
                )
                continue
            if type_map is None:
                continue
            if not isinstance(type_map, dict):
                logger.warning("Plugin %s returned non-dict field type registrations", name)
                continue
            collected.update(type_map)
        return collected

    def register_instances(self, instances: InstanceRegistry) -> None:
        """Let every plugin register instances on *instances*."""
        for name, plugin in self._iter_plugins():
            hook = getattr(plugin, "register_instances", None)
            if hook is None:
                continue
            try:
                hook(instances=instances)
            except Exception:
                logger.warning(
                    "Failed to register instances from plugin %s", name, exc_info=True
                )

    def detect_current_category(self) -> str | None:
        """Ask plugins for the current category (first non-None answer wins)."""
        try:
            return self._pm.hook.detect_current_category()
        except Exception:
            logger.warning("Category detection failed", exc_info=True)
            return None

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module. Classes inside the module that carry pluggy hookimpl-decorated
        methods are instantiated and registered.

        Errors are logged as warnings but never raised.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"attachments_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue
                if not self._has_hook_impls(obj):
                    continue
                try:
                    instance = obj()
                    self.register_plugin(instance, name=module_name)
                    logger.debug("Loaded local plugin %s from %s", obj.__name__, py_file)
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly; hooks on
        class objects would be called with ``self`` unbound.
        """
        for plugin in self.get_plugins():
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    def _iter_plugins(self) -> Iterator[tuple[str, object]]:
        for name, plugin in self._pm.list_name_plugin():
            if plugin is not None:
                yield name, plugin

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("attachments")`` sets an
        ``attachments_impl`` attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, f"{PROJECT_NAME}_impl", None):
                return True
        return False


class PluginCategoryDetector:
    """Category detector backed by the ``detect_current_category`` hook.

    Falls back to *default* when no plugin answers.
    """

    def __init__(self, plugins: PluginManager, default: str = DEFAULT_CATEGORY) -> None:
        self._plugins = plugins
        self.default = default

    def detect_current_category(self) -> str:
        detected = self._plugins.detect_current_category()
        return detected or self.default

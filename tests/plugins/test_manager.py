"""Tests for PluginManager setup hooks and category detection."""

from __future__ import annotations

from typing import Any

import pluggy
import pytest

from attachments.domain.factory import FieldFactory
from attachments.domain.field_types import FieldTypeRegistry
from attachments.domain.instances import InstanceRegistry
from attachments.plugins.manager import PluginCategoryDetector, PluginManager
from tests.conftest import WysiwygField

hookimpl = pluggy.HookimplMarker("attachments")


class _AddColor:
    @hookimpl
    def attachments_fields(self, field_types: dict[str, Any]) -> dict[str, Any]:
        field_types["color"] = "color.py:ColorField"
        return field_types


class _DropColor:
    @hookimpl
    def attachments_fields(self, field_types: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in field_types.items() if k != "color"}


class _BadFilter:
    @hookimpl
    def attachments_fields(self, field_types: dict[str, Any]) -> Any:
        return ["not", "a", "dict"]


class _ExplodingFilter:
    @hookimpl
    def attachments_fields(self, field_types: dict[str, Any]) -> dict[str, Any]:
        raise RuntimeError("boom")


class _PassThrough:
    @hookimpl
    def attachments_fields(self, field_types: dict[str, Any]) -> None:
        return None


class _WysiwygTypes:
    @hookimpl
    def register_field_types(self) -> dict[str, type[WysiwygField]]:
        return {"wysiwyg": WysiwygField}


class _StoryInstances:
    @hookimpl
    def register_instances(self, instances: InstanceRegistry) -> None:
        instances.register("story", {"post_type": "story"})


class _BrokenInstances:
    @hookimpl
    def register_instances(self, instances: InstanceRegistry) -> None:
        raise ValueError("nope")


class _Detector:
    def __init__(self, answer: str | None) -> None:
        self.answer = answer

    @hookimpl
    def detect_current_category(self) -> str | None:
        return self.answer


@pytest.fixture
def instances() -> InstanceRegistry:
    return InstanceRegistry(FieldFactory(FieldTypeRegistry()))


class TestRegistration:
    def test_register_and_list(self, plugins: PluginManager) -> None:
        plugins.register_plugin(_AddColor())
        plugins.register_plugin(_DropColor(), name="dropper")
        assert plugins.list_plugin_names() == ["_AddColor", "dropper"]
        assert len(plugins.get_plugins()) == 2

    def test_unregister(self, plugins: PluginManager) -> None:
        plugin = _AddColor()
        plugins.register_plugin(plugin)
        plugins.unregister(plugin)
        assert plugins.get_plugins() == []

    def test_not_loaded_until_discovery(self, plugins: PluginManager) -> None:
        assert plugins.is_loaded is False


class TestFilterFieldTypes:
    def test_no_plugins_returns_copy(self, plugins: PluginManager) -> None:
        original = {"text": "x"}
        result = plugins.filter_field_types(original)
        assert result == original
        assert result is not original

    def test_chained_in_registration_order(self, plugins: PluginManager) -> None:
        plugins.register_plugin(_AddColor())
        plugins.register_plugin(_DropColor())
        assert plugins.filter_field_types({"text": "x"}) == {"text": "x"}

    def test_reverse_order(self, plugins: PluginManager) -> None:
        plugins.register_plugin(_DropColor())
        plugins.register_plugin(_AddColor())
        assert "color" in plugins.filter_field_types({"text": "x"})

    def test_invalid_results_are_skipped(self, plugins: PluginManager) -> None:
        plugins.register_plugin(_AddColor())
        plugins.register_plugin(_BadFilter())
        plugins.register_plugin(_ExplodingFilter())
        plugins.register_plugin(_PassThrough())
        assert plugins.filter_field_types({"text": "x"}) == {
            "text": "x",
            "color": "color.py:ColorField",
        }


class TestCollectAndRegister:
    def test_collect_field_types(self, plugins: PluginManager) -> None:
        plugins.register_plugin(_WysiwygTypes())
        assert plugins.collect_field_types() == {"wysiwyg": WysiwygField}

    def test_register_instances(
        self, plugins: PluginManager, instances: InstanceRegistry
    ) -> None:
        plugins.register_plugin(_BrokenInstances())
        plugins.register_plugin(_StoryInstances())
        plugins.register_instances(instances)
        assert instances.names() == ["story"]


class TestCategoryDetection:
    def test_no_plugins(self, plugins: PluginManager) -> None:
        assert plugins.detect_current_category() is None
        assert PluginCategoryDetector(plugins).detect_current_category() == "post"

    def test_first_answer_wins(self, plugins: PluginManager) -> None:
        plugins.register_plugin(_Detector(None), name="silent")
        plugins.register_plugin(_Detector("product"), name="shop")
        assert plugins.detect_current_category() == "product"

    def test_detector_default(self, plugins: PluginManager) -> None:
        plugins.register_plugin(_Detector(None), name="silent")
        assert PluginCategoryDetector(plugins, default="page").detect_current_category() == "page"

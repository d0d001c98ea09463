"""Tests for InstanceService."""

from __future__ import annotations

from pathlib import Path

from attachments.infrastructure.site import Site
from attachments.services.base import NOT_FOUND
from attachments.services.instances import InstanceService
from tests.conftest import build_site, write_config

_CONFIG = """\
[instances.gallery]
label = "Gallery"
post_type = ["product"]
limit = 4
fields = [{ name = "credit", label = "Credit" }]
"""


class TestListInstances:
    def test_all_instances(self, site_root: Path) -> None:
        write_config(site_root, _CONFIG)
        result = InstanceService(build_site(site_root)).list_instances()
        assert result.ok
        assert result.data["count"] == 2
        assert "category" not in result.data
        assert result.data["items"] == [
            {
                "name": "attachments",
                "label": "Attachments",
                "categories": ["page", "post"],
                "limit": -1,
                "fields": 2,
            },
            {
                "name": "gallery",
                "label": "Gallery",
                "categories": ["product"],
                "limit": 4,
                "fields": 1,
            },
        ]

    def test_filtered_by_category(self, site_root: Path) -> None:
        write_config(site_root, _CONFIG)
        result = InstanceService(build_site(site_root)).list_instances("product")
        assert result.data["category"] == "product"
        assert [item["name"] for item in result.data["items"]] == ["gallery"]

    def test_unrecognised_category_falls_back(self, site_root: Path) -> None:
        write_config(site_root, '[site]\ncategories = ["post", "product"]\n' + _CONFIG)
        result = InstanceService(build_site(site_root)).list_instances("bogus")
        assert result.data["category"] == "post"
        assert [item["name"] for item in result.data["items"]] == ["attachments"]


class TestGetInstance:
    def test_bound_fields(self, site: Site) -> None:
        result = InstanceService(site).get_instance("attachments")
        assert result.ok
        assert result.data["name"] == "attachments"
        assert result.data["button_text"] == "Attach"
        assert result.data["fields"][0] == {
            "name": "title",
            "type": "text",
            "label": "Title",
            "field_name": "attachments[attachments][title]",
            "field_id": "attachments-attachments-title",
        }

    def test_lookup_uses_instance_key(self, site: Site) -> None:
        site.instances.register("Product Gallery")
        result = InstanceService(site).get_instance("Product Gallery")
        assert result.ok
        assert result.data["name"] == "product_gallery"

    def test_not_found(self, site: Site) -> None:
        result = InstanceService(site).get_instance("missing")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == NOT_FOUND
        assert result.error.detail["available"] == ["attachments"]

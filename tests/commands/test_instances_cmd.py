"""Tests for the instances command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from attachments.cli import cli
from tests.conftest import write_config

_CONFIG = """\
[instances.gallery]
label = "Gallery"
post_type = "product"
limit = 3
"""


@pytest.mark.usefixtures("_isolated_site")
class TestInstancesList:
    def test_default_instance(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["instances", "list"])
        assert result.exit_code == 0
        assert "attachments" in result.output
        assert "unlimited" in result.output

    def test_configured_instances_quiet(self, cli_runner: CliRunner, site_root: Path) -> None:
        write_config(site_root, _CONFIG)
        result = cli_runner.invoke(cli, ["-q", "instances", "list"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["attachments", "gallery"]

    def test_category_filter(self, cli_runner: CliRunner, site_root: Path) -> None:
        write_config(site_root, _CONFIG)
        result = cli_runner.invoke(cli, ["--json", "instances", "list", "--category", "product"])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["category"] == "product"
        assert [item["name"] for item in data["items"]] == ["gallery"]

    def test_explicit_config_flag(self, cli_runner: CliRunner, site_root: Path) -> None:
        custom = site_root / "conf" / "site.toml"
        custom.parent.mkdir()
        custom.write_text("[site]\nregister_default_instance = false\n", encoding="utf-8")
        result = cli_runner.invoke(cli, ["-c", str(custom), "-q", "instances", "list"])
        assert result.exit_code == 0
        assert result.output.strip() == ""


@pytest.mark.usefixtures("_isolated_site")
class TestInstancesShow:
    def test_show_default(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["instances", "show", "attachments"])
        assert result.exit_code == 0
        assert "title" in result.output
        assert "caption" in result.output

    def test_show_verbose_includes_input_names(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "instances", "show", "attachments"])
        assert result.exit_code == 0
        assert "attachments[attachments][title]" in result.output

    def test_show_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["instances", "show", "nope"])
        assert result.exit_code == 1
        assert "No instance registered as 'nope'" in result.output

    def test_show_json_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "instances", "show", "nope"])
        assert result.exit_code == 1
        assert '"code": "NOT_FOUND"' in result.output

"""Tests for the root CLI group."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from attachments import __version__
from attachments.cli import cli


class TestRootGroup:
    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("fields", "instances", "render"):
            assert name in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    @pytest.mark.usefixtures("_isolated_site")
    def test_no_subcommand_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage:" in result.output

    @pytest.mark.usefixtures("_isolated_site")
    def test_group_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["instances", "--examples"])
        assert result.exit_code == 0
        assert "attachments instances show attachments" in result.output

    @pytest.mark.usefixtures("_isolated_site")
    def test_invalid_config(self, cli_runner: CliRunner, site_root: Path) -> None:
        (site_root / "attachments.toml").write_text("[site\n", encoding="utf-8")
        result = cli_runner.invoke(cli, ["instances", "list"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.output

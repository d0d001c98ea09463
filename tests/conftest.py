"""Shared pytest fixtures and test helpers for attachments tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner
from markupsafe import Markup

from attachments.config.settings import AttachmentsSettings
from attachments.domain.field_types import FieldTypeRegistry
from attachments.domain.fields import BoundField, Field
from attachments.infrastructure.site import Site
from attachments.plugins.manager import PluginManager


class WysiwygField(Field):
    """Rich text field used to exercise third-party field types."""

    def __init__(self, name: str = "wysiwyg", label: str = "WYSIWYG") -> None:
        super().__init__(name, label)

    def html(self, bound: BoundField) -> Markup:
        return Markup('<textarea name="{0}" id="{1}">{2}</textarea>').format(
            bound.field_name, bound.field_id, self.format_value_for_input(bound.value)
        )


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Isolate tests from a developer's config and restore logging."""
    monkeypatch.delenv("ATTACHMENTS_CONFIG", raising=False)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    pkg_level = logging.getLogger("attachments").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("attachments").setLevel(pkg_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> FieldTypeRegistry:
    """Field type registry with only the built-in types."""
    return FieldTypeRegistry()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary site directory (no config file)."""
    return tmp_path


@pytest.fixture
def plugins() -> PluginManager:
    """Plugin manager with nothing discovered."""
    return PluginManager()


@pytest.fixture
def site(site_root: Path, plugins: PluginManager) -> Site:
    """Bootstrapped site on a temp directory with default configuration."""
    return build_site(site_root, plugins=plugins)


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp site root so the CLI discovers its config there.

    Entry point discovery is disabled so installed plugins cannot leak in.
    """
    monkeypatch.chdir(site_root)
    monkeypatch.setenv("ATTACHMENTS_PLUGINS__ENTRY_POINTS", "false")


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_config(root: Path, text: str) -> Path:
    """Write an ``attachments.toml`` into *root* and return its path."""
    path = root / "attachments.toml"
    path.write_text(text, encoding="utf-8")
    return path


def build_site(root: Path, *, plugins: PluginManager | None = None, **kwargs: object) -> Site:
    """Bootstrap a Site for *root*, reading its ``attachments.toml`` if present."""
    settings = AttachmentsSettings.from_cli(site_root=root)
    return Site(settings, plugins=plugins or PluginManager(), **kwargs)  # type: ignore[arg-type]

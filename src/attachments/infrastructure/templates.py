"""Shared Jinja2 template loading with per-site override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    select_autoescape,
)


def build_template_environment(group: str, *, site_root: Path | None = None) -> Environment:
    """Build an autoescaping Jinja2 environment with user overrides first.

    User overrides are loaded from ``.attachments/templates/`` inside the
    site root, either namespaced by *group* or flat.
    """

    loaders: list[BaseLoader] = []
    if site_root is not None:
        template_root = site_root / ".attachments" / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("attachments", f"templates/{group}"))
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(enabled_extensions=("html", "html.j2")),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )

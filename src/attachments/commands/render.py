"""Standalone command: render form markup."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from attachments.commands._base import AttachmentsCommand

if TYPE_CHECKING:
    from attachments.commands._context import AppContext


@click.command(
    cls=AttachmentsCommand,
    examples="""\
  attachments render
  attachments render --category page
  attachments render --instance gallery > gallery.html""",
)
@click.option("--category", default=None, help="Content category (default: detected).")
@click.option("--instance", default=None, help="Render a single instance by name.")
@click.pass_obj
def render(app: AppContext, category: str | None, instance: str | None) -> None:
    """Render meta boxes and attachment templates for a category."""
    from attachments.services.render import RenderService

    app.emit(RenderService(app.site).render(category=category, instance=instance))

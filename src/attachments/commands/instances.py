"""Command group: instances (list, show)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from attachments.commands._base import AttachmentsGroup

if TYPE_CHECKING:
    from attachments.commands._context import AppContext

_INSTANCES_EXAMPLES = """\
  attachments instances list
  attachments instances list --category page
  attachments instances show attachments"""


@click.group(cls=AttachmentsGroup, examples=_INSTANCES_EXAMPLES)
@click.pass_obj
def instances(app: AppContext) -> None:
    """Inspect registered attachments instances."""


@instances.command(
    "list",
    examples="""\
  attachments instances list
  attachments instances list --category page
  attachments --json instances list --category product""",
)
@click.option("--category", default=None, help="Only instances eligible for this category.")
@click.pass_obj
def list_cmd(app: AppContext, category: str | None) -> None:
    """List instances in registration order."""
    from attachments.services.instances import InstanceService

    app.emit(InstanceService(app.site).list_instances(category))


@instances.command(
    examples="""\
  attachments instances show attachments
  attachments -v instances show gallery"""
)
@click.argument("name")
@click.pass_obj
def show(app: AppContext, name: str) -> None:
    """Show one instance and its fields."""
    from attachments.services.instances import InstanceService

    app.emit(InstanceService(app.site).get_instance(name))

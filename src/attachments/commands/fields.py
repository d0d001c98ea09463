"""Command group: field types (list, create)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from attachments.commands._base import AttachmentsGroup

if TYPE_CHECKING:
    from attachments.commands._context import AppContext

_FIELDS_EXAMPLES = """\
  attachments fields list
  attachments fields create --type text --name "Photo Credit" --label "Credit"
  attachments --json fields create --type wysiwyg --name Body"""


@click.group(cls=AttachmentsGroup, examples=_FIELDS_EXAMPLES)
@click.pass_obj
def fields(app: AppContext) -> None:
    """Inspect registered field types."""


@fields.command(
    "list",
    examples="""\
  attachments fields list
  attachments -q fields list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List registered field types in registration order."""
    from attachments.services.fields import FieldService

    app.emit(FieldService(app.site).list_field_types())


@fields.command(
    examples="""\
  attachments fields create
  attachments fields create --type text --name "Photo Credit" --label Credit"""
)
@click.option("--type", "type_key", default=None, help="Field type key (default: text).")
@click.option("--name", default=None, help="Field name (default: title).")
@click.option("--label", default=None, help="Field label (default: Title).")
@click.pass_obj
def create(
    app: AppContext,
    type_key: str | None,
    name: str | None,
    label: str | None,
) -> None:
    """Build a field through the factory and show how it resolves."""
    from attachments.services.fields import FieldService

    params = {
        key: value
        for key, value in (("type", type_key), ("name", name), ("label", label))
        if value is not None
    }
    app.emit(FieldService(app.site).create_field(params))

"""Click base classes that add an eager ``--examples`` flag.

``--examples`` prints the usage examples given at declaration time and
exits, which keeps ``--help`` short.
"""

from __future__ import annotations

from typing import Any

import click


def _examples_option(examples: str) -> click.Option:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
            ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show,
        help="Show usage examples.",
    )


class _ExamplesMixin:
    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        if examples:
            self.params.append(_examples_option(examples))


class AttachmentsCommand(_ExamplesMixin, click.Command):
    """Command accepting ``examples=`` in its decorator."""


class AttachmentsGroup(_ExamplesMixin, click.Group):
    """Group accepting ``examples=``; its subcommands do too."""

    command_class = AttachmentsCommand

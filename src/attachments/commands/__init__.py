"""Subcommand modules for attachments.

Provides register_commands() which uses deferred imports to keep
``attachments --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root CLI group.

    2 groups (have subcommands) + 1 standalone command.
    """
    # --- Groups ---
    from attachments.commands.fields import fields
    from attachments.commands.instances import instances

    cli.add_command(fields)
    cli.add_command(instances)

    # --- Standalone commands ---
    from attachments.commands.render import render

    cli.add_command(render)

"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Site construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from attachments.config.logging import configure_logging
from attachments.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from attachments.config.settings import AttachmentsSettings
    from attachments.infrastructure.site import Site
    from attachments.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The site is bootstrapped on first use so ``--help`` and ``--version``
    never load plugins or field type sources.
    """

    def __init__(self, settings: AttachmentsSettings) -> None:
        self.settings = settings
        self._site: Site | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def site(self) -> Site:
        """The site instance (created lazily on first access)."""
        if self._site is None:
            from attachments.infrastructure.site import Site

            self._site = Site(self.settings)
        return self._site

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

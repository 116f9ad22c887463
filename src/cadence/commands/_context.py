"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy service construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cadence.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from cadence.config.settings import CadenceSettings
    from cadence.services.result import ServiceResult
    from cadence.services.schedule import ScheduleService


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: CadenceSettings) -> None:
        self.settings = settings
        self._schedule: ScheduleService | None = None

        from cadence.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

        if settings.verbose:
            from cadence.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def schedule(self) -> ScheduleService:
        """The schedule service (created lazily on first access)."""
        if self._schedule is None:
            from cadence.services.schedule import ScheduleService

            self._schedule = ScheduleService(self.settings)
        return self._schedule

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
            if settings.quiet and not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

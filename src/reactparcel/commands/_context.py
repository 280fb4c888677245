"""AppContext: per-invocation settings, logging setup, and result emission."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from reactparcel.config.logging import configure_logging
from reactparcel.output.formatters import OutputSettings, format_result
from reactparcel.output.renderers import render_stage

if TYPE_CHECKING:
    from reactparcel.config.settings import ReactParcelSettings
    from reactparcel.domain.types import Stage
    from reactparcel.services.result import ServiceResult


class AppContext:
    """State shared by the CLI for a single run.

    Configures structured logging on construction and turns on stage
    telemetry for ``--verbose``.
    """

    def __init__(self, settings: ReactParcelSettings) -> None:
        self.settings = settings

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from reactparcel.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def report_stage(self, stage: Stage, detail: dict[str, Any]) -> None:
        """Print progress as stages start (suppressed for ``--json``/``--quiet``)."""
        if self.settings.json_output or self.settings.quiet:
            return
        text = render_stage(stage, detail)
        if text:
            click.echo(text)

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and apply exit semantics.

        * Success: stdout, return normally. Warnings go to stderr outside
          JSON mode.
        * Failure: stderr, exit code 1.
        """
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

"""Root CLI command: ``create-react-parcel-app <project-directory>``."""

from __future__ import annotations

import click

from reactparcel import PROG_NAME, __version__
from reactparcel.commands._base import ScaffoldCommand
from reactparcel.commands._context import AppContext
from reactparcel.config.settings import ReactParcelSettings

_EXAMPLES = """\
  create-react-parcel-app my-app
  create-react-parcel-app ../projects/dashboard
  create-react-parcel-app --skip-install my-app
  create-react-parcel-app --json -q my-app
  REACTPARCEL_INSTALL__PACKAGE_MANAGER=pnpm create-react-parcel-app my-app"""


@click.command(
    PROG_NAME,
    cls=ScaffoldCommand,
    examples=_EXAMPLES,
    options_metavar="[OPTIONS]",
)
@click.version_option(version=__version__, prog_name=PROG_NAME)
@click.argument("project_directory", metavar="<project-directory>", required=False, default="")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with stage timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--skip-install", is_flag=True, help="Write files but install no packages.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
def cli(
    project_directory: str,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    skip_install: bool,
    config_path: str | None,
) -> None:
    """Create a new React app bundled with Parcel in <project-directory>."""
    settings = ReactParcelSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        skip_install=skip_install,
    )
    app = AppContext(settings)

    from reactparcel.services.scaffold import ScaffoldService

    service = ScaffoldService(settings, on_stage=app.report_stage)
    app.emit(service.create_app(project_directory))

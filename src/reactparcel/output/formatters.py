"""Pick the output mode for a ServiceResult.

``--json`` serializes the result verbatim, ``--quiet`` prints one line,
and the default is the Rich human rendering.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from reactparcel.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from reactparcel.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output-mode flags taken from the global settings."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format *result* for display according to *settings*."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)

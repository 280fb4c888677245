"""Rich renderers for scaffold results and stage progress.

Each renderer writes to a StringIO-backed Console and returns the text.
Success renderers are dispatched by ``result.op``; errors by
``result.error.code``. Unknown ops and codes fall back to generic
renderers.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.text import Text

from reactparcel import PROG_NAME
from reactparcel.domain.types import Stage
from reactparcel.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from reactparcel.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        code = result.error.code if result.error else ""
        _ERROR_RENDERERS.get(code, _render_unexpected)(result, console)
        if verbose and result.error and result.error.detail:
            console.print(Text("  detail:", style="rp.key"))
            for k, v in result.error.detail.items():
                console.print(f"    {k}: {v}", markup=False)

    if verbose:
        _render_meta(console, result)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One line per result for ``--quiet``."""
    if result.ok:
        return f"OK: {result.op}"
    msg = result.error.message if result.error else "Unknown error"
    return f"ERROR: {result.op}: {msg}"


def render_stage(stage: Stage, detail: dict[str, Any]) -> str:
    """Progress text printed as a stage starts; empty for silent stages."""
    console = create_console()

    if stage is Stage.DIRECTORY_PREPARING:
        console.print(
            Text("Creating a new React app in "),
            Text(detail["path"], style="rp.path"),
            Text("."),
            sep="",
        )
        console.print()
    elif stage in (Stage.INSTALLING_RUNTIME, Stage.INSTALLING_DEV) and detail.get("packages"):
        console.print()
        console.print(f"Installing {detail['label']}:")
        for package in detail["packages"]:
            console.print(Text("- "), Text(package, style="rp.package"), sep="")
        console.print()
    else:
        return ""

    return get_output(console).rstrip("\n")


# ── Success renderers ─────────────────────────────────────────────────


def _render_create_app(result: ServiceResult, console: Console) -> None:
    data = result.data
    console.print(
        Text("Success!", style="rp.ok"),
        Text(f" Created {data['name']} at {data['path']}"),
        sep="",
    )
    console.print("Inside that directory, you can run several commands:")
    for entry in data.get("commands", []):
        console.print()
        console.print(Text(f"  {entry['command']}", style="rp.command"))
        console.print(f"    {entry['description']}")
    console.print()
    console.print("We suggest that you begin by typing:")
    console.print()
    for step in data.get("next_steps", []):
        console.print(Text(f"  {step}", style="rp.command"))


def _render_generic(result: ServiceResult, console: Console) -> None:
    console.print(Text("OK", style="rp.ok"), Text(f"  {result.op}"), sep="")
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="rp.key"), Text(str(value)), sep="")


# ── Error renderers ───────────────────────────────────────────────────


def _render_missing_directory(result: ServiceResult, console: Console) -> None:
    console.print("Please specify the project directory:")
    console.print(
        Text(f"  {PROG_NAME} ", style="rp.command"),
        Text("<project-directory>", style="rp.path"),
        sep="",
    )
    console.print()
    console.print("For example:")
    console.print(
        Text(f"  {PROG_NAME} ", style="rp.command"),
        Text("my-react-parcel-app", style="rp.path"),
        sep="",
    )


def _render_invalid_name(result: ServiceResult, console: Console) -> None:
    assert result.error is not None
    detail = result.error.detail
    console.print(
        Text("Could not create a project called "),
        Text(f'"{detail.get("name", "")}"', style="rp.name"),
        Text(" because of npm naming restrictions:"),
        sep="",
    )
    for problem in detail.get("problems", []):
        console.print(Text("    "), Text("*", style="rp.bullet"), Text(f" {problem}"), sep="")


def _render_path_not_writable(result: ServiceResult, console: Console) -> None:
    assert result.error is not None
    console.print(result.error.message, markup=False)
    console.print("It is likely you do not have write permissions for this folder.")


def _render_install_failed(result: ServiceResult, console: Console) -> None:
    assert result.error is not None
    console.print()
    console.print("Aborting installation.")
    console.print(
        Text(f"  {result.error.detail.get('command', '')}", style="rp.command"),
        Text(" has failed."),
        sep="",
    )


def _render_unexpected(result: ServiceResult, console: Console) -> None:
    msg = result.error.message if result.error else "Unknown error"
    console.print()
    console.print("Aborting installation.")
    console.print(Text("ERROR", style="rp.error"), Text(f"  {result.op}: {msg}"), sep="")


# ── Meta ──────────────────────────────────────────────────────────────


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta, including the stage timing tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="rp.key"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_span(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}", markup=False)


def _render_span(console: Console, span_data: dict[str, Any], indent: int) -> None:
    duration = span_data.get("duration_ms", 0.0)
    # install stages dominate; flag anything slower than a minute
    style = "bold red" if duration > 60_000 else "rp.key"
    line = Text(" " * indent)
    line.append(f"{duration:>10.2f}ms", style=style)
    line.append(f"  {span_data.get('name', '?')}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append(f"  ({', '.join(f'{k}={v}' for k, v in annotations.items())})")
    console.print(line)
    for child in span_data.get("children", []):
        _render_span(console, child, indent + 2)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "create_app": _render_create_app,
}

_ERROR_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "MISSING_PROJECT_DIRECTORY": _render_missing_directory,
    "INVALID_NAME": _render_invalid_name,
    "PATH_NOT_WRITABLE": _render_path_not_writable,
    "INSTALL_FAILED": _render_install_failed,
}

#!/usr/bin/env python3
"""
pandoc_export.cli.cli

Typer-based CLI for exporting markdown documents through pandoc.

The CLI is a thin host around the export core: it loads a settings record,
snapshots the platform, and renders the values the core returns.

Examples
--------
Export a note to PDF next to the source file:

    pandoc-export export notes/today.md --format pdf

Point at a specific pandoc binary and check it:

    pandoc-export check --pandoc-path /opt/homebrew/bin/pandoc
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

import typer

from pandoc_export.application.results import ToolNotFound
from pandoc_export.application.use_cases import (
    check_pandoc,
    default_output_path,
    export_document,
    preview_folder,
    resolve_export_directory,
)
from pandoc_export.diagnostics import collect_diagnostics
from pandoc_export.errors import PandocExportError, ToolNotFoundError
from pandoc_export.platform import detect_platform
from pandoc_export.resolution.resolver import Resolver
from pandoc_export.schemas import ExportSettings, load_settings
from pandoc_export.types import FORMAT_LABELS, OUTPUT_FORMATS

app = typer.Typer(
    name="pandoc-export",
    help="Export markdown documents to PDF, DOCX, HTML, EPUB or ODT with pandoc.",
    no_args_is_help=True,
)

SETTINGS_HELP = "JSON settings file (camelCase or snake_case keys)."
PANDOC_PATH_HELP = "Path to the pandoc executable, or a bare command name."
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception raised by a command.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"[red]✗ {type(exc).__name__}:[/red] {exc}", err=True)
    if debug:
        typer.echo("\n[dim]Traceback:[/dim]", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _settings(
    settings_file: Path | None,
    **overrides: object,
) -> ExportSettings:
    """Load settings from ``settings_file`` with CLI overrides applied."""
    return load_settings(settings_file, **overrides)


def _check_format(value: str | None) -> str | None:
    if value is not None and value not in OUTPUT_FORMATS:
        raise typer.BadParameter(
            f"Unknown format '{value}'. Choose one of: {', '.join(OUTPUT_FORMATS)}."
        )
    return value


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False, "--debug", help="Show debug logs and full tracebacks on error."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress logs."),
) -> None:
    """Initialize shared CLI state and logging.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug logging and traceback output.
    verbose : bool, default=False
        Whether to enable INFO logging.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)
    elif verbose:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("export")
def export_cmd(
    ctx: typer.Context,
    document: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Markdown document to export.",
    ),
    format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        callback=_check_format,
        help="Target format (pdf, docx, html, epub, odt). Defaults to the settings value.",
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output file. Defaults to the export directory."
    ),
    settings_file: Path | None = typer.Option(
        None, "--settings", envvar="PANDOC_EXPORT_SETTINGS", help=SETTINGS_HELP
    ),
    pandoc_path: str | None = typer.Option(
        None, "--pandoc-path", envvar="PANDOC_EXPORT_PANDOC_PATH", help=PANDOC_PATH_HELP
    ),
    pdf_engine: str | None = typer.Option(
        None, "--pdf-engine", help="PDF engine (auto, wkhtmltopdf, weasyprint, ...)."
    ),
    extra_args: str | None = typer.Option(
        None, "--extra-args", help="Extra pandoc arguments, as one string."
    ),
    export_dir: str | None = typer.Option(
        None, "--export-dir", help="Export directory, relative to the document's folder."
    ),
) -> None:
    """Export DOCUMENT with pandoc.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    document : Path
        Source markdown file.
    format : str | None
        Target format; falls back to ``default_format`` from the settings.
    output : Path | None
        Explicit output path; otherwise ``<export dir>/<stem>.<format>``.
    """
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        settings = _settings(
            settings_file,
            pandoc_path=pandoc_path,
            pdf_engine=pdf_engine,
            custom_arguments=extra_args,
            default_export_directory=export_dir,
        )
        target_format = format or settings.default_format
        if output is None:
            export_directory = resolve_export_directory(settings, document.parent)
            if export_directory.fallback_reason:
                typer.echo(
                    f"[yellow]Warning:[/yellow] {export_directory.fallback_reason}",
                    err=True,
                )
            output = default_output_path(export_directory.path, document.stem, target_format)

        typer.echo(f"Exporting {document.name} as {FORMAT_LABELS[target_format]}...")
        result = export_document(
            document.read_text(encoding="utf-8"),
            document.stem,
            target_format,
            output,
            settings,
            detect_platform(),
        )
    except Exception as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    for warning in result.warnings:
        typer.echo(f"[yellow]Warning:[/yellow] {warning}", err=True)
    if result.ok:
        typer.echo(f"[green]✓ Saved:[/green] {output}")
        return

    typer.echo(f"[red]✗ {result.status}[/red]", err=True)
    if result.remediation:
        typer.echo(result.remediation, err=True)
    if debug and result.command:
        typer.echo(f"[dim]Command:[/dim] {result.command}", err=True)
    code = ToolNotFoundError.exit_code if result.outcome == "tool-not-found" else 1
    raise typer.Exit(code=code)


@app.command("resolve")
def resolve_cmd(
    ctx: typer.Context,
    settings_file: Path | None = typer.Option(
        None, "--settings", envvar="PANDOC_EXPORT_SETTINGS", help=SETTINGS_HELP
    ),
    pandoc_path: str | None = typer.Option(
        None, "--pandoc-path", envvar="PANDOC_EXPORT_PANDOC_PATH", help=PANDOC_PATH_HELP
    ),
) -> None:
    """Print the pandoc executable that exports would use."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        settings = _settings(settings_file, pandoc_path=pandoc_path)
        resolver = Resolver(probe_timeout=settings.probe_timeout)
        found = resolver.resolve_or_raise(settings.pandoc_path, detect_platform())
    except PandocExportError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    typer.echo(f"{found.path} ({found.provenance})")


@app.command("check")
def check_cmd(
    ctx: typer.Context,
    settings_file: Path | None = typer.Option(
        None, "--settings", envvar="PANDOC_EXPORT_SETTINGS", help=SETTINGS_HELP
    ),
    pandoc_path: str | None = typer.Option(
        None, "--pandoc-path", envvar="PANDOC_EXPORT_PANDOC_PATH", help=PANDOC_PATH_HELP
    ),
) -> None:
    """Run ``pandoc --version`` through the resolved executable."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        settings = _settings(settings_file, pandoc_path=pandoc_path)
        result = check_pandoc(settings, detect_platform())
    except PandocExportError as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    if result.ok:
        typer.echo(f"[green]✓ {result.version}[/green]")
        if result.resolved is not None and result.path_differs:
            typer.echo(
                f"Found at {result.resolved.path}; consider setting pandoc_path to it."
            )
        return

    typer.echo(f"[red]✗ {result.invocation.status}[/red]", err=True)
    if result.invocation.stderr.strip():
        typer.echo(result.invocation.stderr.strip(), err=True)
    typer.echo("Troubleshooting:", err=True)
    for index, tip in enumerate(result.tips, start=1):
        typer.echo(f"  {index}. {tip}", err=True)
    code = ToolNotFoundError.exit_code if result.resolved is None else 1
    raise typer.Exit(code=code)


@app.command("folder")
def folder_cmd(
    ctx: typer.Context,
    settings_file: Path | None = typer.Option(
        None, "--settings", envvar="PANDOC_EXPORT_SETTINGS", help=SETTINGS_HELP
    ),
    pandoc_path: str | None = typer.Option(
        None, "--pandoc-path", envvar="PANDOC_EXPORT_PANDOC_PATH", help=PANDOC_PATH_HELP
    ),
) -> None:
    """List the folder that should contain pandoc."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        settings = _settings(settings_file, pandoc_path=pandoc_path)
        preview = preview_folder(
            settings.pandoc_path,
            detect_platform(),
            probe_timeout=settings.probe_timeout,
        )
    except PandocExportError as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    typer.echo(f"Directory: {preview.directory}")
    for entry in preview.entries:
        marker = "*" if entry.highlighted else " "
        kind = "dir " if entry.is_dir else ("exec" if entry.probably_executable else "file")
        typer.echo(f" {marker} [{kind}] {entry.name}")
    if preview.pandoc_found:
        typer.echo("[green]✓ pandoc found in this directory.[/green]")
    else:
        typer.echo("[yellow]pandoc was not found in this directory.[/yellow]")


@app.command("doctor")
def doctor_cmd(
    settings_file: Path | None = typer.Option(
        None, "--settings", envvar="PANDOC_EXPORT_SETTINGS", help=SETTINGS_HELP
    ),
    pandoc_path: str | None = typer.Option(
        None, "--pandoc-path", envvar="PANDOC_EXPORT_PANDOC_PATH", help=PANDOC_PATH_HELP
    ),
) -> None:
    """Print platform facts and where pandoc was (or was not) found."""
    import importlib.metadata as metadata

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in ("pydantic", "typer"):
        try:
            typer.echo(f"{module}: {metadata.version(module)}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    try:
        settings = _settings(settings_file, pandoc_path=pandoc_path)
    except PandocExportError as exc:
        raise typer.Exit(code=_print_error(exc, False))

    platform = detect_platform()
    for line in collect_diagnostics(settings, platform).lines():
        typer.echo(line)

    resolution = Resolver(probe_timeout=settings.probe_timeout).resolve(
        settings.pandoc_path, platform
    )
    if isinstance(resolution, ToolNotFound):
        typer.echo("pandoc: <not found>")
        typer.echo(resolution.message)
    else:
        typer.echo(f"pandoc: {resolution.path} ({resolution.provenance})")


if __name__ == "__main__":
    app()

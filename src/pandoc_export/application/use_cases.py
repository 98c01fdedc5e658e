"""Application use-cases orchestrating resolution and conversion."""

from __future__ import annotations

import logging
from pathlib import Path

from pandoc_export.adapters.filesystem import LocalFileSystem
from pandoc_export.adapters.process import SubprocessRunner
from pandoc_export.application.options import ConversionJob
from pandoc_export.application.ports import FileSystem, ProcessRunner
from pandoc_export.application.results import (
    CheckResult,
    ExportDirectory,
    FolderEntry,
    FolderPreview,
    InvocationResult,
    ToolNotFound,
)
from pandoc_export.diagnostics import log_diagnostics
from pandoc_export.errors import DirectoryCreateFailed, FolderPreviewError
from pandoc_export.invocation.builder import build, execute, version_command
from pandoc_export.platform import TOOL_NAME, PlatformFacts, detect_platform
from pandoc_export.remediation import troubleshooting_tips
from pandoc_export.resolution.resolver import Resolver
from pandoc_export.resolution.strategies import ResolutionContext, which_command
from pandoc_export.schemas import DEFAULT_HINT, DEFAULT_SETTINGS, ExportSettings
from pandoc_export.types import OutputFormat

logger = logging.getLogger(__name__)

SCRIPT_SUFFIXES = (".sh", ".bash", ".py", ".pl", ".rb")


def _not_found_result(missing: ToolNotFound) -> InvocationResult:
    return InvocationResult(
        outcome="tool-not-found",
        exit_status=None,
        stdout="",
        stderr="",
        status="Pandoc not found.",
        remediation=missing.message,
    )


def resolve_export_directory(
    settings: ExportSettings,
    document_root: Path,
) -> ExportDirectory:
    """Return the configured export directory, creating it when needed.

    An empty setting selects ``document_root``; relative settings are joined
    to it. Creation failures fall back to ``document_root``.
    """
    configured = settings.default_export_directory
    if not configured:
        return ExportDirectory(path=document_root)

    target = Path(configured)
    if not target.is_absolute():
        target = document_root / target
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        failure = DirectoryCreateFailed(
            f"Failed to create export directory {target}: {exc}"
        )
        logger.error("%s; falling back to %s", failure, document_root)
        return ExportDirectory(path=document_root, fallback_reason=str(failure))
    return ExportDirectory(path=target)


def default_output_path(directory: Path, document_name: str, format: OutputFormat) -> Path:
    """``<directory>/<document_name>.<format>``."""
    return directory / f"{document_name}.{format}"


def export_document(
    content: str,
    document_name: str,
    format: OutputFormat,
    output_path: Path,
    settings: ExportSettings = DEFAULT_SETTINGS,
    platform: PlatformFacts | None = None,
    *,
    resolver: Resolver | None = None,
    runner: ProcessRunner | None = None,
    fs: FileSystem | None = None,
) -> InvocationResult:
    """Use-case: resolve the converter and export one document.

    Parameters
    ----------
    content : str
        Current text of the document.
    document_name : str
        Base name of the document.
    format : {"pdf", "docx", "html", "epub", "odt"}
        Target format.
    output_path : Path
        Destination file.
    settings : ExportSettings, optional
        Settings record read at call time.
    platform : PlatformFacts | None, optional
        Host snapshot; detected fresh when omitted.
    resolver, runner, fs : optional
        Collaborator overrides.

    Returns
    -------
    InvocationResult
        Classified outcome; expected failures never raise.
    """
    platform = platform or detect_platform()
    runner = runner or SubprocessRunner()
    resolver = resolver or Resolver(
        fs=fs, runner=runner, probe_timeout=settings.probe_timeout
    )

    resolution = resolver.resolve(settings.pandoc_path, platform)
    if isinstance(resolution, ToolNotFound):
        logger.error("export of %s aborted: pandoc not found", document_name)
        log_diagnostics(settings, platform, fs)
        return _not_found_result(resolution)

    job = ConversionJob(
        format=format,
        content=content,
        document_name=document_name,
        output_path=output_path,
        pdf_engine=settings.pdf_engine,
        extra_arguments=settings.custom_arguments,
    )
    result = build(
        resolution,
        job,
        platform,
        runner=runner,
        timeout=settings.conversion_timeout,
    )
    if not result.ok:
        log_diagnostics(settings, platform, fs)
    return result


def check_pandoc(
    settings: ExportSettings = DEFAULT_SETTINGS,
    platform: PlatformFacts | None = None,
    *,
    resolver: Resolver | None = None,
    runner: ProcessRunner | None = None,
    fs: FileSystem | None = None,
) -> CheckResult:
    """Use-case: resolve the converter and run ``--version``."""
    platform = platform or detect_platform()
    runner = runner or SubprocessRunner()
    resolver = resolver or Resolver(
        fs=fs, runner=runner, probe_timeout=settings.probe_timeout
    )
    hint = settings.pandoc_path
    tips = troubleshooting_tips(platform.os_family, platform.arch)

    resolution = resolver.resolve(hint, platform)
    if isinstance(resolution, ToolNotFound):
        log_diagnostics(settings, platform, fs)
        return CheckResult(
            hint=hint,
            resolved=None,
            invocation=_not_found_result(resolution),
            version=None,
            path_differs=False,
            tips=tips,
        )

    invocation = execute(
        version_command(resolution, platform),
        platform,
        runner,
        timeout=settings.probe_timeout,
    )
    version = None
    if invocation.ok:
        lines = [line.strip() for line in invocation.stdout.splitlines() if line.strip()]
        version = lines[0] if lines else None
    ok = version is not None
    if not ok:
        log_diagnostics(settings, platform, fs)
    return CheckResult(
        hint=hint,
        resolved=resolution,
        invocation=invocation,
        version=version,
        path_differs=resolution.path != hint,
        tips=() if ok else tips,
    )


def _preview_directory(
    hint: str,
    platform: PlatformFacts,
    fs: FileSystem,
    runner: ProcessRunner,
    probe_timeout: float,
) -> str:
    if platform.is_absolute(hint):
        return platform.dirname(hint)
    well_known = platform.profile.well_known_dirs
    if hint != DEFAULT_HINT:
        for directory in well_known:
            if fs.exists(platform.join(directory, hint)):
                return directory
        return platform.join(platform.cwd, platform.dirname(hint))

    ctx = ResolutionContext(
        hint=hint,
        platform=platform,
        fs=fs,
        runner=runner,
        probe_timeout=probe_timeout,
    )
    try:
        found = which_command(ctx)
    except Exception as exc:
        logger.debug("which lookup for folder preview failed: %s", exc)
        found = None
    if found is not None:
        return platform.dirname(found.path)
    return well_known[0]


def preview_folder(
    hint: str,
    platform: PlatformFacts | None = None,
    *,
    fs: FileSystem | None = None,
    runner: ProcessRunner | None = None,
    probe_timeout: float = 10.0,
) -> FolderPreview:
    """Use-case: list the directory that should hold the converter.

    Raises
    ------
    FolderPreviewError
        If the directory does not exist or cannot be read.
    """
    platform = platform or detect_platform()
    fs = fs or LocalFileSystem()
    runner = runner or SubprocessRunner()
    directory = _preview_directory(hint, platform, fs, runner, probe_timeout)

    try:
        listing = fs.list_dir(directory)
    except OSError as exc:
        raise FolderPreviewError(
            f"Directory does not exist or is not accessible: {directory}"
        ) from exc

    wanted = {TOOL_NAME, platform.profile.tool_filename, platform.basename(hint)}
    entries = tuple(
        FolderEntry(
            name=item.name,
            is_dir=item.is_dir,
            probably_executable=not item.is_dir
            and ("." not in item.name or item.name.endswith(SCRIPT_SUFFIXES)),
            highlighted=not item.is_dir and item.name in wanted,
        )
        for item in listing
    )
    return FolderPreview(
        directory=directory,
        entries=entries,
        pandoc_found=any(entry.highlighted for entry in entries),
    )

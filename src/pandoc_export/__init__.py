"""Top-level API for exporting documents through pandoc."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pandoc_export.types import OutputFormat

if TYPE_CHECKING:
    from pandoc_export.application.results import (
        InvocationResult,
        ResolvedExecutable,
        ToolNotFound,
    )
    from pandoc_export.platform import PlatformFacts
    from pandoc_export.schemas import ExportSettings

__version__ = "0.1.0"


def resolve_pandoc(
    hint: str = "pandoc",
    platform: PlatformFacts | None = None,
) -> ResolvedExecutable | ToolNotFound:
    """Locate a verified pandoc executable.

    Parameters
    ----------
    hint : str, default="pandoc"
        Configured path or bare command name.
    platform : PlatformFacts | None, optional
        Host snapshot; detected fresh when omitted.

    Returns
    -------
    ResolvedExecutable | ToolNotFound
        The resolved path with its provenance, or the aggregate failure.
    """
    from pandoc_export.platform import detect_platform
    from pandoc_export.resolution.resolver import Resolver

    return Resolver().resolve(hint, platform or detect_platform())


def export_document(
    content: str,
    document_name: str,
    format: OutputFormat,
    output_path: str | Path,
    settings: ExportSettings | None = None,
    platform: PlatformFacts | None = None,
) -> InvocationResult:
    """Export ``content`` to ``output_path`` in ``format``.

    Parameters
    ----------
    content : str
        Current text of the document.
    document_name : str
        Base name of the document.
    format : {"pdf", "docx", "html", "epub", "odt"}
        Target format.
    output_path : str | Path
        Destination file.
    settings : ExportSettings | None, optional
        Settings record; defaults to ``DEFAULT_SETTINGS``.
    platform : PlatformFacts | None, optional
        Host snapshot; detected fresh when omitted.

    Returns
    -------
    InvocationResult
        Classified outcome of the export.
    """
    from pandoc_export.application.use_cases import export_document as _impl
    from pandoc_export.schemas import DEFAULT_SETTINGS

    return _impl(
        content,
        document_name,
        format,
        Path(output_path),
        settings or DEFAULT_SETTINGS,
        platform,
    )


__all__ = ["__version__", "export_document", "resolve_pandoc"]

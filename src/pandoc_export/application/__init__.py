"""Application-layer use-cases, ports and result objects."""

from __future__ import annotations

from pandoc_export.application.options import ConversionJob
from pandoc_export.application.ports import (
    CompletedCommand,
    DirEntry,
    FileSystem,
    ProcessRunner,
)
from pandoc_export.application.results import (
    CheckResult,
    ExportDirectory,
    FolderEntry,
    FolderPreview,
    InvocationResult,
    ResolvedExecutable,
    ToolNotFound,
)

__all__ = [
    "CheckResult",
    "CompletedCommand",
    "ConversionJob",
    "DirEntry",
    "ExportDirectory",
    "FileSystem",
    "FolderEntry",
    "FolderPreview",
    "InvocationResult",
    "ProcessRunner",
    "ResolvedExecutable",
    "ToolNotFound",
]

"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pandoc_export.types import Outcome, OsFamily, Provenance


@dataclass(frozen=True)
class ResolvedExecutable:
    """Verified-executable converter path plus the strategy that found it."""

    path: str
    provenance: Provenance


@dataclass(frozen=True)
class ToolNotFound:
    """Aggregate resolution failure."""

    hint: str
    os_family: OsFamily
    message: str
    suggestion: str


@dataclass(frozen=True)
class InvocationResult:
    """Classified outcome of one converter run."""

    outcome: Outcome
    exit_status: int | None
    stdout: str
    stderr: str
    status: str
    remediation: str | None = None
    command: str = ""
    warnings: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.outcome == "success"


@dataclass(frozen=True)
class ExportDirectory:
    """Resolved export directory; ``fallback_reason`` is set when creation failed."""

    path: Path
    fallback_reason: str | None = None


@dataclass(frozen=True)
class CheckResult:
    """Outcome of running ``<converter> --version``."""

    hint: str
    resolved: ResolvedExecutable | None
    invocation: InvocationResult
    version: str | None
    path_differs: bool
    tips: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.invocation.ok and self.version is not None


@dataclass(frozen=True)
class FolderEntry:
    """One directory entry shown in a folder preview."""

    name: str
    is_dir: bool
    probably_executable: bool
    highlighted: bool


@dataclass(frozen=True)
class FolderPreview:
    """Listing of the directory that should hold the converter."""

    directory: str
    entries: tuple[FolderEntry, ...]
    pandoc_found: bool

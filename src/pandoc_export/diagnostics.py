"""Developer-facing diagnostics for failed exports."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from pandoc_export.adapters.filesystem import LocalFileSystem
from pandoc_export.application.ports import FileSystem
from pandoc_export.platform import TOOL_NAME, PlatformFacts
from pandoc_export.schemas import ExportSettings

logger = logging.getLogger(__name__)

KEY_DIRECTORIES = {
    "windows": ("C:\\Program Files",),
    "macos": ("/usr/local/bin", "/usr/bin"),
    "linux": ("/usr/local/bin", "/usr/bin"),
}


@dataclass(frozen=True)
class DiagnosticReport:
    """Snapshot of everything useful for debugging converter discovery."""

    os_family: str
    arch: str
    home: str
    hint: str
    search_path: tuple[str, ...]
    default_shell: str
    login_shell: str
    listings: Mapping[str, tuple[str, ...] | None] = field(default_factory=dict)
    notes: tuple[str, ...] = ()

    def lines(self) -> list[str]:
        """Render the report as plain text lines."""
        out = [
            f"platform: {self.os_family} ({self.arch})",
            f"home: {self.home}",
            f"configured pandoc path: {self.hint}",
            f"default shell: {self.default_shell}",
            f"login shell: {self.login_shell}",
            "PATH:",
            *(f"  {entry}" for entry in self.search_path),
        ]
        for directory, names in self.listings.items():
            if names is None:
                out.append(f"{directory}: <unreadable>")
            else:
                out.append(f"{directory}: {', '.join(names) or '<no pandoc entries>'}")
        out.extend(self.notes)
        return out


def collect_diagnostics(
    settings: ExportSettings,
    platform: PlatformFacts,
    fs: FileSystem | None = None,
) -> DiagnosticReport:
    """Gather platform facts and converter-named entries of key directories."""
    fs = fs or LocalFileSystem()
    listings: dict[str, tuple[str, ...] | None] = {}
    for directory in KEY_DIRECTORIES[platform.os_family]:
        try:
            entries = fs.list_dir(directory)
        except OSError:
            listings[directory] = None
            continue
        listings[directory] = tuple(
            entry.name for entry in entries if TOOL_NAME in entry.name.lower()
        )

    notes: list[str] = []
    if platform.os_family == "windows":
        candidates = [d for d in platform.search_path if TOOL_NAME in d.lower()]
        if candidates:
            notes.append(
                "PATH entries that may hold pandoc.exe: " + ", ".join(candidates)
            )
    elif platform.os_family == "macos":
        prefix = "/opt/homebrew" if platform.arch in {"arm64", "aarch64"} else "/usr/local"
        notes.append(f"expected Homebrew prefix for {platform.arch}: {prefix}")

    return DiagnosticReport(
        os_family=platform.os_family,
        arch=platform.arch,
        home=platform.home,
        hint=settings.pandoc_path,
        search_path=platform.search_path,
        default_shell=platform.default_shell,
        login_shell=platform.login_shell,
        listings=listings,
        notes=tuple(notes),
    )


def log_diagnostics(
    settings: ExportSettings,
    platform: PlatformFacts,
    fs: FileSystem | None = None,
) -> None:
    """Write a diagnostic report to the debug log."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    report = collect_diagnostics(settings, platform, fs)
    for line in report.lines():
        logger.debug("diagnostics: %s", line)

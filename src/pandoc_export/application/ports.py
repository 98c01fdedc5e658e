"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from pandoc_export.types import Environ


@dataclass(frozen=True)
class CompletedCommand:
    """Captured result of a finished child process."""

    returncode: int
    stdout: str
    stderr: str


@dataclass(frozen=True)
class DirEntry:
    """Minimal directory entry description."""

    name: str
    is_dir: bool


class FileSystem(Protocol):
    """Read-only filesystem probes plus the few writes the export needs."""

    def is_executable(self, path: str) -> bool:
        """Return ``True`` if ``path`` is a file the current user may execute."""

    def exists(self, path: str) -> bool:
        """Return ``True`` if ``path`` exists."""

    def read_text(self, path: str) -> str | None:
        """Return file content, or ``None`` if it cannot be read."""

    def list_dir(self, path: str) -> list[DirEntry]:
        """List directory entries; raise ``OSError`` if not accessible."""


class ProcessRunner(Protocol):
    """Spawn a child process and capture its output."""

    def run(
        self,
        argv: Sequence[str],
        *,
        env: Environ | None = None,
        timeout: float | None = None,
    ) -> CompletedCommand:
        """Run ``argv`` to completion.

        Raises ``OSError`` when the process cannot be spawned and
        ``ProcessTimeout`` when ``timeout`` elapses.
        """

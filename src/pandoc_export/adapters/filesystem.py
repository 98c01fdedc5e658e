"""Local filesystem adapter."""

from __future__ import annotations

import os

from pandoc_export.application.ports import DirEntry


class LocalFileSystem:
    """Probe the real host filesystem."""

    def is_executable(self, path: str) -> bool:
        """Return ``True`` for regular files with execute permission.

        Parameters
        ----------
        path : str
            Candidate executable path.

        Returns
        -------
        bool
            ``False`` for directories, missing paths and unreadable entries.
        """
        try:
            return os.path.isfile(path) and os.access(path, os.X_OK)
        except (OSError, ValueError):
            return False

    def exists(self, path: str) -> bool:
        try:
            return os.path.exists(path)
        except ValueError:
            return False

    def read_text(self, path: str) -> str | None:
        try:
            with open(path, encoding="utf-8", errors="replace") as handle:
                return handle.read()
        except OSError:
            return None

    def list_dir(self, path: str) -> list[DirEntry]:
        with os.scandir(path) as entries:
            return sorted(
                (
                    DirEntry(name=entry.name, is_dir=entry.is_dir())
                    for entry in entries
                ),
                key=lambda item: item.name,
            )

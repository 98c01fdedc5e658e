"""Exception hierarchy for pandoc export."""

from __future__ import annotations


class PandocExportError(Exception):
    """Base error for export failures surfaced to callers."""

    exit_code = 1


class SettingsError(PandocExportError):
    """Raised when a settings record fails validation."""

    exit_code = 2


class ToolNotFoundError(PandocExportError):
    """Raised when a caller asks for a resolved converter and none exists."""

    exit_code = 3

    def __init__(self, message: str, hint: str) -> None:
        super().__init__(message)
        self.hint = hint


class DirectoryCreateFailed(PandocExportError):
    """Raised when the export directory cannot be created."""

    exit_code = 4


class FolderPreviewError(PandocExportError):
    """Raised when the folder preview target cannot be listed."""

    exit_code = 5


class ProcessTimeout(PandocExportError):
    """Raised by process adapters when a child exceeds its time budget."""

    exit_code = 6

    def __init__(self, argv: list[str], timeout: float) -> None:
        super().__init__(f"Command timed out after {timeout:g}s: {' '.join(argv)}")
        self.argv = argv
        self.timeout = timeout

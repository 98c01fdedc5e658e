"""Host-side adapters implementing the application ports."""

from pandoc_export.adapters.filesystem import LocalFileSystem
from pandoc_export.adapters.process import SubprocessRunner

__all__ = ["LocalFileSystem", "SubprocessRunner"]

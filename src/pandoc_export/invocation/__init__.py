"""Converter command construction, execution and outcome classification."""

from pandoc_export.invocation.builder import (
    Invocation,
    assemble_arguments,
    build,
    build_command,
    conversion_command,
    execute,
    version_command,
)
from pandoc_export.invocation.classify import Classification, classify

__all__ = [
    "Classification",
    "Invocation",
    "assemble_arguments",
    "build",
    "build_command",
    "classify",
    "conversion_command",
    "execute",
    "version_command",
]

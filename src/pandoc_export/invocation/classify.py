"""Classify converter runs into outcomes."""

from __future__ import annotations

import re
from dataclasses import dataclass

from pandoc_export.remediation import (
    engine_missing_remediation,
    tool_not_found_remediation,
)
from pandoc_export.types import OsFamily, Outcome

TOOL_ABSENCE_INDICATORS = ("command not found", "not recognized")
# 127: POSIX shells, 9009: cmd.exe
TOOL_ABSENCE_EXIT_CODES = frozenset({127, 9009})
ENGINE_MISSING_RE = re.compile(
    r"\b(pdflatex|xelatex|lualatex|wkhtmltopdf|weasyprint|prince)\b[^\n]*not found"
    r"|select a different --pdf-engine",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Classification:
    """Outcome plus the texts shown to the user."""

    outcome: Outcome
    status: str
    remediation: str | None = None


def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""


def classify(
    exit_status: int | None,
    stderr: str,
    family: OsFamily,
    *,
    spawn_error: OSError | None = None,
    timed_out: bool = False,
) -> Classification:
    """Classify one finished (or failed-to-start) converter run.

    Parameters
    ----------
    exit_status : int | None
        Child exit status; ``None`` when the child never ran to completion.
    stderr : str
        Captured standard error (or the spawn error message).
    family : {"windows", "macos", "linux"}
        OS family, used for remediation texts.
    spawn_error : OSError | None, optional
        Error raised while starting the child.
    timed_out : bool, default=False
        Whether the child was killed after its time budget.

    Returns
    -------
    Classification
        ``success`` only for a zero exit; stderr on a zero exit is a warning
        handled by the caller.
    """
    if timed_out:
        return Classification("other-failure", "Export timed out.")

    if spawn_error is None and exit_status == 0:
        return Classification("success", "Export succeeded.")

    message = stderr if spawn_error is None else str(spawn_error)
    lowered = message.lower()
    if (
        isinstance(spawn_error, FileNotFoundError)
        or exit_status in TOOL_ABSENCE_EXIT_CODES
        or any(indicator in lowered for indicator in TOOL_ABSENCE_INDICATORS)
    ):
        return Classification(
            "tool-not-found",
            "Pandoc command not found.",
            tool_not_found_remediation(family),
        )
    if ENGINE_MISSING_RE.search(message):
        return Classification(
            "engine-missing",
            f"PDF engine missing: {_first_line(message)}",
            engine_missing_remediation(family),
        )
    detail = _first_line(message) or f"exit status {exit_status}"
    return Classification("other-failure", f"Export failed: {detail}")

"""Unit tests for outcome classification."""

from __future__ import annotations

import pytest

from pandoc_export.invocation.classify import classify


@pytest.mark.parametrize(
    ("exit_status", "stderr", "outcome"),
    [
        (0, "", "success"),
        (0, "[WARNING] unusual markup", "success"),
        (127, "", "tool-not-found"),
        (9009, "", "tool-not-found"),
        (1, "bash: /usr/bin/pandoc: command not found", "tool-not-found"),
        (
            1,
            "'pandoc' is not recognized as an internal or external command,",
            "tool-not-found",
        ),
        (
            47,
            "pdflatex not found. Please select a different --pdf-engine or install pdflatex",
            "engine-missing",
        ),
        (1, "wkhtmltopdf not found", "engine-missing"),
        (1, "xelatex: file not found in PATH", "engine-missing"),
        (64, "pandoc: unknown reader: mdx", "other-failure"),
        (1, "", "other-failure"),
    ],
)
def test_classification_table(exit_status: int, stderr: str, outcome: str) -> None:
    assert classify(exit_status, stderr, "linux").outcome == outcome


def test_spawn_file_not_found_means_tool_absent() -> None:
    verdict = classify(None, "", "macos", spawn_error=FileNotFoundError(2, "missing"))

    assert verdict.outcome == "tool-not-found"
    assert "which pandoc" in (verdict.remediation or "")


def test_other_spawn_errors_are_other_failures() -> None:
    verdict = classify(None, "", "linux", spawn_error=PermissionError(13, "denied"))

    assert verdict.outcome == "other-failure"
    assert "denied" in verdict.status


def test_timeout_is_other_failure() -> None:
    verdict = classify(None, "Command timed out", "linux", timed_out=True)

    assert verdict.outcome == "other-failure"
    assert verdict.remediation is None


def test_engine_missing_remediation_is_platform_specific() -> None:
    stderr = "pdflatex not found. Please select a different --pdf-engine"

    mac = classify(47, stderr, "macos")
    win = classify(47, stderr, "windows")

    assert mac.outcome == win.outcome == "engine-missing"
    assert "brew install wkhtmltopdf" in (mac.remediation or "")
    assert "https://wkhtmltopdf.org/downloads.html" in (win.remediation or "")
    assert mac.status.startswith("PDF engine missing")


def test_windows_absence_remediation_mentions_where() -> None:
    verdict = classify(9009, "", "windows")

    assert "where pandoc" in (verdict.remediation or "")
    assert "C:\\Program Files\\Pandoc\\pandoc.exe" in (verdict.remediation or "")

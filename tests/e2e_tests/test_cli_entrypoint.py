"""End-to-end smoke tests for the installed CLI entrypoint."""

from __future__ import annotations

import subprocess

import pandoc_export


def test_package_import_smoke() -> None:
    """Ensure package can be imported in the test process."""
    assert pandoc_export.__version__


def test_cli_help_smoke() -> None:
    """Ensure the installed CLI entrypoint responds to --help."""
    result = subprocess.run(
        ["pandoc-export", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert "Export markdown documents" in result.stdout


def test_cli_export_missing_document_fails_cleanly() -> None:
    """Ensure CLI returns a user-facing validation error for a missing document."""
    result = subprocess.run(
        ["pandoc-export", "export", "/tmp/definitely-missing-note.md"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode != 0
    assert "does not exist" in result.stderr.lower()

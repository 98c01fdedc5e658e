"""Unit tests for CLI command behavior."""

from __future__ import annotations

from pathlib import Path

import pytest
from fakes import make_platform
from typer.testing import CliRunner

from pandoc_export.application.results import (
    CheckResult,
    FolderEntry,
    FolderPreview,
    InvocationResult,
    ResolvedExecutable,
)
from pandoc_export.cli import cli as cli_module
from pandoc_export.errors import FolderPreviewError, ToolNotFoundError
from pandoc_export.platform import PlatformFacts
from pandoc_export.schemas import ExportSettings

runner = CliRunner()


def _result(outcome: str = "success", **overrides: object) -> InvocationResult:
    values: dict[str, object] = {
        "outcome": outcome,
        "exit_status": 0 if outcome == "success" else 1,
        "stdout": "",
        "stderr": "",
        "status": "Export succeeded." if outcome == "success" else "Export failed.",
    }
    values.update(overrides)
    return InvocationResult(**values)  # type: ignore[arg-type]


class _Resolver:
    def __init__(self, probe_timeout: float = 10.0) -> None:
        self.probe_timeout = probe_timeout
        self.hints: list[str] = []

    def resolve_or_raise(self, hint: str, platform: PlatformFacts) -> ResolvedExecutable:
        self.hints.append(hint)
        if hint.startswith("/missing"):
            raise ToolNotFoundError(f"Pandoc was not found (tried '{hint}').", hint=hint)
        return ResolvedExecutable(path="/usr/bin/pandoc", provenance="path-search")

    def resolve(self, hint: str, platform: PlatformFacts) -> ResolvedExecutable:
        return self.resolve_or_raise(hint, platform)


@pytest.fixture(autouse=True)
def _fixed_platform(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "detect_platform", lambda: make_platform("linux"))


def test_help_shows_commands() -> None:
    result = runner.invoke(cli_module.app, ["--help"])

    assert result.exit_code == 0
    for command in ("export", "resolve", "check", "folder", "doctor"):
        assert command in result.output


def test_export_uses_default_output_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    document = tmp_path / "note.md"
    document.write_text("# Hi\n", encoding="utf-8")
    called: dict[str, object] = {}

    def fake_export(
        content: str,
        name: str,
        format: str,
        output: Path,
        settings: ExportSettings,
        platform: PlatformFacts,
    ) -> InvocationResult:
        called.update(content=content, name=name, format=format, output=output, settings=settings)
        return _result()

    monkeypatch.setattr(cli_module, "export_document", fake_export)

    result = runner.invoke(
        cli_module.app,
        ["export", str(document), "--format", "html", "--export-dir", "out", "--pdf-engine", "xelatex"],
    )

    assert result.exit_code == 0, result.output
    assert called["content"] == "# Hi\n"
    assert called["name"] == "note"
    assert called["output"] == tmp_path / "out" / "note.html"
    settings = called["settings"]
    assert isinstance(settings, ExportSettings)
    assert settings.pdf_engine == "xelatex"
    assert "Saved" in result.output
    assert "HTML page" in result.output


def test_export_uses_settings_file_and_env_hint(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    document = tmp_path / "note.md"
    document.write_text("x", encoding="utf-8")
    settings_file = tmp_path / "settings.json"
    settings_file.write_text('{"defaultFormat": "docx", "pandocPath": "/from/file"}')
    called: dict[str, object] = {}

    def fake_export(*args: object) -> InvocationResult:
        called["format"] = args[2]
        called["settings"] = args[4]
        return _result()

    monkeypatch.setattr(cli_module, "export_document", fake_export)

    result = runner.invoke(
        cli_module.app,
        ["export", str(document), "--output", str(tmp_path / "x.docx")],
        env={
            "PANDOC_EXPORT_SETTINGS": str(settings_file),
            "PANDOC_EXPORT_PANDOC_PATH": "/from/env/pandoc",
        },
    )

    assert result.exit_code == 0, result.output
    assert called["format"] == "docx"
    settings = called["settings"]
    assert isinstance(settings, ExportSettings)
    assert settings.pandoc_path == "/from/env/pandoc"


def test_export_tool_not_found_exit_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    document = tmp_path / "note.md"
    document.write_text("x", encoding="utf-8")
    monkeypatch.setattr(
        cli_module,
        "export_document",
        lambda *args: _result(
            "tool-not-found", status="Pandoc not found.", remediation="Run which pandoc"
        ),
    )

    result = runner.invoke(cli_module.app, ["export", str(document), "-o", str(tmp_path / "n.pdf")])

    assert result.exit_code == 3
    assert "Pandoc not found." in result.output
    assert "Run which pandoc" in result.output


def test_export_engine_missing_exit_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    document = tmp_path / "note.md"
    document.write_text("x", encoding="utf-8")
    monkeypatch.setattr(
        cli_module,
        "export_document",
        lambda *args: _result("engine-missing", status="PDF engine missing: pdflatex not found"),
    )

    result = runner.invoke(cli_module.app, ["export", str(document), "-o", str(tmp_path / "n.pdf")])

    assert result.exit_code == 1
    assert "PDF engine missing" in result.output


@pytest.mark.parametrize(
    ("error", "exit_code"),
    [
        (ToolNotFoundError("Pandoc not found.", "Run which pandoc"), 3),
        (RuntimeError("disk on fire"), 1),
    ],
)
def test_export_unexpected_error_exit_code(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, error: Exception, exit_code: int
) -> None:
    document = tmp_path / "note.md"
    document.write_text("x", encoding="utf-8")

    def boom(*args: object) -> InvocationResult:
        raise error

    monkeypatch.setattr(cli_module, "export_document", boom)

    result = runner.invoke(cli_module.app, ["export", str(document), "-o", str(tmp_path / "n.pdf")])

    assert result.exit_code == exit_code
    assert type(error).__name__ in result.output
    assert str(error) in result.output


def test_export_rejects_unknown_format(tmp_path: Path) -> None:
    document = tmp_path / "note.md"
    document.write_text("x", encoding="utf-8")

    result = runner.invoke(cli_module.app, ["export", str(document), "--format", "rtf"])

    assert result.exit_code != 0
    assert "Unknown format" in result.output


def test_export_invalid_settings_file(tmp_path: Path) -> None:
    document = tmp_path / "note.md"
    document.write_text("x", encoding="utf-8")
    settings_file = tmp_path / "settings.json"
    settings_file.write_text('{"pdfEngine": "nope"}')

    result = runner.invoke(
        cli_module.app, ["export", str(document), "--settings", str(settings_file)]
    )

    assert result.exit_code == 2
    assert "SettingsError" in result.output


def test_resolve_prints_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "Resolver", _Resolver)

    result = runner.invoke(cli_module.app, ["resolve"])

    assert result.exit_code == 0
    assert "/usr/bin/pandoc (path-search)" in result.output


def test_resolve_failure_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "Resolver", _Resolver)

    result = runner.invoke(cli_module.app, ["resolve", "--pandoc-path", "/missing/pandoc"])

    assert result.exit_code == 3
    assert "ToolNotFoundError" in result.output


def test_check_success_suggests_resolved_path(monkeypatch: pytest.MonkeyPatch) -> None:
    check = CheckResult(
        hint="pandoc",
        resolved=ResolvedExecutable(path="/usr/bin/pandoc", provenance="path-search"),
        invocation=_result(stdout="pandoc 3.1.9\n"),
        version="pandoc 3.1.9",
        path_differs=True,
    )
    monkeypatch.setattr(cli_module, "check_pandoc", lambda settings, platform: check)

    result = runner.invoke(cli_module.app, ["check"])

    assert result.exit_code == 0
    assert "pandoc 3.1.9" in result.output
    assert "/usr/bin/pandoc" in result.output


def test_check_failure_prints_tips(monkeypatch: pytest.MonkeyPatch) -> None:
    check = CheckResult(
        hint="pandoc",
        resolved=None,
        invocation=_result("tool-not-found", status="Pandoc not found."),
        version=None,
        path_differs=False,
        tips=("Open a terminal", "Run pandoc --version"),
    )
    monkeypatch.setattr(cli_module, "check_pandoc", lambda settings, platform: check)

    result = runner.invoke(cli_module.app, ["check"])

    assert result.exit_code == 3
    assert "1. Open a terminal" in result.output
    assert "2. Run pandoc --version" in result.output


def test_folder_lists_entries(monkeypatch: pytest.MonkeyPatch) -> None:
    preview = FolderPreview(
        directory="/usr/local/bin",
        entries=(
            FolderEntry("pandoc", False, True, True),
            FolderEntry("man", True, False, False),
        ),
        pandoc_found=True,
    )
    monkeypatch.setattr(cli_module, "preview_folder", lambda *args, **kwargs: preview)

    result = runner.invoke(cli_module.app, ["folder"])

    assert result.exit_code == 0
    assert "Directory: /usr/local/bin" in result.output
    assert " * [exec] pandoc" in result.output
    assert "[dir ] man" in result.output


def test_folder_error_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(*args: object, **kwargs: object) -> FolderPreview:
        raise FolderPreviewError("Directory does not exist or is not accessible: /nope")

    monkeypatch.setattr(cli_module, "preview_folder", boom)

    result = runner.invoke(cli_module.app, ["folder"])

    assert result.exit_code == 5
    assert "/nope" in result.output


def test_doctor_prints_report(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "Resolver", _Resolver)

    result = runner.invoke(cli_module.app, ["doctor"])

    assert result.exit_code == 0
    assert "Python:" in result.output
    assert "platform: linux (x86_64)" in result.output
    assert "pandoc: /usr/bin/pandoc (path-search)" in result.output

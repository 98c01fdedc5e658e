"""Shared type aliases for the export core."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal

type OsFamily = Literal["windows", "macos", "linux"]
type OutputFormat = Literal["pdf", "docx", "html", "epub", "odt"]
type PdfEngine = Literal[
    "auto", "wkhtmltopdf", "weasyprint", "prince", "xelatex", "lualatex"
]
type Provenance = Literal[
    "user-absolute",
    "user-relative",
    "path-search",
    "well-known-location",
    "shell-introspection",
    "which-command",
    "filesystem-search",
]
type Outcome = Literal["success", "tool-not-found", "engine-missing", "other-failure"]
type Environ = Mapping[str, str]

OUTPUT_FORMATS: tuple[OutputFormat, ...] = ("pdf", "docx", "html", "epub", "odt")
PDF_ENGINES: tuple[PdfEngine, ...] = (
    "auto",
    "wkhtmltopdf",
    "weasyprint",
    "prince",
    "xelatex",
    "lualatex",
)

FORMAT_LABELS: Mapping[OutputFormat, str] = {
    "pdf": "PDF document",
    "docx": "Word document",
    "html": "HTML page",
    "epub": "EPUB e-book",
    "odt": "ODT document",
}

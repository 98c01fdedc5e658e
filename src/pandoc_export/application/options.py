"""Typed request objects shared across export use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pandoc_export.types import OutputFormat, PdfEngine


@dataclass(frozen=True)
class ConversionJob:
    """One export request.

    Parameters
    ----------
    format : {"pdf", "docx", "html", "epub", "odt"}
        Target format.
    content : str
        Current text of the source document.
    document_name : str
        Base name of the source document; namespaces the transient input file.
    output_path : Path
        Where the converter writes its result.
    pdf_engine : str, default="auto"
        PDF engine override; ``"auto"`` leaves the choice to the converter.
    extra_arguments : str, default=""
        Free-form arguments appended to the command line.
    """

    format: OutputFormat
    content: str
    document_name: str
    output_path: Path
    pdf_engine: PdfEngine = "auto"
    extra_arguments: str = ""

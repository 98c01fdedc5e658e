"""Pydantic schemas for export settings."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pandoc_export.errors import SettingsError
from pandoc_export.platform import TOOL_NAME
from pandoc_export.types import OutputFormat, PdfEngine

DEFAULT_HINT = TOOL_NAME


class ExportSettings(BaseModel):
    """Validated export settings handed to the core on every call.

    Accepts both snake_case names and the camelCase keys a host application
    persists (``pandocPath``, ``pdfEngine`` ...).
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    pandoc_path: str = Field(default=DEFAULT_HINT, alias="pandocPath")
    default_export_directory: str = Field(default="", alias="defaultExportDirectory")
    default_format: OutputFormat = Field(default="pdf", alias="defaultFormat")
    custom_arguments: str = Field(default="", alias="customArguments")
    pdf_engine: PdfEngine = Field(default="auto", alias="pdfEngine")
    probe_timeout: float = Field(default=10.0, gt=0, alias="probeTimeout")
    conversion_timeout: float | None = Field(
        default=None, gt=0, alias="conversionTimeout"
    )

    @field_validator("pandoc_path")
    @classmethod
    def _normalize_hint(cls, value: str) -> str:
        cleaned = value.strip()
        return cleaned or DEFAULT_HINT

    @field_validator("custom_arguments", "default_export_directory")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


DEFAULT_SETTINGS = ExportSettings()


def load_settings(
    source: Mapping[str, object] | Path | None = None,
    **overrides: object,
) -> ExportSettings:
    """Merge a key/value record (or JSON file) and overrides over the defaults.

    Parameters
    ----------
    source : Mapping[str, object] | Path | None, optional
        Persisted settings record, or a path to a JSON file holding one.
    **overrides : object
        Field values taking precedence over ``source``; ``None`` values are
        ignored.

    Returns
    -------
    ExportSettings
        Validated settings.

    Raises
    ------
    SettingsError
        If the file cannot be read or the merged record is invalid.
    """
    record: dict[str, object] = {}
    if isinstance(source, Path):
        try:
            loaded = json.loads(source.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise SettingsError(f"Unable to read settings file {source}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise SettingsError(f"Settings file {source} must hold a JSON object.")
        record.update(loaded)
    elif source is not None:
        record.update(source)

    for key, value in overrides.items():
        if value is None:
            continue
        alias = ExportSettings.model_fields[key].alias
        if alias is not None:
            record.pop(alias, None)
        record[key] = value

    try:
        return ExportSettings.model_validate(record)
    except ValidationError as exc:
        raise SettingsError(f"Invalid export settings: {exc}") from exc

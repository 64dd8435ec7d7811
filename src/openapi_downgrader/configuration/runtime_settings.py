"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from openapi_downgrader.document_io import DEFAULT_MAX_DOCUMENT_BYTES


@dataclass(frozen=True)
class ConversionOptions:
    """Pipeline stage switches."""

    strict: bool = True
    deref: bool = True
    strip_extensions: bool = True
    drop_definitions: bool = False
    collect_warnings: bool = False


@dataclass(frozen=True)
class OutputSettings:
    """Rendering options for the converted document."""

    output_format: str = "json"
    pretty: bool = False


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None = None
    conversion: ConversionOptions = field(default_factory=ConversionOptions)
    output: OutputSettings = field(default_factory=OutputSettings)
    max_document_bytes: int = DEFAULT_MAX_DOCUMENT_BYTES

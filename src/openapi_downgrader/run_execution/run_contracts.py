"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from openapi_downgrader.dereferencing import DereferenceStats


@dataclass(frozen=True)
class SettingsOverrides:
    """Command line values that take precedence over the settings file."""

    strict: bool | None = None
    deref: bool | None = None
    strip_extensions: bool | None = None
    drop_definitions: bool | None = None
    collect_warnings: bool | None = None
    output_format: str | None = None
    pretty: bool | None = None


@dataclass(frozen=True)
class ConversionRequest:
    """Input contract for converting one document."""

    source_path: str
    output_path: str | None = None
    config_path: str | None = None
    overrides: SettingsOverrides = field(default_factory=SettingsOverrides)


@dataclass(frozen=True)
class ConversionOutcome:
    """Output contract for one completed conversion."""

    output_path: Path | None
    warnings: tuple[str, ...]
    original_version: str | None
    stats: DereferenceStats | None
    rendered: str

"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from openapi_downgrader.document_io import DEFAULT_MAX_DOCUMENT_BYTES, OUTPUT_FORMATS

from .runtime_settings import Configuration, ConversionOptions, OutputSettings


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def default_configuration() -> Configuration:
    """Return the settings used when no configuration file is given."""
    return Configuration()


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    conversion = _parse_conversion_section(parsed.get("conversion"))
    output = _parse_output_section(parsed.get("output"))
    max_document_bytes = _require_positive_int(
        parsed.get("max_document_bytes", DEFAULT_MAX_DOCUMENT_BYTES), "max_document_bytes"
    )
    return Configuration(
        path=path,
        conversion=conversion,
        output=output,
        max_document_bytes=max_document_bytes,
    )


def _parse_conversion_section(value: Any) -> ConversionOptions:
    section = _optional_mapping(value, "conversion")
    defaults = ConversionOptions()
    return ConversionOptions(
        strict=_optional_bool(section.get("strict"), "conversion.strict", defaults.strict),
        deref=_optional_bool(section.get("deref"), "conversion.deref", defaults.deref),
        strip_extensions=_optional_bool(
            section.get("strip_extensions"),
            "conversion.strip_extensions",
            defaults.strip_extensions,
        ),
        drop_definitions=_optional_bool(
            section.get("drop_definitions"),
            "conversion.drop_definitions",
            defaults.drop_definitions,
        ),
        collect_warnings=_optional_bool(
            section.get("collect_warnings"),
            "conversion.collect_warnings",
            defaults.collect_warnings,
        ),
    )


def _parse_output_section(value: Any) -> OutputSettings:
    section = _optional_mapping(value, "output")
    defaults = OutputSettings()
    output_format = section.get("format", defaults.output_format)
    if not isinstance(output_format, str):
        raise ConfigurationError("output.format must be a string.")
    output_format = output_format.strip().lower()
    if output_format not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"output.format must be one of: {', '.join(OUTPUT_FORMATS)}."
        )
    pretty = _optional_bool(section.get("pretty"), "output.pretty", defaults.pretty)
    return OutputSettings(output_format=output_format, pretty=pretty)


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _optional_bool(value: Any, field_name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value

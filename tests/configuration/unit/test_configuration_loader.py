"""Configuration loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from openapi_downgrader.configuration import (
    Configuration,
    ConfigurationError,
    ConversionOptions,
    OutputSettings,
    default_configuration,
    load_configuration,
)


def _write(tmp_path: Path, text: str, name: str = "settings.yaml") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_match_pipeline_defaults() -> None:
    configuration = default_configuration()

    assert configuration == Configuration()
    assert configuration.conversion == ConversionOptions(
        strict=True,
        deref=True,
        strip_extensions=True,
        drop_definitions=False,
        collect_warnings=False,
    )
    assert configuration.output == OutputSettings(output_format="json", pretty=False)
    assert configuration.max_document_bytes == 5 * 1024 * 1024


def test_load_configuration_reads_all_sections(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
conversion:
  strict: false
  deref: false
  strip_extensions: false
  drop_definitions: true
  collect_warnings: true
output:
  format: YAML
  pretty: true
max_document_bytes: 1024
""",
    )

    configuration = load_configuration(path)

    assert configuration.path == path
    assert configuration.conversion == ConversionOptions(
        strict=False,
        deref=False,
        strip_extensions=False,
        drop_definitions=True,
        collect_warnings=True,
    )
    assert configuration.output == OutputSettings(output_format="yaml", pretty=True)
    assert configuration.max_document_bytes == 1024


def test_load_configuration_accepts_json(tmp_path: Path) -> None:
    path = _write(tmp_path, json.dumps({"conversion": {"deref": False}}), name="settings.json")

    configuration = load_configuration(path)

    assert configuration.conversion.deref is False
    assert configuration.conversion.strict is True


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    configuration = load_configuration(_write(tmp_path, ""))

    assert configuration.conversion == ConversionOptions()
    assert configuration.output == OutputSettings()


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_configuration(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("- a\n- b\n", "root must be a mapping"),
        ("conversion: yes-please\n", "'conversion' must be a mapping"),
        ("conversion:\n  strict: 'no'\n", "conversion.strict must be a boolean"),
        ("output:\n  format: xml\n", "output.format must be one of: json, yaml"),
        ("output:\n  format: 3\n", "output.format must be a string"),
        ("output:\n  pretty: 1\n", "output.pretty must be a boolean"),
        ("max_document_bytes: 0\n", "max_document_bytes must be greater than zero"),
        ("max_document_bytes: true\n", "max_document_bytes must be an integer"),
        ("conversion: [unclosed\n", "Failed to parse configuration file"),
    ],
)
def test_invalid_configuration_is_rejected(tmp_path: Path, text: str, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        load_configuration(_write(tmp_path, text))

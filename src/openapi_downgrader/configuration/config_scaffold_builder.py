"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "openapi-downgrader.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Settings file for openapi-downgrader.
# Every key is optional; the values below are the built-in defaults.
# Command line flags given to `convert` override these values.

conversion:
  # Flatten allOf and drop draft-4 incompatible keywords.
  strict: true
  # Inline every local $ref so the output is self-contained.
  deref: true
  # Remove x- extension keys from schemas while sanitizing (strict mode only).
  strip_extensions: true
  # Drop definitions, parameters and responses once everything is inlined.
  drop_definitions: false
  # Collect one warning per 3.1 rewrite and add an x-conversion-info block.
  collect_warnings: false

output:
  # json or yaml
  format: json
  # Indent JSON output by two spaces.
  pretty: false

# Largest accepted source document, in bytes.
max_document_bytes: 5242880
"""


def build_placeholder_configuration() -> str:
    """Build a YAML settings template with the defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the settings template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()

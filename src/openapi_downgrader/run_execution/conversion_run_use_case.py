"""Conversion run use-case service."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

import yaml

from openapi_downgrader.configuration import (
    Configuration,
    ConfigurationError,
    default_configuration,
    load_configuration,
)
from openapi_downgrader.document_io import (
    DocumentError,
    attach_conversion_info,
    find_external_reference,
    load_document,
    render_document,
)

from .conversion_pipeline import ConversionError, convert_document
from .run_contracts import ConversionOutcome, ConversionRequest, SettingsOverrides

_LOGGER = logging.getLogger("openapi_downgrader.run")

_CONVERSION_FIELDS = ("strict", "deref", "strip_extensions", "drop_definitions", "collect_warnings")
_OUTPUT_FIELDS = ("output_format", "pretty")


class RunExecutionError(Exception):
    """Raised when a conversion run cannot be completed."""


def execute_conversion_run(request: ConversionRequest) -> ConversionOutcome:
    """Load, convert, render and optionally write one document."""
    configuration = _load_settings(request.config_path, request.overrides)
    source = Path(request.source_path)
    try:
        document = load_document(source, max_bytes=configuration.max_document_bytes)
    except DocumentError as exc:
        raise RunExecutionError(str(exc)) from exc

    external_ref = find_external_reference(document)
    if external_ref is not None:
        raise RunExecutionError(
            f"External reference {external_ref!r} found; bundle remote references first."
        )

    try:
        result = convert_document(document, configuration.conversion)
    except ConversionError as exc:
        raise RunExecutionError(str(exc)) from exc

    if configuration.conversion.collect_warnings:
        attach_conversion_info(
            result.document,
            source=str(source.resolve()),
            warnings=result.warnings,
            original_version=result.original_version,
        )
    try:
        rendered = render_document(
            result.document,
            configuration.output.output_format,
            pretty=configuration.output.pretty,
        )
    except (TypeError, ValueError, yaml.YAMLError) as exc:
        raise RunExecutionError(f"Failed to render the converted document: {exc}") from exc

    output_path = None
    if request.output_path is not None:
        output_path = Path(request.output_path)
        try:
            output_path.write_text(rendered, encoding="utf-8")
        except OSError as exc:
            raise RunExecutionError(f"Failed to write output: {exc}") from exc
        output_path = output_path.resolve()
        _LOGGER.debug("run_written path=%s bytes=%d", output_path, len(rendered))

    return ConversionOutcome(
        output_path=output_path,
        warnings=tuple(result.warnings),
        original_version=result.original_version,
        stats=result.stats,
        rendered=rendered,
    )


def _load_settings(config_path: str | None, overrides: SettingsOverrides) -> Configuration:
    try:
        configuration = (
            load_configuration(config_path) if config_path else default_configuration()
        )
    except ConfigurationError as exc:
        raise RunExecutionError(str(exc)) from exc
    return apply_overrides(configuration, overrides)


def apply_overrides(configuration: Configuration, overrides: SettingsOverrides) -> Configuration:
    """Return `configuration` with every non-`None` override applied."""
    conversion_changes = {
        name: getattr(overrides, name)
        for name in _CONVERSION_FIELDS
        if getattr(overrides, name) is not None
    }
    output_changes = {
        name: getattr(overrides, name)
        for name in _OUTPUT_FIELDS
        if getattr(overrides, name) is not None
    }
    return dataclasses.replace(
        configuration,
        conversion=dataclasses.replace(configuration.conversion, **conversion_changes),
        output=dataclasses.replace(configuration.output, **output_changes),
    )

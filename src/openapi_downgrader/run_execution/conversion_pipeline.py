"""End-to-end conversion pipeline over an in-memory document."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any

from openapi_downgrader.configuration import ConversionOptions
from openapi_downgrader.dereferencing import DereferenceStats, dereference_swagger2
from openapi_downgrader.reference_resolution import ReferenceResolutionError
from openapi_downgrader.strict_sanitization import sanitize_swagger2
from openapi_downgrader.structural_conversion import SWAGGER_VERSION, convert_to_swagger2
from openapi_downgrader.version_normalization import normalize_openapi31

_LOGGER = logging.getLogger("openapi_downgrader.pipeline")

DEFAULT_TITLE = "API"
DEFAULT_VERSION = "0.0.0"


class ConversionError(Exception):
    """Raised when a document cannot be converted to Swagger 2.0."""


@dataclass
class ConversionResult:
    """Converted document plus what the run observed on the way."""

    document: dict[str, Any]
    warnings: list[str] = field(default_factory=list)
    original_version: str | None = None
    stats: DereferenceStats | None = None
    passthrough: bool = False


def convert_document(document: Any, options: ConversionOptions | None = None) -> ConversionResult:
    """Run normalize, convert, sanitize and dereference over `document` in place.

    Swagger 2.0 input skips the first two stages.

    Raises:
      ConversionError: If the root is not an object, the input is neither
        Swagger 2.0 nor OpenAPI 3.x, or conversion meets an external `$ref`.
    """
    options = options or ConversionOptions()
    if not isinstance(document, dict):
        raise ConversionError("OpenAPI document is not an object.")

    if document.get("swagger") == SWAGGER_VERSION:
        _LOGGER.debug("pipeline_passthrough swagger=%s", SWAGGER_VERSION)
        stats = _post_process(document, options)
        return ConversionResult(
            document=finalize_swagger_spec(document), stats=stats, passthrough=True
        )

    if not document.get("openapi"):
        raise ConversionError("Input does not look like OpenAPI 3.x.")

    original_version = str(document["openapi"])
    warnings: list[str] = []
    normalize_openapi31(document, warnings if options.collect_warnings else None)
    try:
        convert_to_swagger2(document)
    except ReferenceResolutionError as exc:
        raise ConversionError(f"Failed to convert the OpenAPI document: {exc}") from exc

    stats = _post_process(document, options)
    return ConversionResult(
        document=finalize_swagger_spec(document),
        warnings=warnings,
        original_version=original_version,
        stats=stats,
    )


def _post_process(
    document: MutableMapping[str, Any], options: ConversionOptions
) -> DereferenceStats | None:
    if options.strict:
        sanitize_swagger2(document, strip_extensions=options.strip_extensions)
    if not options.deref:
        return None
    return dereference_swagger2(document, drop_definitions=options.drop_definitions)


def finalize_swagger_spec(document: dict[str, Any]) -> dict[str, Any]:
    """Guarantee the top-level keys every Swagger 2.0 document needs."""
    document["swagger"] = SWAGGER_VERSION
    info = document.get("info")
    if not isinstance(info, dict):
        info = document["info"] = {}
    info["title"] = info.get("title") or DEFAULT_TITLE
    info["version"] = info.get("version") or DEFAULT_VERSION
    if not isinstance(document.get("paths"), dict):
        document["paths"] = {}
    return document

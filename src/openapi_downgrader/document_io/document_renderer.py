"""Document rendering service."""

from __future__ import annotations

import json
import math
from collections.abc import MutableMapping, Sequence
from datetime import UTC, date, datetime
from typing import Any

import yaml

OUTPUT_FORMATS = ("json", "yaml")
CONVERSION_INFO_KEY = "x-conversion-info"


def render_document(document: Any, output_format: str = "json", *, pretty: bool = False) -> str:
    """Serialize the converted document as JSON or YAML text."""
    if output_format == "yaml":
        return yaml.safe_dump(
            document, sort_keys=False, allow_unicode=True, width=math.inf
        )
    if output_format != "json":
        raise ValueError(f"Unsupported output format: {output_format}")
    if pretty:
        return json.dumps(document, indent=2, ensure_ascii=False, default=_json_default)
    return json.dumps(
        document, separators=(",", ":"), ensure_ascii=False, default=_json_default
    )


def _json_default(value: Any) -> str:
    if isinstance(value, date):
        return value.isoformat().replace("+00:00", "Z")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def attach_conversion_info(
    document: MutableMapping[str, Any],
    *,
    source: str,
    warnings: Sequence[str],
    original_version: str | None,
    converted_at: datetime | None = None,
) -> None:
    """Add the diagnostics block describing how the document was produced."""
    timestamp = converted_at or datetime.now(UTC)
    info: dict[str, Any] = {
        "source": source,
        "warnings": list(warnings),
        "convertedAt": timestamp.isoformat().replace("+00:00", "Z"),
    }
    if original_version is not None:
        info["originalOpenapi"] = original_version
    document[CONVERSION_INFO_KEY] = info

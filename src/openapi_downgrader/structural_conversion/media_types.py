"""Media range classification used when picking request and response payloads."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

APPLICATION_JSON_PATTERN = re.compile(
    r"^(application/json|[^;/ \t]+/[^;/ \t]+[+]json)[ \t]*(;.*)?$", re.IGNORECASE
)
FORM_URLENCODED = "application/x-www-form-urlencoded"
MULTIPART_FORM_DATA = "multipart/form-data"
FORM_MEDIA_TYPES = (FORM_URLENCODED, MULTIPART_FORM_DATA)
OCTET_STREAM = "application/octet-stream"


def is_json_media_type(media_type: str) -> bool:
    return bool(APPLICATION_JSON_PATTERN.match(media_type))


def is_form_media_type(media_type: str | None) -> bool:
    return media_type in FORM_MEDIA_TYPES


def supported_media_types(content: Mapping[str, Any]) -> list[str]:
    """Return form media ranges, then JSON-compatible ones, each in content order."""
    forms = [key for key in content if is_form_media_type(key)]
    return forms + [key for key in content if is_json_media_type(key)]


def media_ranges(content: Mapping[str, Any]) -> list[str]:
    """Return keys shaped like `type/subtype`."""
    return [key for key in content if key.find("/") > 0]


def concrete_media_types(ranges: list[str]) -> list[str]:
    return [media_range for media_range in ranges if "*" not in media_range]

"""Run execution domain exports."""

from .conversion_pipeline import (
    ConversionError,
    ConversionResult,
    convert_document,
    finalize_swagger_spec,
)
from .conversion_run_use_case import RunExecutionError, apply_overrides, execute_conversion_run
from .run_contracts import ConversionOutcome, ConversionRequest, SettingsOverrides

__all__ = [
    "ConversionError",
    "ConversionResult",
    "convert_document",
    "finalize_swagger_spec",
    "ConversionRequest",
    "ConversionOutcome",
    "SettingsOverrides",
    "RunExecutionError",
    "apply_overrides",
    "execute_conversion_run",
]

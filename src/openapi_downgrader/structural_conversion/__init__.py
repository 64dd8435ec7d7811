"""OpenAPI 3.0 to Swagger 2.0 structural conversion exports."""

from .document_converter import SWAGGER_VERSION, convert_to_swagger2, fix_ref, fix_refs
from .parameter_conversion import convert_parameters, convert_request_body
from .response_conversion import convert_responses
from .schema_conversion import convert_discriminator_mapping, convert_schema
from .security_conversion import convert_security_scheme, convert_security_schemes
from .server_conversion import (
    ServerLocation,
    convert_servers,
    parse_server_url,
    substitute_server_variables,
)

__all__ = [
    "SWAGGER_VERSION",
    "ServerLocation",
    "convert_discriminator_mapping",
    "convert_parameters",
    "convert_request_body",
    "convert_responses",
    "convert_schema",
    "convert_security_scheme",
    "convert_security_schemes",
    "convert_servers",
    "convert_to_swagger2",
    "fix_ref",
    "fix_refs",
    "parse_server_url",
    "substitute_server_variables",
]

"""Security scheme downgrades from OpenAPI 3.0 to Swagger 2.0."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

OAUTH2_FLOW_NAMES = {
    "clientCredentials": "application",
    "authorizationCode": "accessCode",
}


def convert_security_scheme(security: dict[str, Any]) -> None:
    """Rewrite one security scheme object in place."""
    scheme_type = security.get("type")
    if scheme_type == "http" and security.get("scheme") == "basic":
        security["type"] = "basic"
        security.pop("scheme", None)
    elif scheme_type == "http" and security.get("scheme") == "bearer":
        security["type"] = "apiKey"
        security["name"] = "Authorization"
        security["in"] = "header"
        security.pop("scheme", None)
        security.pop("bearerFormat", None)
    elif scheme_type == "oauth2":
        flows = security.get("flows")
        if not isinstance(flows, Mapping) or not flows:
            return
        flow_name = next(iter(flows))
        flow = flows[flow_name] if isinstance(flows[flow_name], Mapping) else {}
        security["flow"] = OAUTH2_FLOW_NAMES.get(flow_name, flow_name)
        for key in ("authorizationUrl", "tokenUrl", "scopes"):
            if key in flow:
                security[key] = flow[key]
        del security["flows"]


def convert_security_schemes(schemes: Any) -> Any:
    if isinstance(schemes, Mapping):
        for security in schemes.values():
            if isinstance(security, dict):
                convert_security_scheme(security)
    return schemes

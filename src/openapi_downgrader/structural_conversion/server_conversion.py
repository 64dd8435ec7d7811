"""Server list to host/basePath/schemes rewrite."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class ServerLocation:
    """Swagger 2.0 addressing fields derived from one server URL."""

    host: str | None = None
    scheme: str | None = None
    base_path: str | None = None


def convert_servers(document: MutableMapping[str, Any]) -> None:
    """Derive `host`, `schemes` and `basePath` from the first declared server."""
    servers = document.get("servers")
    server = servers[0] if isinstance(servers, list) and servers else None
    if isinstance(server, Mapping):
        location = parse_server_url(substitute_server_variables(server))
        _set_or_remove(document, "host", location.host)
        _set_or_remove(document, "schemes", [location.scheme] if location.scheme else None)
        if location.base_path:
            document["basePath"] = location.base_path
    document.pop("servers", None)
    document.pop("openapi", None)


def substitute_server_variables(server: Mapping[str, Any]) -> str:
    url = str(server.get("url") or "")
    variables = server.get("variables")
    if isinstance(variables, Mapping):
        for name, variable in variables.items():
            default = variable.get("default") if isinstance(variable, Mapping) else None
            if default:
                url = url.replace(f"{{{name}}}", str(default))
    return url


def parse_server_url(url: str) -> ServerLocation:
    """Split an absolute http(s) URL; anything else is taken as a base path."""
    if not url:
        return ServerLocation()
    if not url.startswith(("http://", "https://")):
        return ServerLocation(base_path=url)
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return ServerLocation()
    if not parts.hostname:
        return ServerLocation()
    host = parts.netloc.rpartition("@")[2].rstrip(":")
    if port is not None and port == _DEFAULT_PORTS.get(parts.scheme):
        host = host[: host.rindex(":")]
    return ServerLocation(host=host, scheme=parts.scheme, base_path=parts.path or "/")


def _set_or_remove(document: MutableMapping[str, Any], key: str, value: Any) -> None:
    if value is None:
        document.pop(key, None)
    else:
        document[key] = value

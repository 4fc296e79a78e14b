"""Flatten a parsed OpenAPI/Swagger document into a surface map.

Every accessor tolerates missing or oddly shaped sections: a spec without
``paths`` or ``components`` simply yields empty collections.
"""

import logging
from typing import Any

from .models import ApiInfo, AuthRequirement, AuthScheme, AuthSummary, Endpoint, SurfaceMap

logger = logging.getLogger(__name__)

SURFACE_METHODS = ("get", "post", "put", "patch", "delete")
MATRIX_METHODS = ("get", "post", "put", "patch", "delete", "head", "options")

SURFACE_PURPOSE_PLACEHOLDER = "No description"


def _as_mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _has_entries(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0


def _text_or_none(value: Any) -> str | None:
    # Scalars are stringified; lists, mappings and booleans are treated as absent.
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)) and value != "":
        return str(value)
    return None


def extract_base_urls(spec: Any) -> list[str]:
    servers = _as_mapping(spec).get("servers")
    if not isinstance(servers, list):
        return []
    urls = (_text_or_none(server.get("url")) for server in servers if isinstance(server, dict))
    return [url for url in urls if url]


def extract_auth_schemes(spec: Any) -> list[AuthScheme]:
    components = _as_mapping(_as_mapping(spec).get("components"))
    security_schemes = _as_mapping(components.get("securitySchemes"))

    schemes: list[AuthScheme] = []
    for name, definition in security_schemes.items():
        definition = _as_mapping(definition)
        flows = definition.get("flows")
        schemes.append(
            AuthScheme(
                name=str(name),
                type=_text_or_none(definition.get("type")) or "unknown",
                location=_text_or_none(definition.get("in")),
                scheme=_text_or_none(definition.get("scheme")),
                bearerFormat=_text_or_none(definition.get("bearerFormat")),
                flows=sorted(str(flow) for flow in flows) if isinstance(flows, dict) else [],
            )
        )
    return schemes


def _operation_purpose(operation: dict[str, Any], placeholder: str) -> str:
    summary = operation.get("summary")
    if summary:
        return str(summary)
    description = operation.get("description")
    if isinstance(description, str):
        first_line = description.split("\n", maxsplit=1)[0]
        if first_line:
            return first_line
    return placeholder


def _auth_requirement(spec: dict[str, Any], operation: dict[str, Any]) -> AuthRequirement:
    # An absent security block says nothing about whether auth is needed.
    if _has_entries(spec.get("security")) or _has_entries(operation.get("security")):
        return AuthRequirement.REQUIRED
    return AuthRequirement.UNKNOWN


def extract_endpoints(
    spec: Any,
    methods: tuple[str, ...] = SURFACE_METHODS,
    placeholder: str = SURFACE_PURPOSE_PLACEHOLDER,
) -> list[Endpoint]:
    spec = _as_mapping(spec)
    paths = _as_mapping(spec.get("paths"))

    endpoints: list[Endpoint] = []
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        for method in methods:
            operation = path_item.get(method)
            if not isinstance(operation, dict):
                continue
            endpoints.append(
                Endpoint(
                    method=method.upper(),
                    path=str(path),
                    purpose=_operation_purpose(operation, placeholder),
                    auth_required=_auth_requirement(spec, operation),
                    request_schema_hint="Has requestBody (see spec)" if operation.get("requestBody") else "",
                    response_schema_hint="Has responses (see spec)" if operation.get("responses") else "",
                )
            )
    return endpoints


def extract_matrix_endpoints(spec: Any) -> list[Endpoint]:
    """Endpoint inventory used for capability matching: all seven methods, empty purpose placeholder."""
    return extract_endpoints(spec, methods=MATRIX_METHODS, placeholder="")


def normalize_surface_map(spec: Any) -> SurfaceMap:
    info = _as_mapping(_as_mapping(spec).get("info"))
    version = info.get("version")
    surface_map = SurfaceMap(
        api=ApiInfo(
            title=str(info.get("title") or "Unknown API"),
            version=str(version) if version else None,
        ),
        base_urls=extract_base_urls(spec),
        auth=AuthSummary(schemes=extract_auth_schemes(spec)),
        endpoints=extract_endpoints(spec),
    )
    logger.debug(
        "Normalized surface map: %d endpoints, %d auth schemes, %d base urls",
        len(surface_map.endpoints),
        len(surface_map.auth.schemes),
        len(surface_map.base_urls),
    )
    return surface_map

from typing import Any

SURFACE_MAP_TOOL = "opal_openapi_surface_map"
CAPABILITY_MATRIX_TOOL = "opal_capability_coverage_matrix"


def build_discovery_manifest() -> dict[str, Any]:
    """Tool registry manifest served from ``/discovery``."""
    return {
        "functions": [
            {
                "name": SURFACE_MAP_TOOL,
                "description": (
                    "Fetch an OpenAPI/Swagger spec (JSON or YAML) and return a normalized API surface map: "
                    "base URLs, auth schemes, and endpoints."
                ),
                "parameters": [
                    {
                        "name": "spec_url",
                        "type": "string",
                        "description": "Public URL to an OpenAPI/Swagger spec (JSON or YAML).",
                        "required": True,
                    }
                ],
                "endpoint": f"/tools/{SURFACE_MAP_TOOL}",
                "http_method": "POST",
                "auth_requirements": [],
            },
            {
                "name": CAPABILITY_MATRIX_TOOL,
                "description": (
                    "Extract requested capabilities from an integration request, match them against the "
                    "OpenAPI/Swagger spec linked in the request, and return a coverage matrix with evidence."
                ),
                "parameters": [
                    {
                        "name": "user_request",
                        "type": "string",
                        "description": "Free-text integration request, ideally including an OpenAPI/Swagger URL.",
                        "required": True,
                    },
                    {
                        "name": "max_capabilities",
                        "type": "number",
                        "description": "Maximum capabilities to extract (default 25, clamped to 5-60).",
                        "required": False,
                    },
                    {
                        "name": "max_evidence_per_capability",
                        "type": "number",
                        "description": "Evidence endpoints listed per capability (default 3, clamped to 1-10).",
                        "required": False,
                    },
                ],
                "endpoint": f"/tools/{CAPABILITY_MATRIX_TOOL}",
                "http_method": "POST",
                "auth_requirements": [],
            },
        ]
    }

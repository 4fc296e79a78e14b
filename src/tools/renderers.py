import json
from typing import Any, Callable

from .discovery import CAPABILITY_MATRIX_TOOL, SURFACE_MAP_TOOL
from .models import ToolResponse

_COVERAGE_BADGES = {"full": "FULL", "partial": "PARTIAL", "missing": "MISSING"}


def format_tool_response_markdown(tool_name: str, response: ToolResponse) -> str:
    status = "success" if response.success else "failure"
    lines = [
        f"## Tool: `{tool_name}`",
        "",
        f"- Status: `{status}`",
        f"- Status code: `{response.status_code}`",
    ]

    if not response.success:
        lines.extend(["", *_render_error(response.payload)])
        return "\n".join(lines)

    tool_renderers: dict[str, Callable[[dict[str, Any]], list[str]]] = {
        SURFACE_MAP_TOOL: _render_surface_map,
        CAPABILITY_MATRIX_TOOL: _render_capability_matrix,
    }
    renderer = tool_renderers.get(tool_name)
    if renderer is not None:
        lines.extend(["", *renderer(response.payload)])

    lines.extend(
        [
            "",
            "### Result JSON",
            "```json",
            json.dumps(response.payload, indent=2, ensure_ascii=True),
            "```",
        ]
    )
    return "\n".join(lines)


def _render_error(payload: dict[str, Any]) -> list[str]:
    lines = ["### Error", str(payload.get("error", "(unknown error)"))]
    if payload.get("details"):
        lines.extend(["", "```text", str(payload["details"]), "```"])
    if payload.get("spec_url"):
        lines.extend(["", f"- Spec URL: `{payload['spec_url']}`"])
    if payload.get("example"):
        lines.extend(["", "### Example Input", "```json", json.dumps(payload["example"], indent=2, ensure_ascii=True), "```"])
    return lines


def _render_surface_map(payload: dict[str, Any]) -> list[str]:
    surface_map = payload.get("surface_map") if isinstance(payload.get("surface_map"), dict) else {}
    api = surface_map.get("api") if isinstance(surface_map.get("api"), dict) else {}
    stats = payload.get("stats") if isinstance(payload.get("stats"), dict) else {}
    endpoints = surface_map.get("endpoints") if isinstance(surface_map.get("endpoints"), list) else []
    base_urls = surface_map.get("base_urls") if isinstance(surface_map.get("base_urls"), list) else []
    auth = surface_map.get("auth") if isinstance(surface_map.get("auth"), dict) else {}
    schemes = auth.get("schemes") if isinstance(auth.get("schemes"), list) else []

    version = api.get("version")
    title = f"`{api.get('title', 'Unknown API')}` version `{version}`" if version else f"`{api.get('title', 'Unknown API')}`"
    lines = [
        f"Surface map for {title}.",
        "",
        f"- Endpoints: `{stats.get('endpoint_count', len(endpoints))}`",
        f"- Auth schemes: `{stats.get('auth_scheme_count', len(schemes))}`",
        f"- Base URLs: `{stats.get('base_url_count', len(base_urls))}`",
    ]

    if base_urls:
        lines.extend(["", "### Base URLs", *[f"- {url}" for url in base_urls]])

    if schemes:
        lines.extend(["", "### Auth Schemes"])
        for scheme in schemes:
            detail = scheme.get("scheme") or scheme.get("in") or ""
            suffix = f" ({detail})" if detail else ""
            lines.append(f"- `{scheme.get('name')}`: {scheme.get('type', 'unknown')}{suffix}")

    lines.extend(["", "### Endpoints"])
    if not endpoints:
        lines.append("No endpoints found in the spec.")
    for endpoint in endpoints:
        auth_required = endpoint.get("auth_required")
        auth_label = "auth" if auth_required else ("no auth" if auth_required is False else "auth unknown")
        lines.append(f"- `{endpoint.get('method')} {endpoint.get('path')}`: {endpoint.get('purpose', '')} _({auth_label})_")
    return lines


def _render_capability_matrix(payload: dict[str, Any]) -> list[str]:
    overall = payload.get("overall") if isinstance(payload.get("overall"), dict) else {}
    matrix = payload.get("matrix") if isinstance(payload.get("matrix"), list) else []
    spec_url = (payload.get("input") or {}).get("spec_url")

    lines = [
        f"Coverage matrix for `{spec_url}`." if spec_url else "Coverage matrix without a spec (no OpenAPI/Swagger URL found).",
        "",
        f"- Coverage score: `{overall.get('coverage_score', 0)}`",
        f"- Full / partial / missing: `{overall.get('full_count', 0)}` / `{overall.get('partial_count', 0)}` / `{overall.get('missing_count', 0)}`",
        f"- Mean confidence: `{overall.get('confidence', 0)}`",
    ]
    if "endpoint_count" in overall:
        lines.append(f"- Endpoints inspected: `{overall['endpoint_count']}`")
    for note in overall.get("notes") or []:
        lines.append(f"- Note: {note}")

    for index, row in enumerate(matrix, start=1):
        if not isinstance(row, dict):
            continue
        badge = _COVERAGE_BADGES.get(row.get("coverage"), str(row.get("coverage")))
        lines.extend(["", f"### {index}. {row.get('capability')}", f"- Coverage: `{badge}` (confidence `{row.get('confidence', 0)}`)"])
        for evidence in row.get("evidence") or []:
            lines.append(
                f"  - `{evidence.get('method')} {evidence.get('path')}` `{evidence.get('confidence')}`: {evidence.get('reason')}"
            )
        for gap in row.get("gaps") or []:
            lines.append(f"- Gap: {gap}")
        if row.get("next_questions"):
            lines.append("- Next questions:")
            lines.extend([f"  - {question}" for question in row["next_questions"]])
    return lines

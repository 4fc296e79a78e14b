import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from surface.fetcher import SpecFetchError
from surface.fetcher_protocol import SpecFetcherProtocol
from surface.normalizer import normalize_surface_map

from .models import SURFACE_MAP_EXAMPLE, SurfaceMapRequest, ToolResponse

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to process OpenAPI spec."


async def run_surface_map(params: dict[str, Any], fetcher: SpecFetcherProtocol) -> ToolResponse:
    try:
        request = SurfaceMapRequest.model_validate(params)
    except ValidationError:
        return ToolResponse(
            status_code=400,
            payload={"error": "spec_url is required (string).", "example": SURFACE_MAP_EXAMPLE},
        )

    spec_url = request.spec_url
    try:
        spec = await asyncio.to_thread(fetcher.fetch, spec_url)
        surface_map = normalize_surface_map(spec)
    except SpecFetchError as exc:
        logger.warning("Surface map fetch failed for %s: %s", spec_url, exc)
        return _failure(spec_url, exc)
    except Exception as exc:
        logger.exception("Surface map internal exception for %s", spec_url)
        return _failure(spec_url, exc)

    logger.info("Surface map for %s: %d endpoints", spec_url, len(surface_map.endpoints))
    return ToolResponse(
        payload={
            "spec_url": spec_url,
            "surface_map": surface_map.model_dump(by_alias=True),
            "stats": {
                "endpoint_count": len(surface_map.endpoints),
                "auth_scheme_count": len(surface_map.auth.schemes),
                "base_url_count": len(surface_map.base_urls),
            },
        }
    )


def _failure(spec_url: str, exc: Exception) -> ToolResponse:
    return ToolResponse(
        status_code=500,
        payload={"error": FAILURE_MESSAGE, "details": str(exc), "spec_url": spec_url},
    )

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from capabilities.extractor import extract_spec_url
from capabilities.models import ScoringWeights
from capabilities.pipeline import build_capability_matrix, build_unverified_matrix
from surface.fetcher import SpecFetchError
from surface.fetcher_protocol import SpecFetcherProtocol

from .models import CAPABILITY_MATRIX_EXAMPLE, CapabilityMatrixRequest, ToolResponse

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to generate capability coverage matrix."


async def run_capability_matrix(
    params: dict[str, Any],
    fetcher: SpecFetcherProtocol,
    weights: ScoringWeights | None = None,
) -> ToolResponse:
    try:
        request = CapabilityMatrixRequest.model_validate(params)
    except ValidationError:
        return ToolResponse(
            status_code=400,
            payload={"error": "user_request is required (string).", "example": CAPABILITY_MATRIX_EXAMPLE},
        )

    spec_url = extract_spec_url(request.user_request)
    if spec_url is None:
        result = build_unverified_matrix(request.user_request, request.max_capabilities)
        return ToolResponse(payload=result.to_payload())

    try:
        spec = await asyncio.to_thread(fetcher.fetch, spec_url)
        result = build_capability_matrix(
            request.user_request,
            spec,
            spec_url,
            max_capabilities=request.max_capabilities,
            max_evidence=request.max_evidence_per_capability,
            weights=weights,
        )
    except SpecFetchError as exc:
        logger.warning("Capability matrix fetch failed for %s: %s", spec_url, exc)
        return _failure(spec_url, exc)
    except Exception as exc:
        logger.exception("Capability matrix internal exception for %s", spec_url)
        return _failure(spec_url, exc)

    return ToolResponse(payload=result.to_payload())


def _failure(spec_url: str, exc: Exception) -> ToolResponse:
    return ToolResponse(
        status_code=500,
        payload={"error": FAILURE_MESSAGE, "details": str(exc), "spec_url": spec_url},
    )

import logging
from typing import Any

from surface.normalizer import extract_matrix_endpoints

from .aggregator import NO_SPEC_NOTES, summarize, unverified_matrix
from .extractor import DEFAULT_MAX_CAPABILITIES, extract_capabilities
from .matcher import DEFAULT_MAX_EVIDENCE, CapabilityMatcher
from .models import CapabilityMatrix, MatrixInput, ScoringWeights

logger = logging.getLogger(__name__)


def build_capability_matrix(
    user_request: str,
    spec: Any,
    spec_url: str | None,
    max_capabilities: float = DEFAULT_MAX_CAPABILITIES,
    max_evidence: float = DEFAULT_MAX_EVIDENCE,
    weights: ScoringWeights | None = None,
) -> CapabilityMatrix:
    endpoints = extract_matrix_endpoints(spec)
    capabilities = extract_capabilities(user_request, max_capabilities)
    matrix = CapabilityMatcher(weights).build_matrix(capabilities, endpoints, max_evidence)
    overall = summarize(matrix, endpoint_count=len(endpoints))

    logger.info(
        "Capability matrix for %s: %d capabilities, %d endpoints, coverage score %d",
        spec_url,
        len(capabilities),
        len(endpoints),
        overall.coverage_score,
    )
    return CapabilityMatrix(
        input=MatrixInput(spec_url=spec_url),
        extracted_capabilities=capabilities,
        overall=overall,
        matrix=matrix,
    )


def build_unverified_matrix(
    user_request: str,
    max_capabilities: float = DEFAULT_MAX_CAPABILITIES,
) -> CapabilityMatrix:
    capabilities = extract_capabilities(user_request, max_capabilities)
    matrix = unverified_matrix(capabilities)
    logger.info("No spec URL in request; returning %d unverified capabilities", len(capabilities))
    return CapabilityMatrix(
        input=MatrixInput(spec_url=None),
        extracted_capabilities=capabilities,
        overall=summarize(matrix, notes=list(NO_SPEC_NOTES)),
        matrix=matrix,
    )

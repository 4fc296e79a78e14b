"""Capability extraction, endpoint matching, and coverage aggregation."""

from .aggregator import summarize, unverified_matrix
from .extractor import extract_capabilities, extract_spec_url
from .matcher import CapabilityMatcher
from .models import CapabilityMatrix, Evidence, MatrixRow, Overall, ScoringWeights
from .pipeline import build_capability_matrix, build_unverified_matrix

__all__ = [
    "CapabilityMatcher",
    "CapabilityMatrix",
    "Evidence",
    "MatrixRow",
    "Overall",
    "ScoringWeights",
    "build_capability_matrix",
    "build_unverified_matrix",
    "extract_capabilities",
    "extract_spec_url",
    "summarize",
    "unverified_matrix",
]

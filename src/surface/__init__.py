"""OpenAPI surface normalization and spec fetching."""

from .fetcher import SpecFetcher, SpecFetchError, parse_spec_text
from .fetcher_protocol import SpecFetcherProtocol
from .models import ApiInfo, AuthRequirement, AuthScheme, AuthSummary, Endpoint, SurfaceMap
from .normalizer import (
    extract_auth_schemes,
    extract_base_urls,
    extract_endpoints,
    extract_matrix_endpoints,
    normalize_surface_map,
)

__all__ = [
    "ApiInfo",
    "AuthRequirement",
    "AuthScheme",
    "AuthSummary",
    "Endpoint",
    "SpecFetchError",
    "SpecFetcher",
    "SpecFetcherProtocol",
    "SurfaceMap",
    "extract_auth_schemes",
    "extract_base_urls",
    "extract_endpoints",
    "extract_matrix_endpoints",
    "normalize_surface_map",
    "parse_spec_text",
]

import os

from capabilities.models import ScoringWeights
from surface.fetcher import DEFAULT_FETCH_TIMEOUT_SECONDS


class ServerConfig:
    def __init__(self) -> None:
        self.sse_port = int(os.getenv("MCP_SSE_PORT", "8000"))
        self.streamable_http_port = int(os.getenv("MCP_STREAMABLE_HTTP_PORT", "8080"))
        self.tool_bearer_token = os.getenv("OPAL_TOOL_BEARER_TOKEN") or None
        self.spec_fetch_timeout_seconds = self._get_float_env("SPEC_FETCH_TIMEOUT_SECONDS", DEFAULT_FETCH_TIMEOUT_SECONDS)

        defaults = ScoringWeights()
        self.scoring_weights = ScoringWeights(
            method_bonus=self._get_float_env("MATCH_METHOD_BONUS", defaults.method_bonus),
            webhook_bonus=self._get_float_env("MATCH_WEBHOOK_BONUS", defaults.webhook_bonus),
            search_bonus=self._get_float_env("MATCH_SEARCH_BONUS", defaults.search_bonus),
            full_threshold=self._get_float_env("COVERAGE_FULL_THRESHOLD", defaults.full_threshold),
            partial_threshold=self._get_float_env("COVERAGE_PARTIAL_THRESHOLD", defaults.partial_threshold),
        )

    @staticmethod
    def _get_float_env(key: str, default: float) -> float:
        """Get optional numeric environment variable or raise descriptive error."""
        value = os.getenv(key)
        if value is None or not value.strip():
            return default
        try:
            return float(value)
        except ValueError as exc:
            raise ValueError(f"Environment variable {key} must be a number, got {value!r}") from exc

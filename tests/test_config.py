import pytest

from config import ServerConfig

_ENV_KEYS = (
    "MCP_SSE_PORT",
    "MCP_STREAMABLE_HTTP_PORT",
    "OPAL_TOOL_BEARER_TOKEN",
    "SPEC_FETCH_TIMEOUT_SECONDS",
    "MATCH_METHOD_BONUS",
    "MATCH_WEBHOOK_BONUS",
    "MATCH_SEARCH_BONUS",
    "COVERAGE_FULL_THRESHOLD",
    "COVERAGE_PARTIAL_THRESHOLD",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = ServerConfig()

    assert config.sse_port == 8000
    assert config.streamable_http_port == 8080
    assert config.tool_bearer_token is None
    assert config.spec_fetch_timeout_seconds == 10.0
    assert config.scoring_weights.method_bonus == 0.15
    assert config.scoring_weights.full_threshold == 0.75


def test_scoring_weights_come_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("MATCH_WEBHOOK_BONUS", "0.3")
    monkeypatch.setenv("COVERAGE_PARTIAL_THRESHOLD", "0.4")
    monkeypatch.setenv("OPAL_TOOL_BEARER_TOKEN", "s3cret")

    config = ServerConfig()

    assert config.scoring_weights.webhook_bonus == 0.3
    assert config.scoring_weights.partial_threshold == 0.4
    assert config.tool_bearer_token == "s3cret"


def test_blank_bearer_token_disables_gate(monkeypatch) -> None:
    monkeypatch.setenv("OPAL_TOOL_BEARER_TOKEN", "")

    assert ServerConfig().tool_bearer_token is None


def test_invalid_number_names_the_variable(monkeypatch) -> None:
    monkeypatch.setenv("SPEC_FETCH_TIMEOUT_SECONDS", "soon")

    with pytest.raises(ValueError, match="SPEC_FETCH_TIMEOUT_SECONDS"):
        ServerConfig()

import pytest

from capabilities.matcher import MISSING_GAPS, PARTIAL_GAPS, CapabilityMatcher
from capabilities.models import ScoringWeights
from surface.models import Endpoint

ENDPOINTS = [
    Endpoint(method="POST", path="/customers", purpose="Create a customer"),
    Endpoint(method="POST", path="/webhooks", purpose="Register webhook"),
    Endpoint(method="GET", path="/customers", purpose="List customers"),
    Endpoint(method="DELETE", path="/customers/{id}", purpose="Delete a customer"),
]


def test_tokenize_drops_stopwords_and_punctuation() -> None:
    assert CapabilityMatcher.tokenize("Create a Customer-Record for our CRM!") == ["create", "customer", "record", "crm"]
    assert CapabilityMatcher.tokenize("") == []


@pytest.mark.parametrize(
    ("capability", "expected"),
    [
        ("Remove a user", ("DELETE",)),
        ("Edit profile", ("PUT", "PATCH")),
        ("Upload file", ("POST",)),
        ("Fetch orders", ("GET",)),
        ("Receive events", ("POST", "GET")),
        ("Archive everything", ()),
    ],
)
def test_infer_preferred_methods(capability: str, expected: tuple[str, ...]) -> None:
    assert CapabilityMatcher.infer_preferred_methods(capability) == expected


@pytest.mark.parametrize(
    ("confidence", "expected"),
    [(0.80, "full"), (0.75, "full"), (0.50, "partial"), (0.45, "partial"), (0.449999, "missing"), (0.10, "missing")],
)
def test_classify_thresholds(confidence: float, expected: str) -> None:
    assert CapabilityMatcher().classify(confidence) == expected


def test_create_capability_matches_post_endpoint_fully() -> None:
    row = CapabilityMatcher().match("Create a customer", ENDPOINTS)

    assert row.coverage == "full"
    assert row.confidence == 1.0
    assert row.gaps == []
    assert row.next_questions == []
    assert [(item.method, item.path) for item in row.evidence] == [
        ("POST", "/customers"),
        ("GET", "/customers"),
        ("DELETE", "/customers/{id}"),
    ]
    assert row.evidence[0].reason == "method aligns; keyword hits: create, customer"
    assert row.evidence[1].confidence == 0.5


def test_webhook_capability_gets_method_and_webhook_bonus() -> None:
    row = CapabilityMatcher().match("Receive webhooks", ENDPOINTS)

    assert row.coverage == "full"
    assert row.confidence == 0.9
    assert (row.evidence[0].method, row.evidence[0].path) == ("POST", "/webhooks")
    assert row.evidence[0].reason == "method aligns; keyword hits: webhooks; webhook/event signal"


def test_search_capability_gets_search_bonus() -> None:
    matcher = CapabilityMatcher()
    tokens = matcher.tokenize("Search customers")

    score = matcher.score("Search customers", tokens, ENDPOINTS[2], ("GET",))

    assert score == pytest.approx(0.8)


def test_partial_capability_carries_partial_advice() -> None:
    row = CapabilityMatcher().match("Archive customers", ENDPOINTS)

    assert row.coverage == "partial"
    assert row.confidence == 0.5
    assert row.gaps == list(PARTIAL_GAPS)
    assert len(row.next_questions) == 2


def test_unmatched_capability_is_missing_with_default_reason() -> None:
    row = CapabilityMatcher().match("Export invoices as PDF", ENDPOINTS)

    assert row.coverage == "missing"
    assert row.confidence == 0
    assert row.gaps == list(MISSING_GAPS)
    assert len(row.next_questions) == 3
    assert row.evidence[0].reason == "semantic keyword match"
    assert row.evidence[1].reason == "webhook/event signal"


def test_no_endpoints_yields_missing_without_evidence() -> None:
    row = CapabilityMatcher().match("Create a customer", [])

    assert row.coverage == "missing"
    assert row.evidence == []


def test_evidence_is_capped() -> None:
    endpoints = [Endpoint(method="GET", path=f"/things/{index}", purpose="Read thing") for index in range(30)]
    matcher = CapabilityMatcher()

    assert len(matcher.match("Read things", endpoints).evidence) == 3
    assert len(matcher.match("Read things", endpoints, max_evidence=50).evidence) == 10
    assert len(matcher.match("Read things", endpoints, max_evidence=0).evidence) == 1


def test_ties_keep_inventory_order() -> None:
    endpoints = [Endpoint(method="GET", path=f"/things/{index}", purpose="Read thing") for index in range(5)]

    row = CapabilityMatcher().match("Read things", endpoints, max_evidence=5)

    assert [item.path for item in row.evidence] == [f"/things/{index}" for index in range(5)]


def test_scores_are_clamped_to_one() -> None:
    matcher = CapabilityMatcher(ScoringWeights(method_bonus=5.0))
    tokens = matcher.tokenize("Create a customer")

    assert matcher.score("Create a customer", tokens, ENDPOINTS[0], ("POST",)) == 1.0


def test_custom_thresholds_change_classification() -> None:
    row = CapabilityMatcher(ScoringWeights(full_threshold=0.95)).match("Receive webhooks", ENDPOINTS)

    assert row.coverage == "partial"

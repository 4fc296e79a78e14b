import logging
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple

from surface.models import Endpoint

from .models import Coverage, Evidence, MatrixRow, ScoringWeights

logger = logging.getLogger(__name__)

DEFAULT_MAX_EVIDENCE = 3
MIN_EVIDENCE_CAP = 1
MAX_EVIDENCE_CAP = 10
MAX_REASON_KEYWORDS = 6

STOPWORDS = frozenset(
    {
        "we", "want", "to", "and", "or", "the", "a", "an", "of", "for", "with", "into",
        "our", "system", "tool", "platform", "integrate", "integration", "support",
        "must", "should", "can", "need", "needed", "required", "able", "allow",
        "via", "using", "based", "on", "from", "in", "at", "as", "by", "be",
    }
)

# First matching rule wins.
_METHOD_RULES: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("delete", "remove"), ("DELETE",)),
    (("update", "edit"), ("PUT", "PATCH")),
    (("create", "add", "upload", "send", "post"), ("POST",)),
    (("list", "get", "fetch", "read", "retrieve", "search"), ("GET",)),
    (("webhook", "event", "callback", "receive", "listen"), ("POST", "GET")),
)

_WEBHOOK_CAPABILITY_WORDS = ("webhook", "event", "callback")
_WEBHOOK_ENDPOINT_WORDS = ("webhook", "event", "callback", "hook")
_WEBHOOK_SIGNAL_WORDS = ("webhook", "event", "callback")
_SEARCH_WORDS = ("search", "query", "find", "list")

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")

MISSING_GAPS = ("No strong endpoint evidence found for this capability in the OpenAPI spec.",)
MISSING_QUESTIONS = (
    "Is this capability supported via a different API version or a separate product API?",
    "Is the capability implemented via webhooks/events instead of direct endpoints?",
    "Are there private/beta endpoints not included in the public OpenAPI spec?",
)
PARTIAL_GAPS = ("Some evidence exists, but coverage is incomplete or ambiguous from the spec alone.",)
PARTIAL_QUESTIONS = (
    "Confirm required request/response schemas and whether the endpoint supports needed filters/fields.",
    "Confirm rate limits and pagination behavior for this capability at the expected usage.",
)


class ScoredEndpoint(NamedTuple):
    endpoint: Endpoint
    confidence: float
    reason: str


def round_half_up(value: float, digits: int = 2) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def clamp_evidence_cap(max_evidence: float) -> int:
    return int(min(max(max_evidence, MIN_EVIDENCE_CAP), MAX_EVIDENCE_CAP))


def _mentions(text: str, words: tuple[str, ...]) -> bool:
    return any(word in text for word in words)


class CapabilityMatcher:
    """Scores capability phrases against an endpoint inventory.

    Confidence is the share of capability tokens found in the endpoint's
    ``"<METHOD> <path> <purpose>"`` text plus fixed bonuses, clamped to [0, 1].
    """

    def __init__(self, weights: ScoringWeights | None = None) -> None:
        self.weights = weights or ScoringWeights()

    @staticmethod
    def tokenize(value: str) -> list[str]:
        cleaned = _NON_ALNUM_RE.sub(" ", (value or "").lower())
        return [token for token in cleaned.split() if token not in STOPWORDS]

    @staticmethod
    def infer_preferred_methods(capability: str) -> tuple[str, ...]:
        capability_lc = capability.lower()
        for keywords, methods in _METHOD_RULES:
            if _mentions(capability_lc, keywords):
                return methods
        return ()

    def score(
        self,
        capability: str,
        tokens: list[str],
        endpoint: Endpoint,
        preferred_methods: tuple[str, ...],
    ) -> float:
        text = endpoint.search_text()
        capability_lc = capability.lower()

        hits = sum(1 for token in tokens if token in text)
        overlap = hits / len(tokens) if tokens else 0.0

        method_bonus = self.weights.method_bonus if endpoint.method in preferred_methods else 0.0
        webhook_bonus = (
            self.weights.webhook_bonus
            if _mentions(capability_lc, _WEBHOOK_CAPABILITY_WORDS) and _mentions(text, _WEBHOOK_ENDPOINT_WORDS)
            else 0.0
        )
        search_bonus = (
            self.weights.search_bonus
            if _mentions(capability_lc, _SEARCH_WORDS) and _mentions(text, _SEARCH_WORDS)
            else 0.0
        )
        return min(max(overlap + method_bonus + webhook_bonus + search_bonus, 0.0), 1.0)

    @staticmethod
    def explain(tokens: list[str], endpoint: Endpoint, preferred_methods: tuple[str, ...]) -> str:
        text = endpoint.search_text()
        reasons: list[str] = []
        if endpoint.method in preferred_methods:
            reasons.append("method aligns")
        hit_tokens = [token for token in tokens if token in text]
        if hit_tokens:
            reasons.append(f"keyword hits: {', '.join(hit_tokens[:MAX_REASON_KEYWORDS])}")
        if _mentions(text, _WEBHOOK_SIGNAL_WORDS):
            reasons.append("webhook/event signal")
        return "; ".join(reasons) if reasons else "semantic keyword match"

    def classify(self, confidence: float) -> Coverage:
        if confidence >= self.weights.full_threshold:
            return "full"
        if confidence >= self.weights.partial_threshold:
            return "partial"
        return "missing"

    def rank(self, capability: str, endpoints: list[Endpoint], max_evidence: float = DEFAULT_MAX_EVIDENCE) -> list[ScoredEndpoint]:
        tokens = self.tokenize(capability)
        preferred_methods = self.infer_preferred_methods(capability)

        scored = [
            ScoredEndpoint(
                endpoint=endpoint,
                confidence=self.score(capability, tokens, endpoint, preferred_methods),
                reason=self.explain(tokens, endpoint, preferred_methods),
            )
            for endpoint in endpoints
        ]
        # list.sort is stable, so ties keep inventory order.
        scored.sort(key=lambda item: item.confidence, reverse=True)
        return scored[: clamp_evidence_cap(max_evidence)]

    def match(self, capability: str, endpoints: list[Endpoint], max_evidence: float = DEFAULT_MAX_EVIDENCE) -> MatrixRow:
        top = self.rank(capability, endpoints, max_evidence)
        best = top[0].confidence if top else 0.0
        coverage = self.classify(best)

        gaps: list[str] = []
        next_questions: list[str] = []
        if coverage == "missing":
            gaps.extend(MISSING_GAPS)
            next_questions.extend(MISSING_QUESTIONS)
        elif coverage == "partial":
            gaps.extend(PARTIAL_GAPS)
            next_questions.extend(PARTIAL_QUESTIONS)

        return MatrixRow(
            capability=capability,
            coverage=coverage,
            confidence=round_half_up(best),
            evidence=[
                Evidence(
                    method=item.endpoint.method,
                    path=item.endpoint.path,
                    purpose=item.endpoint.purpose,
                    confidence=round_half_up(item.confidence),
                    reason=item.reason,
                )
                for item in top
            ],
            gaps=gaps,
            next_questions=next_questions,
        )

    def build_matrix(
        self,
        capabilities: list[str],
        endpoints: list[Endpoint],
        max_evidence: float = DEFAULT_MAX_EVIDENCE,
    ) -> list[MatrixRow]:
        matrix = [self.match(capability, endpoints, max_evidence) for capability in capabilities]
        logger.debug("Matched %d capabilities against %d endpoints", len(matrix), len(endpoints))
        return matrix

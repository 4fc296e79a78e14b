from .matcher import round_half_up
from .models import MatrixRow, Overall

NO_SPEC_GAPS = ("No OpenAPI/Swagger URL found in user_request, so endpoints could not be verified.",)
NO_SPEC_QUESTIONS = (
    "Can you provide an OpenAPI/Swagger spec URL (preferred) or official API docs link?",
    "Which auth method is supported (OAuth, API key, service account)?",
    "Are webhooks/events available? If yes, what event types and delivery guarantees exist?",
)
NO_SPEC_NOTES = ("No spec URL found; matrix is conservative (missing).",)


def summarize(
    matrix: list[MatrixRow],
    endpoint_count: int | None = None,
    notes: list[str] | None = None,
) -> Overall:
    """Roll matrix rows up into counts, a 0-100 coverage score and a mean confidence.

    Full rows count 1, partial rows 0.5 and missing rows 0 towards the score.
    """
    full_count = sum(1 for row in matrix if row.coverage == "full")
    partial_count = sum(1 for row in matrix if row.coverage == "partial")
    missing_count = sum(1 for row in matrix if row.coverage == "missing")

    if matrix:
        raw_score = (full_count * 1 + partial_count * 0.5) / len(matrix)
        mean_confidence = sum(row.confidence for row in matrix) / len(matrix)
    else:
        raw_score = 0.0
        mean_confidence = 0.0

    return Overall(
        coverage_score=int(round_half_up(raw_score * 100, digits=0)),
        full_count=full_count,
        partial_count=partial_count,
        missing_count=missing_count,
        confidence=round_half_up(mean_confidence),
        endpoint_count=endpoint_count,
        notes=notes,
    )


def unverified_matrix(capabilities: list[str]) -> list[MatrixRow]:
    """Rows for a request that named no spec: every capability is missing with no evidence."""
    return [
        MatrixRow(
            capability=capability,
            coverage="missing",
            confidence=0,
            evidence=[],
            gaps=list(NO_SPEC_GAPS),
            next_questions=list(NO_SPEC_QUESTIONS),
        )
        for capability in capabilities
    ]

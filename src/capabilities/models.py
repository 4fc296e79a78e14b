from typing import Any, Literal

from pydantic import BaseModel, Field

Coverage = Literal["full", "partial", "missing"]


class ScoringWeights(BaseModel):
    method_bonus: float = 0.15
    webhook_bonus: float = 0.25
    search_bonus: float = 0.15
    full_threshold: float = 0.75
    partial_threshold: float = 0.45


class Evidence(BaseModel):
    method: str
    path: str
    purpose: str = ""
    confidence: float
    reason: str


class MatrixRow(BaseModel):
    capability: str
    coverage: Coverage
    confidence: float
    evidence: list[Evidence] = Field(default_factory=list)
    gaps: list[str] = Field(default_factory=list)
    next_questions: list[str] = Field(default_factory=list)


class Overall(BaseModel):
    coverage_score: int
    full_count: int
    partial_count: int
    missing_count: int
    confidence: float
    endpoint_count: int | None = None
    notes: list[str] | None = None


class MatrixInput(BaseModel):
    spec_url: str | None = None


class CapabilityMatrix(BaseModel):
    input: MatrixInput = Field(default_factory=MatrixInput)
    extracted_capabilities: list[str] = Field(default_factory=list)
    overall: Overall
    matrix: list[MatrixRow] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump()
        payload["overall"] = self.overall.model_dump(exclude_none=True)
        return payload

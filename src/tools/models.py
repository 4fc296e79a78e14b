import math
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from capabilities.extractor import DEFAULT_MAX_CAPABILITIES
from capabilities.matcher import DEFAULT_MAX_EVIDENCE

SURFACE_MAP_EXAMPLE = {"spec_url": "https://petstore3.swagger.io/api/v3/openapi.json"}
CAPABILITY_MATRIX_EXAMPLE = {
    "user_request": (
        "Assess feasibility to integrate X. Need: create customer, receive webhook. "
        "OpenAPI: https://example.com/openapi.json"
    )
}

_NUMERIC_DEFAULTS = {
    "max_capabilities": DEFAULT_MAX_CAPABILITIES,
    "max_evidence_per_capability": DEFAULT_MAX_EVIDENCE,
}


class ToolResponse(BaseModel):
    status_code: int = 200
    payload: dict[str, Any] = Field(default_factory=dict)

    @property
    def success(self) -> bool:
        return 200 <= self.status_code < 300


class SurfaceMapRequest(BaseModel):
    spec_url: str = Field(strict=True, min_length=1)


class CapabilityMatrixRequest(BaseModel):
    user_request: str = Field(strict=True, min_length=1)
    max_capabilities: float = DEFAULT_MAX_CAPABILITIES
    max_evidence_per_capability: float = DEFAULT_MAX_EVIDENCE

    @field_validator("max_capabilities", "max_evidence_per_capability", mode="before")
    @classmethod
    def _finite_number_or_default(cls, value: Any, info: ValidationInfo) -> Any:
        # Caps are clamped downstream; anything that is not a finite number falls back.
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            return _NUMERIC_DEFAULTS[info.field_name]
        return value

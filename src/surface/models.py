from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_serializer

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


class AuthRequirement(str, Enum):
    REQUIRED = "required"
    NOT_REQUIRED = "not_required"
    UNKNOWN = "unknown"

    def as_json(self) -> bool | None:
        if self is AuthRequirement.REQUIRED:
            return True
        if self is AuthRequirement.NOT_REQUIRED:
            return False
        return None


class Endpoint(BaseModel):
    method: HttpMethod
    path: str
    purpose: str = ""
    auth_required: AuthRequirement = AuthRequirement.UNKNOWN
    scopes: list[str] = Field(default_factory=list)
    request_schema_hint: str = ""
    response_schema_hint: str = ""
    criticality: str = "supporting"
    notes: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_serializer("auth_required")
    def _serialize_auth_required(self, value: AuthRequirement) -> bool | None:
        return value.as_json()

    def search_text(self) -> str:
        return f"{self.method} {self.path} {self.purpose}".lower()


class AuthScheme(BaseModel):
    name: str
    type: str = "unknown"
    location: str | None = Field(default=None, serialization_alias="in")
    scheme: str | None = None
    bearerFormat: str | None = None
    flows: list[str] = Field(default_factory=list)


class ApiInfo(BaseModel):
    title: str = "Unknown API"
    version: str | None = None


class AuthSummary(BaseModel):
    schemes: list[AuthScheme] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)


class SurfaceMap(BaseModel):
    api: ApiInfo = Field(default_factory=ApiInfo)
    base_urls: list[str] = Field(default_factory=list)
    auth: AuthSummary = Field(default_factory=AuthSummary)
    endpoints: list[Endpoint] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)

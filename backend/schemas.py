"""Pydantic schemas for API request/response."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from models import CategoryScore

AUDIT_FAILED_HINT = "Failed to complete audit. Check URL and try again."


class AuditRequest(BaseModel):
    """Request body for POST /audit."""

    model_config = ConfigDict(populate_by_name=True)

    website_url: str = Field(default="", alias="websiteUrl")
    amazon_asin: str = Field(default="", alias="amazonASIN")

    @field_validator("website_url", "amazon_asin", mode="before")
    @classmethod
    def normalize_text_fields(cls, value: object) -> str:
        return str(value or "").strip()


class Recommendation(BaseModel):
    """Single prioritized fix derived from a negative finding."""

    model_config = ConfigDict(frozen=True)

    issue: str
    impact: str
    priority: Literal["HIGH"] = "HIGH"


class AuditReport(BaseModel):
    """Response for POST /audit."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    overall_score: int
    domain: str
    website_url: str
    amazon_asin: str | None = Field(default=None, alias="amazonASIN")
    timestamp: str
    categories: list[CategoryScore]
    top_recommendations: list[Recommendation]
    all_details: list[CategoryScore]


class ErrorResponse(BaseModel):
    """Body returned with 400 and 500 responses."""

    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str = "Backend is running"

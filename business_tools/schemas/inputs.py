from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

SWOT_COMPANY_MAX_LENGTH = 100

T = TypeVar("T", bound="AnalysisRequest")


class RequestRejected(ValueError):
    """Client error detected before any completion call is made."""


def _require(value: Optional[str], message: str) -> None:
    if value is None or not value.strip():
        raise RequestRejected(message)


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def check(self, max_field_length: Optional[int] = None) -> None:
        if max_field_length is None:
            return
        for name, value in self.model_dump(by_alias=True).items():
            if isinstance(value, str) and len(value) > max_field_length:
                raise RequestRejected(f"{name} too long (max {max_field_length} characters)")


class SwotRequest(AnalysisRequest):
    company: Optional[str] = None
    industry: Optional[str] = None
    additional_context: Optional[str] = Field(default=None, alias="additionalContext")

    def check(self, max_field_length: Optional[int] = None) -> None:
        _require(self.company, "Company name is required")
        if len(self.company) > SWOT_COMPANY_MAX_LENGTH:
            raise RequestRejected(
                f"Company name too long (max {SWOT_COMPANY_MAX_LENGTH} characters)"
            )
        super().check(max_field_length)


class MessagingRequest(AnalysisRequest):
    company: Optional[str] = None
    product: Optional[str] = None
    target_audience: Optional[str] = Field(default=None, alias="targetAudience")
    key_features: Optional[str] = Field(default=None, alias="keyFeatures")
    competitors: Optional[str] = None
    business_goals: Optional[str] = Field(default=None, alias="businessGoals")
    industry: Optional[str] = None
    tone_preference: Optional[str] = Field(default=None, alias="tonePreference")

    def check(self, max_field_length: Optional[int] = None) -> None:
        _require(self.company, "Company name is required")
        _require(self.product, "Product/service name is required")
        super().check(max_field_length)


def parse_request(
    model: Type[T], payload: Any, max_field_length: Optional[int] = None
) -> T:
    """Validate a raw JSON body into ``model`` or raise RequestRejected."""
    if not isinstance(payload, dict):
        raise RequestRejected("Request body must be a JSON object")

    try:
        req = model.model_validate(payload)
    except ValidationError as e:
        loc = e.errors()[0].get("loc") or ("body",)
        raise RequestRejected(f"Invalid value for {loc[0]}: expected a string") from e

    req.check(max_field_length)
    return req

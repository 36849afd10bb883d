from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..catalog.models import CatalogItem


class DietaryFlag(str, Enum):
    vegetarian = "vegetarian"
    vegan = "vegan"
    gluten_free = "gluten_free"
    halal = "halal"


class MatchScore(str, Enum):
    high = "High"
    medium = "Medium"
    low = "Low"


class ResultStatus(str, Enum):
    ok = "ok"
    no_match = "no_match"
    invalid_prompt = "invalid_prompt"
    not_configured = "not_configured"
    empty_catalog = "empty_catalog"


class FallbackStrategy(str, Enum):
    validated = "validated"
    unvalidated = "unvalidated"
    prefiltered = "prefiltered"
    top_rated = "top_rated"


class ConstraintSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    city: str | None = None
    cuisine: str | None = None
    dietary: frozenset[DietaryFlag] = frozenset()
    budget_min: int | None = None
    budget_max: int | None = None

    @property
    def was_filtered(self) -> bool:
        return bool(
            self.city
            or self.cuisine
            or self.dietary
            or self.budget_min is not None
            or self.budget_max is not None
        )


class RecommendationAnswer(BaseModel):
    """One entry of the oracle's answer. Every field is untrusted."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    vendor_name: str | None = Field(
        default=None, validation_alias=AliasChoices("vendorName", "vendor_name")
    )
    city: str | None = None
    reason: str | None = None
    price: str | None = None
    rating: str | None = None
    match_score: MatchScore | None = Field(
        default=None, validation_alias=AliasChoices("matchScore", "match_score")
    )

    @field_validator("title", "vendor_name", "city", "reason", "price", "rating", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str | None:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str):
            return value.strip() or None
        return None

    @field_validator("match_score", mode="before")
    @classmethod
    def _as_score(cls, value: Any) -> MatchScore | None:
        if not isinstance(value, str):
            return None
        for score in MatchScore:
            if score.value.lower() == value.strip().lower():
                return score
        return None


class Recommendation(CatalogItem):
    ai_reason: str
    match_score: MatchScore = MatchScore.medium
    rating_display: str

    @classmethod
    def from_item(
        cls, item: CatalogItem, reason: str, match_score: MatchScore | None = None
    ) -> Recommendation:
        return cls(
            **item.model_dump(include=set(CatalogItem.model_fields)),
            ai_reason=reason,
            match_score=match_score or MatchScore.medium,
            rating_display=item.rating.display,
        )


class RecommendationRequest(BaseModel):
    prompt: str | None = None


class RecommendationResult(BaseModel):
    success: bool
    status: ResultStatus
    message: str
    strategy: FallbackStrategy | None = None
    note: str | None = None
    recommendations: list[Recommendation] = Field(default_factory=list)

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

MAX_TAGS = 10


class PriceRange(str, Enum):
    lowest = "₹"
    low = "₹₹"
    high = "₹₹₹"
    highest = "₹₹₹₹"

    @property
    def tier(self) -> int:
        """1-based position in the cheapest-to-priciest ordering."""
        return len(self.value)


class Dietary(BaseModel):
    vegetarian: bool = False
    vegan: bool = False
    gluten_free: bool = Field(default=False, validation_alias=AliasChoices("gluten_free", "glutenfree"))
    halal: bool = False
    kosher: bool = False


class Nutrition(BaseModel):
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    fiber: float | None = None


class Rating(BaseModel):
    average: float = Field(default=0.0, ge=0.0, le=5.0)
    count: int = Field(default=0, ge=0)

    @property
    def display(self) -> str:
        if self.count == 0:
            return "No ratings yet"
        return f"{self.average:.1f} stars ({self.count} reviews)"


class CatalogItem(BaseModel):
    id: str | None = None
    title: str = Field(..., min_length=1)
    description: str = ""
    cuisine_type: str = ""
    vendor_name: str = ""
    city: str = ""
    address: str = ""
    price: float | None = Field(default=None, ge=0.0)
    price_range: PriceRange = PriceRange.low
    tags: list[str] = Field(default_factory=list)
    dietary: Dietary = Field(default_factory=Dietary)
    nutrition: Nutrition = Field(default_factory=Nutrition)
    rating: Rating = Field(default_factory=Rating)
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @field_validator("description", "cuisine_type", "vendor_name", "city", "address", mode="before")
    @classmethod
    def _blank_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("price_range", mode="before")
    @classmethod
    def _coerce_price_range(cls, value: Any) -> Any:
        if isinstance(value, PriceRange):
            return value
        allowed = {p.value for p in PriceRange}
        return value if isinstance(value, str) and value in allowed else PriceRange.low

    @field_validator("tags", mode="before")
    @classmethod
    def _cap_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        return [str(t).strip() for t in value if str(t).strip()][:MAX_TAGS]

    @field_validator("dietary", "nutrition", "rating", mode="before")
    @classmethod
    def _default_when_null(cls, value: Any) -> Any:
        return {} if value is None else value

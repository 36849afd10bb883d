from __future__ import annotations

import json
from typing import Any

from ..catalog.models import CatalogItem

RECOMMENDATION_PROMPT = """\
You are a food recommendation assistant. Your job is to STRICTLY filter and \
recommend ONLY food items that match the user's request.

USER REQUEST:
"{prompt}"

RULES:
1. Every constraint stated in the request is mandatory: location/city, budget, \
dietary requirements (vegetarian, vegan, gluten-free, halal), cuisine and any \
specific preference (spicy, sweet, comfort food, ...).
2. DO NOT recommend items that fail any stated constraint.
3. Among matching items, prefer those with HIGHER ratings \
(the "rating" field: {{"average": X.X, "count": N}}).
4. Return AT MOST {max_results} items, highest rated first.
5. Use only the items listed below; do not rely on outside knowledge.

Available Food Items ({count} items, pre-filtered and sorted by rating):
{items}

Return ONLY a JSON array with this exact structure:
[
  {{
    "title": "Exact food title from the list",
    "vendorName": "Exact vendor name from the list",
    "city": "Exact city from the list",
    "reason": "Why this matches the user's request",
    "price": "Price or price range",
    "rating": "X.X stars (Y reviews)",
    "matchScore": "High/Medium/Low"
  }}
]

If no item matches, return an empty array []. Never return items that do not match.
Respond with the JSON array only, no additional text or explanation."""


def _serialize_item(item: CatalogItem) -> dict[str, Any]:
    return {
        "title": item.title,
        "description": item.description,
        "cuisineType": item.cuisine_type,
        "vendorName": item.vendor_name,
        "city": item.city,
        "address": item.address,
        "price": item.price,
        "priceRange": item.price_range.value,
        "tags": item.tags,
        "dietary": item.dietary.model_dump(),
        "nutrition": item.nutrition.model_dump(exclude_none=True),
        "rating": {"average": item.rating.average, "count": item.rating.count},
    }


def compose_instruction(
    prompt: str,
    candidates: list[CatalogItem],
    max_results: int = 6,
) -> str:
    items = json.dumps([_serialize_item(c) for c in candidates], indent=2, ensure_ascii=False)
    return RECOMMENDATION_PROMPT.format(
        prompt=prompt.strip(),
        max_results=max_results,
        count=len(candidates),
        items=items,
    )

from __future__ import annotations

import logging
from typing import Iterable, TypeVar

from ..catalog.models import CatalogItem
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .models import ConstraintSet

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=CatalogItem)


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


def quality_key(item: CatalogItem) -> tuple[float, int]:
    return (item.rating.average, item.rating.count)


def rank_by_quality(items: Iterable[T]) -> list[T]:
    """Best rated first, then most reviewed. Ties keep their incoming order."""
    return sorted(items, key=quality_key, reverse=True)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def _loosely_matches(field_value: str, keyword: str) -> bool:
    value = field_value.lower().strip()
    if keyword in value:
        return True
    if value and value in keyword:
        return True
    return any(keyword in token for token in value.split())


def matches_city(item: CatalogItem, city: str) -> bool:
    return _loosely_matches(item.city, city) or city in item.address.lower()


def matches_cuisine(item: CatalogItem, cuisine: str) -> bool:
    return _loosely_matches(item.cuisine_type, cuisine)


def within_budget(
    item: CatalogItem,
    budget_min: int | None,
    budget_max: int | None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> bool:
    if item.price is not None:
        if budget_max is not None and item.price > budget_max:
            return False
        if budget_min is not None and item.price < budget_min:
            return False
        return True

    # Unpriced items are approximated from their price-range tier.
    if budget_max is not None:
        for ceiling, max_tier in config.price_tier_thresholds:
            if budget_max < ceiling:
                return item.price_range.tier <= max_tier
    return True


def satisfies(
    item: CatalogItem,
    constraints: ConstraintSet,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> bool:
    """True when the item meets every constraint that is present."""
    if constraints.city and not matches_city(item, constraints.city):
        return False
    if constraints.cuisine and not matches_cuisine(item, constraints.cuisine):
        return False
    for flag in constraints.dietary:
        if not getattr(item.dietary, flag.value):
            return False
    return within_budget(item, constraints.budget_min, constraints.budget_max, config)


# ---------------------------------------------------------------------------
# Candidate narrowing
# ---------------------------------------------------------------------------


def narrow_catalog(
    catalog: list[CatalogItem],
    constraints: ConstraintSet,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[CatalogItem]:
    """
    Reduce a newest-first catalog to the candidates shown to the oracle.

    With constraints, only matching items are kept (at most ``filtered_cap``).
    Without any, the ``unfiltered_cap`` most recent items are used. The
    surviving candidates are returned in quality order. An empty list means
    the constraints excluded everything.
    """
    if constraints.was_filtered:
        candidates = [item for item in catalog if satisfies(item, constraints, config)]
        logger.info("Constraint filter kept %d of %d items", len(candidates), len(catalog))
        candidates = candidates[: config.filtered_cap]
    else:
        candidates = catalog[: config.unfiltered_cap]

    return rank_by_quality(candidates)

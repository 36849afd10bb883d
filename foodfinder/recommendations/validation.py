from __future__ import annotations

import logging

from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .filters import satisfies
from .models import ConstraintSet, Recommendation

logger = logging.getLogger(__name__)


def validate_matches(
    matches: list[Recommendation],
    constraints: ConstraintSet,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[Recommendation]:
    """Keep only reconciled items that still meet every extracted constraint."""
    valid = [rec for rec in matches if satisfies(rec, constraints, config)]
    rejected = len(matches) - len(valid)
    if rejected:
        logger.warning("Post-validation rejected %d of %d oracle picks", rejected, len(matches))
    return valid

from __future__ import annotations

import logging

from ..catalog.models import CatalogItem
from .models import Recommendation, RecommendationAnswer

logger = logging.getLogger(__name__)


def _norm(text: str | None) -> str:
    return (text or "").strip().lower()


def _find_candidate(answer: RecommendationAnswer, candidates: list[CatalogItem]) -> int | None:
    """Index of the candidate an answer refers to: exact title, partial title, then vendor."""
    title = _norm(answer.title)
    if title:
        for i, item in enumerate(candidates):
            if _norm(item.title) == title:
                return i
        for i, item in enumerate(candidates):
            candidate_title = _norm(item.title)
            if title in candidate_title or candidate_title in title:
                return i

    vendor = _norm(answer.vendor_name)
    if vendor:
        for i, item in enumerate(candidates):
            candidate_vendor = _norm(item.vendor_name)
            if candidate_vendor and (candidate_vendor == vendor or vendor in candidate_vendor):
                return i

    return None


def reconcile_answers(
    answers: list[RecommendationAnswer],
    candidates: list[CatalogItem],
) -> list[Recommendation]:
    """
    Map oracle answers onto the candidates the oracle was shown.

    Answers that match nothing, or that resolve to a candidate already picked
    by an earlier answer, are dropped. Output keeps the oracle's order.
    """
    matched: list[Recommendation] = []
    seen: set[int] = set()

    for answer in answers:
        index = _find_candidate(answer, candidates)
        if index is None:
            logger.info("Dropping unmatched oracle answer %r", answer.title or answer.vendor_name)
            continue
        if index in seen:
            continue
        seen.add(index)

        item = candidates[index]
        reason = answer.reason or (
            f"A highly-rated {item.cuisine_type} option matching your preferences"
        )
        matched.append(Recommendation.from_item(item, reason, answer.match_score))

    return matched

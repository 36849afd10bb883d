from __future__ import annotations

import logging
import re

from .config import Vocabulary
from .models import ConstraintSet, DietaryFlag

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Dietary keywords
# ---------------------------------------------------------------------------

_DIETARY_KEYWORDS: dict[DietaryFlag, tuple[str, ...]] = {
    DietaryFlag.vegetarian: ("vegetarian",),
    DietaryFlag.vegan: ("vegan",),
    DietaryFlag.gluten_free: ("gluten-free", "gluten free", "glutenfree"),
    DietaryFlag.halal: ("halal",),
}

_VEGETARIAN_NEGATIONS = ("non-vegetarian", "non vegetarian")

# ---------------------------------------------------------------------------
# Budget patterns
# ---------------------------------------------------------------------------

_CURRENCY = r"(?:₹|rs\.?|rupees?|inr)?"

_UNDER_RE = re.compile(
    rf"\b(?:under|below|less than|upto|up to)\s*{_CURRENCY}\s*(\d+)",
    re.IGNORECASE,
)
_OVER_RE = re.compile(
    rf"\b(?:over|above|more than)\s*{_CURRENCY}\s*(\d+)",
    re.IGNORECASE,
)
# "500-1000", "500 to 1000", "between 500 and 1000"
_RANGE_RE = re.compile(r"(\d+)\s*(?:-|to|and)\s*(\d+)", re.IGNORECASE)


def _first_keyword(text: str, keywords: tuple[str, ...], kind: str) -> str | None:
    hits = [k for k in keywords if k in text]
    if len(hits) > 1:
        logger.info("Prompt mentions several %s keywords %s; using %r", kind, hits, hits[0])
    return hits[0] if hits else None


def _extract_dietary(text: str) -> frozenset[DietaryFlag]:
    flags = set()
    for flag, keywords in _DIETARY_KEYWORDS.items():
        if any(k in text for k in keywords):
            flags.add(flag)
    if DietaryFlag.vegetarian in flags and any(n in text for n in _VEGETARIAN_NEGATIONS):
        flags.discard(DietaryFlag.vegetarian)
    return frozenset(flags)


def _extract_budget(text: str) -> tuple[int | None, int | None]:
    budget_min: int | None = None
    budget_max: int | None = None

    under = _UNDER_RE.search(text)
    if under:
        budget_max = int(under.group(1))

    over = _OVER_RE.search(text)
    if over:
        budget_min = int(over.group(1))

    if not under and not over:
        span = _RANGE_RE.search(text)
        if span:
            budget_min, budget_max = int(span.group(1)), int(span.group(2))

    return budget_min, budget_max


def extract_constraints(prompt: str, vocabulary: Vocabulary) -> ConstraintSet:
    """
    Derive the hard constraints stated in a free-text prompt.

    Only one city and one cuisine are kept: the first vocabulary entry found
    in the prompt wins. Numeric budgets come from "under N", "over N" or a bare
    "N-M" range, the range being ignored when a directional phrase matched.
    """
    text = prompt.lower()
    budget_min, budget_max = _extract_budget(text)

    constraints = ConstraintSet(
        city=_first_keyword(text, vocabulary.cities, "city"),
        cuisine=_first_keyword(text, vocabulary.cuisines, "cuisine"),
        dietary=_extract_dietary(text),
        budget_min=budget_min,
        budget_max=budget_max,
    )
    logger.debug("Extracted constraints: %s", constraints)
    return constraints

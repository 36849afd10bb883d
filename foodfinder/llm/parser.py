from __future__ import annotations

import json
import logging
import re

from pydantic import ValidationError

from ..recommendations.models import RecommendationAnswer

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*")


def parse_answers(raw: str) -> list[RecommendationAnswer]:
    """
    Parse the model's reply into answer entries.

    Code fences are stripped first. Anything that is not a JSON array yields
    an empty list; non-object entries inside the array are skipped.
    """
    text = _FENCE_RE.sub("", raw or "").strip()
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        logger.warning("Oracle reply is not valid JSON: %.200r", text)
        return []

    if not isinstance(parsed, list):
        logger.warning("Oracle reply is %s, expected a JSON array", type(parsed).__name__)
        return []

    answers: list[RecommendationAnswer] = []
    for entry in parsed:
        if not isinstance(entry, dict):
            continue
        try:
            answers.append(RecommendationAnswer.model_validate(entry))
        except ValidationError:
            logger.debug("Skipping malformed oracle entry %r", entry)
    return answers

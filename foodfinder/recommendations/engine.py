from __future__ import annotations

import logging
from typing import Protocol

from ..catalog.models import CatalogItem
from ..catalog.store import CatalogSource
from ..llm.groq_client import OracleUnavailableError
from ..llm.parser import parse_answers
from ..llm.prompts import compose_instruction
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig, Vocabulary, load_vocabulary
from .constraints import extract_constraints
from .errors import EmptyCatalogError, InvalidPromptError, OracleNotConfiguredError, RecommendationError
from .filters import narrow_catalog, rank_by_quality
from .models import (
    FallbackStrategy,
    MatchScore,
    Recommendation,
    RecommendationResult,
    ResultStatus,
)
from .reconcile import reconcile_answers
from .validation import validate_matches

logger = logging.getLogger(__name__)

NO_MATCH_FOR_CONSTRAINTS = (
    "No food items found matching your specific criteria. Please try adjusting "
    "your request (e.g., different location, cuisine, or budget)."
)
NO_MATCH_FOR_REQUEST = (
    "No food items found matching your request. "
    "Please try a different prompt or check your criteria."
)
ORACLE_UNAVAILABLE_NOTE = "AI service temporarily unavailable, showing top-rated results."


class GenerationOracle(Protocol):
    @property
    def configured(self) -> bool: ...

    def generate(self, instruction: str) -> str: ...


def _templated(items: list[CatalogItem], suffix: str) -> list[Recommendation]:
    return [
        Recommendation.from_item(
            item,
            f"This highly-rated {item.cuisine_type} dish from {item.vendor_name} "
            f"in {item.city} {suffix}",
            MatchScore.medium,
        )
        for item in items
    ]


def _no_match(message: str) -> RecommendationResult:
    return RecommendationResult(success=False, status=ResultStatus.no_match, message=message)


class RecommendationEngine:
    """
    Turn a free-text request into at most ``max_results`` catalog items.

    Pipeline: extract constraints, narrow and rank the catalog, ask the
    oracle, parse and reconcile its answer, re-validate, then fall back:
    validated picks, unvalidated picks, pre-filtered candidates, no match.
    If the oracle call itself fails the globally top-rated items are returned.
    """

    def __init__(
        self,
        catalog: CatalogSource,
        oracle: GenerationOracle,
        config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
        vocabulary: Vocabulary | None = None,
    ):
        self.catalog = catalog
        self.oracle = oracle
        self.config = config
        self.vocabulary = vocabulary or load_vocabulary(config.vocabulary_path)

    def _check_request(self, prompt: str | None) -> tuple[str, list[CatalogItem]]:
        if not prompt or not prompt.strip():
            raise InvalidPromptError()
        if not self.oracle.configured:
            raise OracleNotConfiguredError()
        catalog = self.catalog.list_all()
        if not catalog:
            raise EmptyCatalogError()
        return prompt.strip(), catalog

    def _finish(
        self,
        items: list[Recommendation],
        strategy: FallbackStrategy,
        message: str,
        note: str | None = None,
    ) -> RecommendationResult:
        logger.info("Returning %d recommendations via %s", len(items), strategy.value)
        return RecommendationResult(
            success=True,
            status=ResultStatus.ok,
            strategy=strategy,
            message=message,
            note=note,
            recommendations=items,
        )

    def _top_rated(self, catalog: list[CatalogItem]) -> RecommendationResult:
        top = rank_by_quality(catalog)[: self.config.max_results]
        items = _templated(top, "is a great option!")
        return self._finish(
            items,
            FallbackStrategy.top_rated,
            f"Found {len(items)} highly-rated food items!",
            note=ORACLE_UNAVAILABLE_NOTE,
        )

    def recommend(self, prompt: str | None) -> RecommendationResult:
        try:
            text, catalog = self._check_request(prompt)
        except RecommendationError as exc:
            logger.warning("Recommendation request rejected: %s", exc.message)
            return RecommendationResult(success=False, status=exc.status, message=exc.message)

        constraints = extract_constraints(text, self.vocabulary)
        candidates = narrow_catalog(catalog, constraints, self.config)
        if not candidates:
            return _no_match(NO_MATCH_FOR_CONSTRAINTS)

        instruction = compose_instruction(text, candidates, self.config.max_results)
        try:
            raw = self.oracle.generate(instruction)
        except OracleUnavailableError:
            logger.warning("Oracle call failed, falling back to top-rated items", exc_info=True)
            return self._top_rated(catalog)

        matches = reconcile_answers(parse_answers(raw), candidates)
        validated = validate_matches(matches, constraints, self.config)

        if validated or matches:
            strategy = FallbackStrategy.validated if validated else FallbackStrategy.unvalidated
            if not validated:
                logger.warning("No oracle pick satisfied the constraints; returning them unvalidated")
            items = rank_by_quality(validated or matches)[: self.config.max_results]
            return self._finish(
                items, strategy, f"Found {len(items)} personalized recommendations for you!"
            )

        if constraints.was_filtered:
            top = candidates[: self.config.prefiltered_fallback_size]
            items = _templated(top, "matches your request!")
            return self._finish(
                items, FallbackStrategy.prefiltered, f"Found {len(items)} food items matching your request!"
            )

        return _no_match(NO_MATCH_FOR_REQUEST)

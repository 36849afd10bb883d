from __future__ import annotations

from foodfinder.recommendations.config import (
    DEFAULT_RECOMMENDATION_CONFIG,
    Vocabulary,
    load_vocabulary,
)
from foodfinder.recommendations.constraints import extract_constraints
from foodfinder.recommendations.models import DietaryFlag

VOCAB = Vocabulary(
    cities=("mumbai", "delhi", "pune", "new york"),
    cuisines=("italian", "indian", "chinese"),
)


# ── Keywords ─────────────────────────────────────────────────────────────


class TestKeywords:
    def test_city_and_dietary_and_budget(self):
        c = extract_constraints("vegan food under 300 in Pune", VOCAB)
        assert c.city == "pune"
        assert c.cuisine is None
        assert c.dietary == frozenset({DietaryFlag.vegan})
        assert c.budget_max == 300
        assert c.budget_min is None
        assert c.was_filtered

    def test_case_insensitive_cuisine(self):
        c = extract_constraints("Craving ITALIAN pasta tonight", VOCAB)
        assert c.cuisine == "italian"

    def test_multi_word_city(self):
        assert extract_constraints("best bagels in New York", VOCAB).city == "new york"

    def test_first_vocabulary_entry_wins(self):
        # vocabulary order decides, not position in the prompt
        assert extract_constraints("delhi or mumbai, either is fine", VOCAB).city == "mumbai"

    def test_no_keywords(self):
        c = extract_constraints("surprise me with something tasty", VOCAB)
        assert c.city is None
        assert c.cuisine is None
        assert c.dietary == frozenset()
        assert c.budget_min is None and c.budget_max is None
        assert not c.was_filtered

    def test_bundled_vocabulary_loads(self):
        vocab = load_vocabulary(DEFAULT_RECOMMENDATION_CONFIG.vocabulary_path)
        assert "pune" in vocab.cities
        assert "italian" in vocab.cuisines
        assert "vegan" not in vocab.cuisines


# ── Dietary ──────────────────────────────────────────────────────────────


class TestDietary:
    def test_vegetarian(self):
        assert extract_constraints("vegetarian lunch", VOCAB).dietary == {DietaryFlag.vegetarian}

    def test_non_vegetarian_suppresses_flag(self):
        assert extract_constraints("non-vegetarian thali", VOCAB).dietary == frozenset()
        assert extract_constraints("non vegetarian thali", VOCAB).dietary == frozenset()

    def test_gluten_free_and_halal(self):
        c = extract_constraints("gluten free halal wraps", VOCAB)
        assert c.dietary == {DietaryFlag.gluten_free, DietaryFlag.halal}

    def test_hyphenated_gluten_free(self):
        assert DietaryFlag.gluten_free in extract_constraints("gluten-free cake", VOCAB).dietary


# ── Budget ───────────────────────────────────────────────────────────────


class TestBudget:
    def test_under_with_currency(self):
        assert extract_constraints("snacks under ₹150", VOCAB).budget_max == 150
        assert extract_constraints("snacks below rs 99", VOCAB).budget_max == 99
        assert extract_constraints("snacks up to 400 rupees", VOCAB).budget_max == 400

    def test_over(self):
        c = extract_constraints("something fancy above 1500", VOCAB)
        assert c.budget_min == 1500
        assert c.budget_max is None

    def test_between_keeps_given_order(self):
        c = extract_constraints("dinner between 300 and 800", VOCAB)
        assert (c.budget_min, c.budget_max) == (300, 800)
        c = extract_constraints("dinner between 800 and 300", VOCAB)
        assert (c.budget_min, c.budget_max) == (800, 300)

    def test_dash_and_to_ranges(self):
        assert extract_constraints("meals 500-1000", VOCAB).budget_min == 500
        c = extract_constraints("meals 200 to 450", VOCAB)
        assert (c.budget_min, c.budget_max) == (200, 450)

    def test_range_ignored_when_directional_matched(self):
        c = extract_constraints("under 500 for 2 to 3 people", VOCAB)
        assert c.budget_max == 500
        assert c.budget_min is None

    def test_keyword_inside_word_is_ignored(self):
        c = extract_constraints("help me discover 5 new dishes", VOCAB)
        assert c.budget_min is None

from __future__ import annotations

from datetime import datetime, timedelta

from foodfinder.recommendations.config import RecommendationConfig
from foodfinder.recommendations.filters import (
    matches_city,
    matches_cuisine,
    narrow_catalog,
    rank_by_quality,
    satisfies,
    within_budget,
)
from foodfinder.recommendations.models import ConstraintSet, DietaryFlag


# ── Predicates ───────────────────────────────────────────────────────────


class TestLocation:
    def test_city_substring(self, make_item):
        assert matches_city(make_item("A", city="Navi Mumbai"), "mumbai")

    def test_address_match(self, make_item):
        item = make_item("A", city="Bandra", address="Linking Road, Mumbai")
        assert matches_city(item, "mumbai")

    def test_item_city_inside_keyword(self, make_item):
        assert matches_city(make_item("A", city="York", address=""), "new york")

    def test_empty_city_does_not_match(self, make_item):
        assert not matches_city(make_item("A", city="", address="Sector 5"), "pune")

    def test_other_city(self, make_item):
        assert not matches_city(make_item("A", city="Delhi", address="Connaught Place"), "pune")


class TestCuisine:
    def test_token_match(self, make_item):
        assert matches_cuisine(make_item("A", cuisine_type="South Indian"), "indian")

    def test_mismatch(self, make_item):
        assert not matches_cuisine(make_item("A", cuisine_type="Italian"), "chinese")


class TestBudget:
    def test_priced_item_bounds(self, make_item):
        item = make_item("A", price=300)
        assert within_budget(item, None, 300)
        assert not within_budget(item, None, 299)
        assert within_budget(item, 300, None)
        assert not within_budget(item, 301, None)
        assert within_budget(item, 200, 400)

    def test_zero_price_is_a_real_price(self, make_item):
        assert not within_budget(make_item("A", price=0), 100, None)

    def test_unpriced_item_uses_tiers(self, make_item):
        cheap = make_item("A", price=None, price_range="₹")
        mid = make_item("B", price=None, price_range="₹₹")
        high = make_item("C", price=None, price_range="₹₹₹")
        top = make_item("D", price=None, price_range="₹₹₹₹")

        assert within_budget(cheap, None, 300)
        assert not within_budget(mid, None, 300)
        assert within_budget(mid, None, 800)
        assert not within_budget(high, None, 800)
        assert within_budget(high, None, 1500)
        assert not within_budget(top, None, 1500)
        assert within_budget(top, None, 5000)

    def test_unpriced_item_kept_for_minimum_only(self, make_item):
        assert within_budget(make_item("A", price=None, price_range="₹"), 1000, None)


class TestSatisfies:
    def test_all_constraints(self, make_item):
        constraints = ConstraintSet(
            city="pune",
            cuisine="indian",
            dietary=frozenset({DietaryFlag.vegan}),
            budget_max=300,
        )
        good = make_item("A", city="Pune", dietary={"vegan": True}, price=250)
        assert satisfies(good, constraints)
        assert not satisfies(make_item("B", city="Pune", price=250), constraints)
        assert not satisfies(
            make_item("C", city="Pune", dietary={"vegan": True}, price=350), constraints
        )

    def test_no_constraints(self, make_item):
        assert satisfies(make_item("A"), ConstraintSet())


# ── Ranking & narrowing ──────────────────────────────────────────────────


def _catalog(make_item, n, **overrides):
    start = datetime(2025, 1, 1)
    items = [
        make_item(
            f"Dish {i:02d}",
            created_at=start + timedelta(days=i),
            rating={"average": (i % 5) + 0.5, "count": i},
            **overrides,
        )
        for i in range(n)
    ]
    return list(reversed(items))  # newest first


class TestRanking:
    def test_average_then_count(self, make_item):
        a = make_item("A", rating={"average": 4.0, "count": 10})
        b = make_item("B", rating={"average": 4.5, "count": 1})
        c = make_item("C", rating={"average": 4.0, "count": 50})
        assert [i.title for i in rank_by_quality([a, b, c])] == ["B", "C", "A"]

    def test_ties_keep_order(self, make_item):
        items = [make_item(t, rating={"average": 4.0, "count": 5}) for t in "XYZ"]
        assert [i.title for i in rank_by_quality(items)] == ["X", "Y", "Z"]

    def test_missing_rating_ranks_last(self, make_item):
        unrated = make_item("U", rating=None)
        rated = make_item("R", rating={"average": 1.0, "count": 1})
        assert rank_by_quality([unrated, rated])[0].title == "R"


class TestNarrowCatalog:
    def test_unfiltered_uses_most_recent(self, make_item):
        catalog = _catalog(make_item, 40)
        result = narrow_catalog(catalog, ConstraintSet())
        assert len(result) == 30
        assert {i.title for i in result} == {f"Dish {i:02d}" for i in range(10, 40)}

    def test_filtered_cap(self, make_item):
        catalog = _catalog(make_item, 60, city="Pune")
        result = narrow_catalog(catalog, ConstraintSet(city="pune"))
        assert len(result) == 50
        assert {i.title for i in result} == {f"Dish {i:02d}" for i in range(10, 60)}

    def test_result_is_quality_ordered(self, make_item):
        result = narrow_catalog(_catalog(make_item, 12), ConstraintSet())
        keys = [(i.rating.average, i.rating.count) for i in result]
        assert keys == sorted(keys, reverse=True)

    def test_constraints_exclude_everything(self, make_item):
        catalog = _catalog(make_item, 5)
        assert narrow_catalog(catalog, ConstraintSet(city="tokyo")) == []

    def test_custom_caps(self, make_item):
        config = RecommendationConfig(unfiltered_cap=3)
        assert len(narrow_catalog(_catalog(make_item, 10), ConstraintSet(), config)) == 3

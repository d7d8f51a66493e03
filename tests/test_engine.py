"""
Tests for the Pricing Engine
============================

Tests totals, plan discounts and support surcharges.
"""

from dataclasses import replace

import pytest

from configurator.models.catalog import Catalog
from configurator.models.state import ConfigurationState
from configurator.pricing.engine import (
    PAYMENT_PLANS,
    PLAN_DISCOUNTS,
    SUPPORT_MULTIPLIERS,
    PricingEngine,
    build_price_cache,
    calculate_total_price,
    plan_discount_for,
    support_multiplier_for,
)
from configurator.wizard.steps import CUSTOMIZABLE_STEPS


@pytest.fixture
def scenario_catalog():
    return Catalog.from_api({
        "coreFeatures": [{"id": 1, "name": "Core", "basePrice": 20}],
        "addOns": [{"id": 10, "name": "Extra", "price": 15}],
        "usageBasedPricing": [
            {"id": 20, "name": "Seats", "minValue": 0, "maxValue": 10, "defaultValue": 0, "pricePerUnit": 2},
        ],
    })


def make_state(**kwargs):
    return ConfigurationState(steps=CUSTOMIZABLE_STEPS, **kwargs)


class TestTables:

    def test_plan_discounts(self):
        assert PLAN_DISCOUNTS == (0.0, 0.10, 0.15, 0.20, 0.0)

    def test_plan_table_matches_discounts(self):
        for index, plan in enumerate(PAYMENT_PLANS):
            assert plan_discount_for(index) == plan.discount

    def test_support_multipliers(self):
        assert SUPPORT_MULTIPLIERS == (0.0, 0.20, 0.40)

    def test_out_of_range_indexes_are_free(self):
        assert plan_discount_for(9) == 0.0
        assert plan_discount_for(-1) == 0.0
        assert support_multiplier_for(3) == 0.0


class TestPriceCache:

    def test_resolves_every_item(self, catalog):
        cache = build_price_cache(catalog, "USD")
        assert cache == {1: 20.0, 2: 30.0, 10: 15.0, 11: 25.0, 20: 0.01, 21: 2.0}

    def test_uses_currency_table(self, catalog):
        cache = build_price_cache(catalog, "EUR")
        assert cache[2] == 27.0
        assert cache[11] == 22.5
        assert cache[1] == 20.0  # no EUR price, base amount as-is

    def test_empty_catalog(self):
        assert build_price_cache(Catalog.empty(), "USD") == {}


class TestRecompute:

    def test_example_scenario(self, scenario_catalog):
        """100 base + 20 feature + 15 add-on + 3x2 usage, 10% plan discount."""
        engine = PricingEngine(scenario_catalog, base_price=100, currency="USD")
        state = make_state(
            selected_features=list(scenario_catalog.core_features),
            selected_add_ons=list(scenario_catalog.add_ons),
            usage_quantities={20: 3},
        )
        engine.recompute(state)
        _, pricing = engine.select_plan(state, 1)

        assert pricing.total_feature_price == pytest.approx(41.0)
        assert pricing.subtotal == pytest.approx(141.0)
        assert pricing.support_price == 0.0
        assert pricing.total_price == pytest.approx(126.90)

    def test_initial_total_is_base(self, scenario_catalog):
        engine = PricingEngine(scenario_catalog, base_price=100, currency="USD")
        assert engine.state.total_price == 100

    def test_usage_without_matching_tier_is_skipped(self, scenario_catalog):
        engine = PricingEngine(scenario_catalog, base_price=100, currency="USD")
        pricing = engine.recompute(make_state(usage_quantities={999: 50, 20: 2}))
        assert pricing.total_feature_price == pytest.approx(4.0)

    def test_zero_quantity_contributes_nothing(self, scenario_catalog):
        engine = PricingEngine(scenario_catalog, base_price=100, currency="USD")
        pricing = engine.recompute(make_state(usage_quantities={20: 0}))
        assert pricing.total_feature_price == 0.0

    def test_total_consistent_after_changes(self, catalog):
        engine = PricingEngine(catalog, base_price=100, currency="USD")
        state = make_state(usage_quantities={20: 5000, 21: 3})
        engine.recompute(state)
        _, pricing = engine.select_support(state, 2)
        state = replace(state, selected_support_index=2, selected_add_ons=list(catalog.add_ons))
        _, pricing = engine.select_plan(state, 3)
        expected = (100 + pricing.total_feature_price + pricing.support_price) * (1 - pricing.plan_discount)
        assert pricing.total_price == pytest.approx(expected)

    def test_calculate_total_price(self):
        assert calculate_total_price(100, 41, 0, 0.10) == pytest.approx(126.9)


class TestPlanSelection:

    def test_select_same_plan_twice_clears(self, scenario_catalog):
        engine = PricingEngine(scenario_catalog, base_price=100, currency="USD")
        state = make_state()
        index, pricing = engine.select_plan(state, 2)
        assert index == 2
        assert pricing.plan_discount == 0.15

        state = replace(state, selected_plan_index=index)
        index, pricing = engine.select_plan(state, 2)
        assert index is None
        assert pricing.plan_discount == 0.0
        assert pricing.total_price == 100

    def test_select_different_plan_replaces(self, scenario_catalog):
        engine = PricingEngine(scenario_catalog, base_price=100, currency="USD")
        state = make_state(selected_plan_index=1)
        index, pricing = engine.select_plan(state, 3)
        assert index == 3
        assert pricing.plan_discount == 0.20
        assert pricing.total_price == pytest.approx(80.0)

    def test_plan_price_preview(self, scenario_catalog):
        engine = PricingEngine(scenario_catalog, base_price=100, currency="USD")
        assert engine.plan_price(0.20) == pytest.approx(80.0)
        assert engine.plan_savings(0.20) == pytest.approx(20.0)


class TestSupportSelection:

    def test_support_is_fraction_of_base_and_features(self, scenario_catalog):
        engine = PricingEngine(scenario_catalog, base_price=100, currency="USD")
        state = make_state(selected_features=list(scenario_catalog.core_features))
        engine.recompute(state)
        index, pricing = engine.select_support(state, 1)
        assert index == 1
        assert pricing.support_price == pytest.approx(24.0)  # 0.2 * (100 + 20)
        assert pricing.total_price == pytest.approx(144.0)

    def test_support_toggle_clears(self, scenario_catalog):
        engine = PricingEngine(scenario_catalog, base_price=100, currency="USD")
        state = make_state(selected_support_index=2)
        index, pricing = engine.select_support(state, 2)
        assert index is None
        assert pricing.support_price == 0.0

    def test_support_price_is_snapshot(self, scenario_catalog):
        """Later feature changes do not move an already chosen surcharge."""
        engine = PricingEngine(scenario_catalog, base_price=100, currency="USD")
        state = make_state()
        engine.recompute(state)
        engine.select_support(state, 1)
        assert engine.state.support_price == pytest.approx(20.0)

        state = replace(state, selected_support_index=1, selected_features=list(scenario_catalog.core_features))
        pricing = engine.recompute(state)
        assert pricing.support_price == pytest.approx(20.0)
        assert pricing.total_price == pytest.approx(140.0)


class TestCurrency:

    def test_currency_change_rebuilds_cache(self, catalog):
        engine = PricingEngine(catalog, base_price=100, currency="USD")
        state = make_state(selected_features=[catalog.core_features[1]], currency="EUR")
        pricing = engine.set_currency(state)
        assert pricing.feature_prices[2] == 27.0
        assert pricing.total_feature_price == pytest.approx(27.0)

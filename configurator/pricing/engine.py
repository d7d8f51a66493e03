"""
Pricing Engine
==============

Keeps PricingState consistent with ConfigurationState.

    featureSubtotal   = sum of selected feature prices
    addOnSubtotal     = sum of selected add-on prices
    usageSubtotal     = sum of price_per_unit * quantity (quantity > 0)
    totalFeaturePrice = feature + add-on + usage subtotals
    subtotal          = base + totalFeaturePrice + supportPrice
    totalPrice        = subtotal * (1 - planDiscount)

Plan discount and support surcharge come from fixed ordered tables indexed
by the buyer's choice. Support price is captured when the tier is chosen
(base + feature total at that moment) and is not re-derived afterwards.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from configurator.models.catalog import Catalog
from configurator.models.state import ConfigurationState, PricingState
from configurator.pricing.resolver import resolve_price

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentPlan:
    """A billing cadence option."""
    name: str
    period_months: int
    discount: float
    description: str
    popular: bool = False


@dataclass(frozen=True)
class SupportLevel:
    """A support tier option; surcharge is a fraction of base + features."""
    name: str
    multiplier: float
    response_time: str
    availability: str
    popular: bool = False


# =============================================================================
# Plan and Support Tables
# =============================================================================

PAYMENT_PLANS: Tuple[PaymentPlan, ...] = (
    PaymentPlan("Monthly", 1, 0.0, "Pay monthly with full flexibility"),
    PaymentPlan("Quarterly", 3, 0.10, "Save 10% with quarterly billing"),
    PaymentPlan("Semi-Annual", 6, 0.15, "Save 15% with semi-annual billing", popular=True),
    PaymentPlan("Annual", 12, 0.20, "Maximum savings with annual billing"),
)

# Index 4 is a reserved slot priced like Monthly.
PLAN_DISCOUNTS: Tuple[float, ...] = (0.0, 0.10, 0.15, 0.20, 0.0)

SUPPORT_LEVELS: Tuple[SupportLevel, ...] = (
    SupportLevel("Basic Support", 0.0, "24-48 hours", "Business Hours"),
    SupportLevel("Priority Support", 0.20, "4-8 hours", "Extended Hours", popular=True),
    SupportLevel("Premium Support", 0.40, "1-2 hours", "24/7"),
)

SUPPORT_MULTIPLIERS: Tuple[float, ...] = tuple(level.multiplier for level in SUPPORT_LEVELS)


def plan_discount_for(index: Optional[int]) -> float:
    """Discount fraction for a plan index; unknown indexes get none."""
    if index is None or index < 0 or index >= len(PLAN_DISCOUNTS):
        return 0.0
    return PLAN_DISCOUNTS[index]


def support_multiplier_for(index: Optional[int]) -> float:
    """Surcharge fraction for a support index; unknown indexes get none."""
    if index is None or index < 0 or index >= len(SUPPORT_MULTIPLIERS):
        return 0.0
    return SUPPORT_MULTIPLIERS[index]


# =============================================================================
# Pure calculations
# =============================================================================

def build_price_cache(catalog: Catalog, currency: str) -> Dict[int, float]:
    """Resolve every catalog item's unit price in the given currency."""
    prices: Dict[int, float] = {}
    for feature in catalog.core_features:
        prices[feature.id] = resolve_price(feature, currency, None, "base_price")
    for add_on in catalog.add_ons:
        prices[add_on.id] = resolve_price(add_on, currency, None, "price")
    for tier in catalog.usage_based_pricing:
        prices[tier.id] = resolve_price(tier, currency, None, "price_per_unit")
    return prices


def calculate_feature_total(
    config: ConfigurationState,
    catalog: Catalog,
    price_cache: Dict[int, float],
) -> float:
    """Sum of selected features, selected add-ons and metered usage."""
    currency = config.currency

    feature_total = sum(
        resolve_price(f, currency, price_cache, "base_price")
        for f in config.selected_features
    )
    add_on_total = sum(
        resolve_price(a, currency, price_cache, "price")
        for a in config.selected_add_ons
    )

    usage_total = 0.0
    for tier_id, quantity in config.usage_quantities.items():
        if quantity <= 0:
            continue
        tier = catalog.usage_tier(tier_id)
        if tier is None:
            continue
        usage_total += resolve_price(tier, currency, price_cache, "price_per_unit") * quantity

    return feature_total + add_on_total + usage_total


def calculate_total_price(
    base_price: float,
    feature_price: float,
    support_price: float,
    plan_discount: float,
) -> float:
    subtotal = base_price + feature_price + support_price
    return subtotal - subtotal * plan_discount


class PricingEngine:
    """
    Derives PricingState for one configuration session.

    The price cache lives on the engine instance and is rebuilt whenever
    the currency changes; there is no shared cache between sessions.
    """

    def __init__(self, catalog: Catalog, base_price: float, currency: str):
        self.catalog = catalog
        self.base_price = base_price
        self.state = PricingState(
            base_price=base_price,
            feature_prices=build_price_cache(catalog, currency),
            total_price=base_price,
        )

    def recompute(self, config: ConfigurationState) -> PricingState:
        """Recompute totals for the given configuration and store them."""
        total_feature_price = calculate_feature_total(
            config, self.catalog, self.state.feature_prices
        )
        self.state = replace(
            self.state,
            total_feature_price=total_feature_price,
            total_price=calculate_total_price(
                self.base_price,
                total_feature_price,
                self.state.support_price,
                self.state.plan_discount,
            ),
        )
        return self.state

    def set_currency(self, config: ConfigurationState) -> PricingState:
        """Rebuild the price cache for config.currency, then recompute."""
        self.state = replace(
            self.state,
            feature_prices=build_price_cache(self.catalog, config.currency),
        )
        logger.debug(f"Rebuilt price cache for {config.currency} ({len(self.state.feature_prices)} items)")
        return self.recompute(config)

    def select_plan(
        self, config: ConfigurationState, index: int
    ) -> Tuple[Optional[int], PricingState]:
        """
        Choose a billing plan.

        Choosing the already-selected plan clears it. Returns the new
        selected index together with the recomputed pricing.
        """
        if config.selected_plan_index == index:
            new_index = None
            discount = 0.0
        else:
            new_index = index
            discount = plan_discount_for(index)

        self.state = replace(self.state, plan_discount=discount)
        return new_index, self.recompute(config)

    def clear_plan(self, config: ConfigurationState) -> PricingState:
        self.state = replace(self.state, plan_discount=0.0)
        return self.recompute(config)

    def select_support(
        self, config: ConfigurationState, index: int
    ) -> Tuple[Optional[int], PricingState]:
        """
        Choose a support tier.

        Choosing the already-selected tier clears it. The surcharge is
        taken from base + feature total as they stand right now.
        """
        if config.selected_support_index == index:
            new_index = None
            support_price = 0.0
        else:
            new_index = index
            support_price = self.support_price_preview(index)

        self.state = replace(self.state, support_price=support_price)
        return new_index, self.recompute(config)

    # -------------------------------------------------------------------------
    # Previews for plan and support option cards
    # -------------------------------------------------------------------------

    def support_price_preview(self, index: int) -> float:
        return (self.base_price + self.state.total_feature_price) * support_multiplier_for(index)

    def plan_price(self, discount: float) -> float:
        """Total the buyer would pay under a plan with the given discount."""
        return calculate_total_price(
            self.base_price,
            self.state.total_feature_price,
            self.state.support_price,
            discount,
        )

    def plan_savings(self, discount: float) -> float:
        return self.plan_price(0.0) - self.plan_price(discount)

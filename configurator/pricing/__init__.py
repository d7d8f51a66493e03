"""Price resolution, derivation and presentation."""

from configurator.pricing.currency import CurrencyContext, currency_symbol, format_amount
from configurator.pricing.engine import (
    PAYMENT_PLANS,
    PLAN_DISCOUNTS,
    SUPPORT_LEVELS,
    SUPPORT_MULTIPLIERS,
    PricingEngine,
    build_price_cache,
)
from configurator.pricing.resolver import resolve_price
from configurator.pricing.selection import set_quantity, toggle_item, toggle_with_global_reset

__all__ = [
    "CurrencyContext",
    "currency_symbol",
    "format_amount",
    "PAYMENT_PLANS",
    "PLAN_DISCOUNTS",
    "SUPPORT_LEVELS",
    "SUPPORT_MULTIPLIERS",
    "PricingEngine",
    "build_price_cache",
    "resolve_price",
    "set_quantity",
    "toggle_item",
    "toggle_with_global_reset",
]

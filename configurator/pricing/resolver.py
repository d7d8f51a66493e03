"""Unit price lookup for catalog items."""

from typing import Dict, Mapping, Optional


def resolve_price(
    item,
    currency: str,
    price_cache: Optional[Mapping[int, float]],
    fallback_field: str,
) -> float:
    """
    Resolve an item's unit price in the given currency.

    Order:
    1. price_cache[item.id] (pre-resolved or overridden prices win)
    2. item.multi_currency_prices[currency]
    3. the item's own fallback_field, unconverted

    Exchange-rate conversion is the caller's job when no explicit
    per-currency price exists.
    """
    if price_cache and item.id in price_cache and price_cache[item.id] is not None:
        return price_cache[item.id]

    table: Dict[str, float] = getattr(item, "multi_currency_prices", None) or {}
    if table.get(currency) is not None:
        return table[currency]

    return getattr(item, fallback_field)

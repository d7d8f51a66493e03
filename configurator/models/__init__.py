"""Catalog and session state models."""

from configurator.models.catalog import (
    AddOn,
    Catalog,
    Feature,
    Package,
    UsageTier,
    normalize_string_list,
    parse_price_table,
)
from configurator.models.state import (
    ConfigurationState,
    ContactDetails,
    PricingState,
    SavePayload,
)

__all__ = [
    "AddOn",
    "Catalog",
    "Feature",
    "Package",
    "UsageTier",
    "normalize_string_list",
    "parse_price_table",
    "ConfigurationState",
    "ContactDetails",
    "PricingState",
    "SavePayload",
]

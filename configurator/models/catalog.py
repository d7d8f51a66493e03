"""
Catalog Models
==============

Packages, features, add-ons and usage tiers as supplied by the storefront.

The storefront speaks camelCase JSON and is loose about shapes:
- Package per-currency prices arrive as a serialized JSON string
- Add-on feature/dependency lists arrive as a list, a single string,
  a delimited string or a JSON array string

Everything is normalized here, once, so pricing and wizard code only ever
sees plain dicts and lists of strings.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError as PydanticValidationError,
    field_validator,
    model_validator,
)

from configurator.exceptions import CatalogError

logger = logging.getLogger(__name__)

_LIST_DELIMITERS = re.compile(r"[,;\n]")


def normalize_string_list(value: Any) -> List[str]:
    """
    Normalize a string | delimited string | list field to a list of strings.

    Empty entries are dropped and every entry is stripped.
    """
    if value is None:
        return []

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except ValueError:
                parsed = None
            if isinstance(parsed, list):
                return normalize_string_list(parsed)
        return [part.strip() for part in _LIST_DELIMITERS.split(text) if part.strip()]

    if isinstance(value, (list, tuple)):
        items = []
        for entry in value:
            if entry is None:
                continue
            entry = str(entry).strip()
            if entry:
                items.append(entry)
        return items

    return [str(value).strip()] if str(value).strip() else []


def parse_price_table(value: Any) -> Dict[str, float]:
    """
    Parse a per-currency price table.

    Accepts a mapping or its JSON serialization. Anything unparseable
    becomes an empty table; entries that are not numbers are dropped.
    """
    if value is None or value == "":
        return {}

    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            logger.debug(f"Ignoring unparseable price table: {value!r}")
            return {}

    if not isinstance(value, dict):
        return {}

    table = {}
    for code, price in value.items():
        if price is None or isinstance(price, bool):
            continue
        try:
            table[str(code)] = float(price)
        except (TypeError, ValueError):
            continue
    return table


class CatalogItem(BaseModel):
    """Fields shared by every priced catalog entry."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    name: str = ""
    description: str = ""
    multi_currency_prices: Dict[str, float] = Field(
        default_factory=dict, alias="multiCurrencyPrices"
    )

    @field_validator("multi_currency_prices", mode="before")
    @classmethod
    def validate_price_table(cls, v):
        return parse_price_table(v)

    @field_validator("name", "description", mode="before")
    @classmethod
    def validate_text(cls, v):
        return "" if v is None else v


class Feature(CatalogItem):
    """A core feature; required features must be selected to continue."""

    base_price: float = Field(default=0.0, alias="basePrice")
    is_required: bool = Field(default=False, alias="isRequired")


class AddOn(CatalogItem):
    """An optional priced extra."""

    price: float = 0.0
    currency: Optional[str] = None
    category: Optional[str] = None
    is_active: bool = Field(default=True, alias="isActive")
    icon: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    dependencies: List[str] = Field(default_factory=list)

    @field_validator("features", "dependencies", mode="before")
    @classmethod
    def validate_string_list(cls, v):
        return normalize_string_list(v)


class UsageTier(CatalogItem):
    """
    A metered unit with a user-settable quantity.

    Quantities outside [min_value, max_value] are reported by step
    validation, never clamped.
    """

    feature_id: Optional[int] = Field(default=None, alias="featureId")
    unit: str = ""
    min_value: int = Field(default=0, alias="minValue")
    max_value: int = Field(default=0, alias="maxValue")
    default_value: int = Field(default=0, alias="defaultValue")
    price_per_unit: float = Field(default=0.0, alias="pricePerUnit")

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.min_value > self.max_value:
            raise ValueError(
                f"minValue {self.min_value} exceeds maxValue {self.max_value}"
            )
        return self

    def in_range(self, quantity: int) -> bool:
        return self.min_value <= quantity <= self.max_value


class Package(BaseModel):
    """A sellable package. Immutable for the length of a session."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    title: str = ""
    description: str = ""
    extra_description: str = Field(default="", alias="extraDescription")
    icon: Optional[str] = None
    type: str = "custom"
    price: float = 0.0
    test_period_days: int = Field(default=0, alias="testPeriodDays")
    is_customizable: bool = Field(default=False, alias="isCustomizable")
    currency: str = "USD"
    multi_currency_prices: Dict[str, float] = Field(
        default_factory=dict, alias="multiCurrencyPrices"
    )

    @field_validator("multi_currency_prices", mode="before")
    @classmethod
    def validate_price_table(cls, v):
        return parse_price_table(v)

    @field_validator("currency", mode="before")
    @classmethod
    def validate_currency(cls, v):
        return v or "USD"

    @property
    def base_price(self) -> float:
        return self.price


class Catalog(BaseModel):
    """The selectable items offered for one package."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    core_features: List[Feature] = Field(default_factory=list, alias="coreFeatures")
    add_ons: List[AddOn] = Field(default_factory=list, alias="addOns")
    usage_based_pricing: List[UsageTier] = Field(
        default_factory=list, alias="usageBasedPricing"
    )

    @field_validator("core_features", "add_ons", "usage_based_pricing", mode="before")
    @classmethod
    def validate_list(cls, v):
        return v or []

    @classmethod
    def empty(cls) -> "Catalog":
        return cls()

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> "Catalog":
        """
        Build a catalog from a storefront response body.

        Missing sections become empty lists.

        Raises:
            CatalogError: A present item is malformed
        """
        if not data:
            return cls.empty()
        if not isinstance(data, dict):
            raise CatalogError(f"Catalog payload must be an object, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise CatalogError(f"Invalid catalog payload: {e}") from e

    @classmethod
    def add_ons_only(cls, items: Optional[List[Dict[str, Any]]]) -> "Catalog":
        """Catalog for a non-customizable package: add-ons and nothing else."""
        return cls.from_api({"addOns": items or []})

    def required_features(self) -> List[Feature]:
        return [f for f in self.core_features if f.is_required]

    def usage_tier(self, tier_id: int) -> Optional[UsageTier]:
        for tier in self.usage_based_pricing:
            if tier.id == tier_id:
                return tier
        return None

    def default_usage_quantities(self) -> Dict[int, int]:
        return {tier.id: tier.default_value for tier in self.usage_based_pricing}

    @property
    def is_empty(self) -> bool:
        return not (self.core_features or self.add_ons or self.usage_based_pricing)

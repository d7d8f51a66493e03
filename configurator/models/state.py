"""
Session State Models
====================

ConfigurationState is what the buyer has chosen; PricingState is what it
costs. Both are frozen: every wizard operation produces a new instance
with `dataclasses.replace`, so a half-applied change is never observable.

SavePayload is the bundle handed to the persistence collaborator when the
buyer confirms.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from configurator.models.catalog import AddOn, Feature

if TYPE_CHECKING:
    from configurator.wizard.steps import WizardStep


@dataclass(frozen=True)
class PricingState:
    """Derived prices. Recomputed after every change, never edited directly."""
    base_price: float = 0.0
    feature_prices: Dict[int, float] = field(default_factory=dict)
    total_feature_price: float = 0.0
    plan_discount: float = 0.0
    support_price: float = 0.0
    total_price: float = 0.0

    @property
    def subtotal(self) -> float:
        return self.base_price + self.total_feature_price + self.support_price

    @property
    def discount_amount(self) -> float:
        return self.subtotal * self.plan_discount


class ContactDetails(BaseModel):
    """Contact details captured on the Review & Confirm step."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""
    phone: str = ""
    address: str = ""
    country: str = ""
    state: str = ""
    city: str = ""
    zip_code: str = Field(default="", alias="zipCode")


@dataclass(frozen=True)
class ConfigurationState:
    """Everything the buyer has selected in one wizard session."""
    steps: Tuple["WizardStep", ...]
    current_step: int = 0
    selected_features: List[Feature] = field(default_factory=list)
    selected_add_ons: List[AddOn] = field(default_factory=list)
    usage_quantities: Dict[int, int] = field(default_factory=dict)
    selected_plan_index: Optional[int] = None
    selected_support_index: Optional[int] = None
    enterprise_features: Optional[Dict[str, bool]] = None
    checkbox_matrix: Dict[str, bool] = field(default_factory=dict)
    currency: str = "USD"
    contact: ContactDetails = field(default_factory=ContactDetails)

    @property
    def current_step_name(self) -> "WizardStep":
        return self.steps[self.current_step]

    @property
    def is_last_step(self) -> bool:
        return self.current_step == len(self.steps) - 1

    @property
    def is_first_step(self) -> bool:
        return self.current_step == 0


class SavePayload(BaseModel):
    """Full configuration snapshot submitted on confirm."""

    package_id: int
    package_title: str = ""
    is_customizable: bool = False
    selected_features: List[Feature] = Field(default_factory=list)
    selected_add_ons: List[AddOn] = Field(default_factory=list)
    usage_quantities: Dict[int, int] = Field(default_factory=dict)
    calculated_price: float
    selected_currency: str
    form_data: ContactDetails = Field(default_factory=ContactDetails)
    plan_discount: float = 0.0
    support_level: Optional[int] = None
    support_price: float = 0.0

    def to_selection_request(self) -> Dict[str, Any]:
        """
        Build the storefront's package selection request.

        Only customizable packages carry feature, add-on and usage ids.
        """
        request: Dict[str, Any] = {"packageId": self.package_id}
        if self.is_customizable:
            request["features"] = [f.id for f in self.selected_features]
            request["addOns"] = [a.id for a in self.selected_add_ons]
            request["usage"] = {str(k): v for k, v in self.usage_quantities.items()}
        return request

    def to_cart_item(self) -> Dict[str, Any]:
        """Cart line for the confirmed configuration."""
        return {
            "name": self.package_title,
            "price": self.calculated_price,
            "currency": self.selected_currency,
            "quantity": 1,
            "features": [f.name for f in self.selected_features],
            "addOns": [a.name for a in self.selected_add_ons],
            "packageType": "Custom" if self.is_customizable else "Standard",
        }

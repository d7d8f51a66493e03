"""
Step Validation
===============

Blocking rules checked against the step the buyer is about to leave.
Steps without a rule always pass; an empty add-on or enterprise
selection is allowed.
"""

from typing import Optional

from configurator.exceptions import ValidationError
from configurator.models.catalog import Catalog
from configurator.models.state import ConfigurationState
from configurator.wizard.matrix import any_cell_selected
from configurator.wizard.steps import WizardStep


def validate_core_features(config: ConfigurationState, catalog: Catalog) -> None:
    selected_ids = {f.id for f in config.selected_features}
    missing = [f for f in catalog.required_features() if f.id not in selected_ids]
    if missing:
        raise ValidationError(
            "Please select all required features.",
            step=WizardStep.CORE_FEATURES.value,
            field=f"feature:{missing[0].id}",
        )


def validate_usage(config: ConfigurationState, catalog: Catalog) -> None:
    for tier in catalog.usage_based_pricing:
        value = config.usage_quantities.get(tier.id)
        if value is None:
            value = tier.default_value
        if not tier.in_range(value):
            raise ValidationError(
                f"For {tier.name}, please enter a value between "
                f"{tier.min_value} and {tier.max_value}.",
                step=WizardStep.USAGE.value,
                field=f"usage:{tier.id}",
            )


def validate_package_details(config: ConfigurationState, is_customizable: bool) -> None:
    """Standard packages need a plan-tier cell picked before continuing."""
    if is_customizable:
        return
    if not any_cell_selected(config.checkbox_matrix):
        raise ValidationError(
            "Please select a plan for at least one add-on.",
            step=WizardStep.PACKAGE_DETAILS.value,
            field="checkbox_matrix",
        )


def validate_step(
    config: ConfigurationState,
    catalog: Catalog,
    is_customizable: bool = True,
    step: Optional[WizardStep] = None,
) -> None:
    """
    Run the rule for a step (default: the current one).

    Raises:
        ValidationError: The step cannot be left yet
    """
    step = WizardStep(step if step is not None else config.current_step_name)

    if step == WizardStep.CORE_FEATURES:
        validate_core_features(config, catalog)
    elif step == WizardStep.USAGE:
        validate_usage(config, catalog)
    elif step == WizardStep.PACKAGE_DETAILS:
        validate_package_details(config, is_customizable)

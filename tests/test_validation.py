"""Tests for step validation rules."""

from dataclasses import replace

import pytest

from configurator.exceptions import ValidationError
from configurator.models.state import ConfigurationState
from configurator.wizard.steps import CUSTOMIZABLE_STEPS, STANDARD_STEPS, WizardStep
from configurator.wizard.validation import (
    validate_core_features,
    validate_package_details,
    validate_step,
    validate_usage,
)


def at_step(step: WizardStep, steps=CUSTOMIZABLE_STEPS, **kwargs) -> ConfigurationState:
    return ConfigurationState(steps=steps, current_step=steps.index(step), **kwargs)


class TestCoreFeatures:

    def test_missing_required_feature_blocks(self, catalog):
        with pytest.raises(ValidationError) as exc:
            validate_core_features(at_step(WizardStep.CORE_FEATURES), catalog)
        assert exc.value.message == "Please select all required features."
        assert exc.value.field == "feature:1"
        assert exc.value.step == "Select Core Features"

    def test_required_selected_passes(self, catalog):
        state = at_step(WizardStep.CORE_FEATURES, selected_features=[catalog.core_features[0]])
        validate_core_features(state, catalog)

    def test_optional_features_not_needed(self, catalog):
        state = at_step(WizardStep.CORE_FEATURES, selected_features=list(catalog.core_features))
        validate_core_features(replace(state, selected_features=state.selected_features[:1]), catalog)


class TestUsage:

    def test_below_minimum_blocks(self, catalog):
        state = at_step(WizardStep.USAGE, usage_quantities={20: 500, 21: 1})
        with pytest.raises(ValidationError) as exc:
            validate_usage(state, catalog)
        assert exc.value.message == "For API Calls, please enter a value between 1000 and 100000."
        assert exc.value.field == "usage:20"

    def test_bounds_are_inclusive(self, catalog):
        validate_usage(at_step(WizardStep.USAGE, usage_quantities={20: 1000, 21: 50}), catalog)

    def test_above_maximum_blocks(self, catalog):
        state = at_step(WizardStep.USAGE, usage_quantities={20: 1000, 21: 51})
        with pytest.raises(ValidationError, match="Seats"):
            validate_usage(state, catalog)

    def test_unset_quantity_uses_default(self, catalog):
        validate_usage(at_step(WizardStep.USAGE), catalog)


class TestPackageDetails:

    def test_customizable_needs_nothing(self):
        validate_package_details(at_step(WizardStep.PACKAGE_DETAILS), is_customizable=True)

    def test_standard_needs_matrix_cell(self):
        state = at_step(
            WizardStep.PACKAGE_DETAILS,
            steps=STANDARD_STEPS,
            checkbox_matrix={"business-10": False},
        )
        with pytest.raises(ValidationError):
            validate_package_details(state, is_customizable=False)

        validate_package_details(
            replace(state, checkbox_matrix={"business-10": True}),
            is_customizable=False,
        )


class TestValidateStep:

    @pytest.mark.parametrize("step", [
        WizardStep.ADD_ONS,
        WizardStep.PAYMENT_PLAN,
        WizardStep.SUPPORT_LEVEL,
        WizardStep.REVIEW,
    ])
    def test_steps_without_rules_pass(self, catalog, step):
        validate_step(at_step(step), catalog)

    def test_uses_current_step_by_default(self, catalog):
        with pytest.raises(ValidationError):
            validate_step(at_step(WizardStep.CORE_FEATURES), catalog)

    def test_explicit_step_overrides_current(self, catalog):
        state = at_step(WizardStep.REVIEW, usage_quantities={20: 1})
        with pytest.raises(ValidationError):
            validate_step(state, catalog, step=WizardStep.USAGE)

    def test_empty_enterprise_selection_allowed(self, catalog):
        state = at_step(WizardStep.ENTERPRISE_FEATURES, steps=STANDARD_STEPS, enterprise_features={})
        validate_step(state, catalog, is_customizable=False)

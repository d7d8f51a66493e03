"""Configuration wizard: steps, selection rules and the session controller."""

from configurator.wizard.steps import CUSTOMIZABLE_STEPS, STANDARD_STEPS, WizardStep, steps_for
from configurator.wizard.enterprise import ENTERPRISE_CATEGORIES, EnterpriseCategory
from configurator.wizard.matrix import PlanTier, matrix_key
from configurator.wizard.controller import (
    ConfigurationController,
    ConfiguratorSnapshot,
    StepResult,
)

__all__ = [
    "CUSTOMIZABLE_STEPS",
    "STANDARD_STEPS",
    "WizardStep",
    "steps_for",
    "ENTERPRISE_CATEGORIES",
    "EnterpriseCategory",
    "PlanTier",
    "matrix_key",
    "ConfigurationController",
    "ConfiguratorSnapshot",
    "StepResult",
]

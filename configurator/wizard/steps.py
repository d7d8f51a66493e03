"""
Wizard Step Definitions
=======================

The step sequence is fixed once per session from the package's
customizability:

Customizable packages walk through features, add-ons and usage before
billing. Standard packages skip straight to billing and offer the
enterprise options instead.
"""

from enum import Enum
from typing import Tuple


class WizardStep(str, Enum):
    """Named wizard steps. Values are the labels shown to the buyer."""
    PACKAGE_DETAILS = "Package Details"
    CORE_FEATURES = "Select Core Features"
    ADD_ONS = "Choose Add-Ons"
    USAGE = "Configure Usage"
    PAYMENT_PLAN = "Select Payment Plan"
    SUPPORT_LEVEL = "Choose Support Level"
    ENTERPRISE_FEATURES = "Configure Enterprise Features"
    REVIEW = "Review & Confirm"


CUSTOMIZABLE_STEPS: Tuple[WizardStep, ...] = (
    WizardStep.PACKAGE_DETAILS,
    WizardStep.CORE_FEATURES,
    WizardStep.ADD_ONS,
    WizardStep.USAGE,
    WizardStep.PAYMENT_PLAN,
    WizardStep.SUPPORT_LEVEL,
    WizardStep.REVIEW,
)

STANDARD_STEPS: Tuple[WizardStep, ...] = (
    WizardStep.PACKAGE_DETAILS,
    WizardStep.PAYMENT_PLAN,
    WizardStep.SUPPORT_LEVEL,
    WizardStep.ENTERPRISE_FEATURES,
    WizardStep.REVIEW,
)


def steps_for(is_customizable: bool) -> Tuple[WizardStep, ...]:
    """Step sequence for a package."""
    return CUSTOMIZABLE_STEPS if is_customizable else STANDARD_STEPS

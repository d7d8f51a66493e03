"""
Enterprise Feature Exclusivity
==============================

Enterprise options are grouped into four categories. Only one category
may hold selections at a time: once any flag in a category is on, flags in
the other categories cannot be switched on until the active category is
fully cleared. Switching a flag off is always allowed, so a locked state
can always be left.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional


class EnterpriseCategory(str, Enum):
    ANALYTICS = "analytics"
    MULTI_LOCATION = "multiLocation"
    SECURITY = "security"
    API = "api"


ENTERPRISE_CATEGORIES: Dict[EnterpriseCategory, FrozenSet[str]] = {
    EnterpriseCategory.ANALYTICS: frozenset({
        "realTimeAnalytics",
        "customReports",
        "dataExport",
        "predictiveAnalytics",
    }),
    EnterpriseCategory.MULTI_LOCATION: frozenset({
        "centralizedManagement",
        "locationSettings",
        "crossLocationInventory",
        "interLocationTransfers",
    }),
    EnterpriseCategory.SECURITY: frozenset({
        "roleBasedAccess",
        "advancedEncryption",
        "auditLogging",
        "twoFactorAuth",
    }),
    EnterpriseCategory.API: frozenset({
        "restfulApi",
        "webhookNotifications",
        "customIntegration",
        "bulkDataImport",
    }),
}


def default_enterprise_flags() -> Dict[str, bool]:
    """Every enterprise key, switched off."""
    return {
        key: False
        for keys in ENTERPRISE_CATEGORIES.values()
        for key in sorted(keys)
    }


def category_of(feature_key: str) -> Optional[EnterpriseCategory]:
    for category, keys in ENTERPRISE_CATEGORIES.items():
        if feature_key in keys:
            return category
    return None


def active_category(flags: Optional[Dict[str, bool]]) -> Optional[EnterpriseCategory]:
    """The category currently holding selections, if any."""
    if not flags:
        return None
    for category, keys in ENTERPRISE_CATEGORIES.items():
        if any(flags.get(key) for key in keys):
            return category
    return None


def is_category_disabled(
    flags: Optional[Dict[str, bool]],
    category: EnterpriseCategory | str,
) -> bool:
    """True while a different category is active."""
    active = active_category(flags)
    return active is not None and active != EnterpriseCategory(category)


def toggle_enterprise_feature(
    flags: Optional[Dict[str, bool]],
    feature_key: str,
) -> Optional[Dict[str, bool]]:
    """
    Toggle one enterprise flag under the category lock.

    Returns the same mapping object when the toggle is refused (locked,
    unknown key, or no flags for this package) so callers can detect a
    no-op by identity.
    """
    if flags is None:
        return flags

    if flags.get(feature_key):
        return {**flags, feature_key: False}

    category = category_of(feature_key)
    if category is None:
        return flags

    if is_category_disabled(flags, category):
        return flags

    return {**flags, feature_key: True}


def any_enterprise_feature_selected(flags: Optional[Dict[str, bool]]) -> bool:
    return bool(flags) and any(flags.values())

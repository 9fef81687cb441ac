"""
Data Models Package

This package contains all Pydantic models used in SubScan.
All subscription data flowing through the system must conform to these schemas.
"""

from subscan.models.subscription import (
    CATEGORY_COLORS,
    CURRENT_SCHEMA_VERSION,
    BillingCycle,
    PersistedState,
    PresetSubscription,
    Subscription,
    SubscriptionCandidate,
    SubscriptionCategory,
    ValidationIssue,
    color_for,
)
from subscan.models.catalog import (
    PRESET_SUBSCRIPTIONS,
    available_presets,
    find_preset,
)

__all__ = [
    # Subscription models
    "BillingCycle",
    "CATEGORY_COLORS",
    "PresetSubscription",
    "Subscription",
    "SubscriptionCandidate",
    "SubscriptionCategory",
    "color_for",
    # Validation
    "ValidationIssue",
    # Persistence
    "CURRENT_SCHEMA_VERSION",
    "PersistedState",
    # Catalog
    "PRESET_SUBSCRIPTIONS",
    "available_presets",
    "find_preset",
]

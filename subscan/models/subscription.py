"""
Core Data Models for SubScan

These models define the strict schemas for subscription data.
They are designed to:
1. Enforce the subscription invariants at construction time
2. Be immutable once created (records are never edited in place)
3. Be serializable for local persistence

DESIGN DECISION: Display color is NOT stored. It is looked up from the
category every time it is read, so it can never drift from the category.
"""

import json
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class BillingCycle(str, Enum):
    """How often a subscription's cost is charged."""
    MONTHLY = "monthly"
    YEARLY = "yearly"


class SubscriptionCategory(str, Enum):
    """
    Supported subscription categories.

    The set is fixed. Anything outside it is rejected at creation.
    """
    STREAMING = "Streaming"
    SOFTWARE = "Software"
    GAMING = "Gaming"
    MUSIC = "Music"
    CLOUD = "Cloud"
    OTHER = "Other"


# Display accent per category. Pure lookup, never persisted.
CATEGORY_COLORS: dict[SubscriptionCategory, str] = {
    SubscriptionCategory.STREAMING: "#ff6b6b",
    SubscriptionCategory.SOFTWARE: "#4ecdc4",
    SubscriptionCategory.GAMING: "#ffe66d",
    SubscriptionCategory.MUSIC: "#a855f7",
    SubscriptionCategory.CLOUD: "#3b82f6",
    SubscriptionCategory.OTHER: "#6b7280",
}


def color_for(category: SubscriptionCategory) -> str:
    """Get the display color for a category."""
    return CATEGORY_COLORS[category]


# =============================================================================
# SUBSCRIPTION MODELS
# =============================================================================

class SubscriptionCandidate(BaseModel):
    """
    A validated request to create a subscription.

    This is everything a Subscription needs except its identity.
    Only the validator and the store should build these.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Service name shown to the user"
    )
    cost: Decimal = Field(
        ...,
        gt=0,
        description="Amount charged per billing cycle"
    )
    billing_cycle: BillingCycle = Field(
        ...,
        description="Billing cycle the cost applies to"
    )
    category: SubscriptionCategory = Field(
        ...,
        description="Subscription category"
    )

    @field_validator("cost")
    @classmethod
    def reject_non_finite(cls, v: Decimal) -> Decimal:
        """NaN and infinity are not amounts."""
        if not v.is_finite():
            raise ValueError("Cost must be a finite number")
        return v


class Subscription(SubscriptionCandidate):
    """
    A tracked subscription.

    CRITICAL: Instances are frozen. The collection that holds them is
    owned by the SubscriptionStore, and removal is the only way a
    record leaves it.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier, assigned at creation"
    )

    @property
    def color(self) -> str:
        """Display accent, derived from the category at read time."""
        return color_for(self.category)

    @classmethod
    def from_candidate(cls, candidate: SubscriptionCandidate, subscription_id: str) -> "Subscription":
        return cls(id=subscription_id, **candidate.model_dump())

    def to_record(self) -> dict[str, Any]:
        """
        Convert to the dict stored on disk.

        The cost is written as decimal text so it round-trips exactly.
        """
        return {
            "id": self.id,
            "name": self.name,
            "cost": str(self.cost),
            "billing_cycle": self.billing_cycle.value,
            "category": self.category.value,
        }


class PresetSubscription(BaseModel):
    """A known service offered for one-click adding (always monthly)."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    category: SubscriptionCategory
    cost: Decimal = Field(..., gt=0)

    @property
    def color(self) -> str:
        return color_for(self.category)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in user input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'unknown_category')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


# =============================================================================
# PERSISTENCE MODELS
# =============================================================================

CURRENT_SCHEMA_VERSION = 1


class PersistedState(BaseModel):
    """
    The envelope written to durable storage.

    DESIGN DECISION: The envelope carries a schema version so the
    Subscription shape can evolve. Decoders migrate older versions
    in memory and the next write stores the current version.
    """
    model_config = ConfigDict(extra="forbid")

    schema_version: int = Field(
        default=CURRENT_SCHEMA_VERSION,
        description="Version of the stored layout"
    )
    subscriptions: list[Subscription] = Field(
        default_factory=list,
        description="All subscriptions in insertion order"
    )

    @field_validator("schema_version")
    @classmethod
    def validate_version(cls, v: int) -> int:
        if v != CURRENT_SCHEMA_VERSION:
            raise ValueError(f"Unsupported schema version: {v}")
        return v

    def to_json_bytes(self) -> bytes:
        payload = {
            "schema_version": self.schema_version,
            "subscriptions": [sub.to_record() for sub in self.subscriptions],
        }
        return json.dumps(payload, indent=2).encode("utf-8")

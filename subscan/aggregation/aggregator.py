"""
Cost Aggregation

DESIGN DECISION: Aggregation is pure and deterministic.
Every figure is computed from the collection passed in; nothing is
cached or stored.

Normalization to a MONTHLY basis is the only convention:
- monthly records count their cost as-is
- yearly records count cost / 12
The yearly total is always monthly_total * 12, never summed separately,
so the two figures cannot disagree.

No rounding happens here. Rounding is a display concern.
"""

from decimal import Decimal
from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from subscan.models.subscription import BillingCycle, Subscription


MONTHS_PER_YEAR = 12


class CostSummary(BaseModel):
    """Aggregate figures for one snapshot of the collection."""
    model_config = ConfigDict(frozen=True)

    monthly_total: Decimal = Field(..., ge=0)
    yearly_total: Decimal = Field(..., ge=0)
    subscription_count: int = Field(..., ge=0)


def monthly_cost(subscription: Subscription) -> Decimal:
    """Cost of one subscription on a monthly basis."""
    if subscription.billing_cycle == BillingCycle.YEARLY:
        return subscription.cost / MONTHS_PER_YEAR
    return subscription.cost


def monthly_total(subscriptions: Iterable[Subscription]) -> Decimal:
    """Sum of monthly-normalized costs. Decimal('0') for no subscriptions."""
    return sum((monthly_cost(sub) for sub in subscriptions), Decimal(0))


def yearly_total(subscriptions: Iterable[Subscription]) -> Decimal:
    """Always exactly monthly_total(subscriptions) * 12."""
    return monthly_total(subscriptions) * MONTHS_PER_YEAR


def subscription_count(subscriptions: Sequence[Subscription]) -> int:
    return len(subscriptions)


def summarize(subscriptions: Sequence[Subscription]) -> CostSummary:
    monthly = monthly_total(subscriptions)
    return CostSummary(
        monthly_total=monthly,
        yearly_total=monthly * MONTHS_PER_YEAR,
        subscription_count=subscription_count(subscriptions),
    )

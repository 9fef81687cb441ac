"""Cost aggregation package."""

from subscan.aggregation.aggregator import (
    MONTHS_PER_YEAR,
    CostSummary,
    monthly_cost,
    monthly_total,
    subscription_count,
    summarize,
    yearly_total,
)

__all__ = [
    "MONTHS_PER_YEAR",
    "CostSummary",
    "monthly_cost",
    "monthly_total",
    "subscription_count",
    "summarize",
    "yearly_total",
]

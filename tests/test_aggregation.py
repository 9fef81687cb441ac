"""Tests for cost aggregation."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from subscan.aggregation import (
    CostSummary,
    monthly_cost,
    monthly_total,
    subscription_count,
    summarize,
    yearly_total,
)
from subscan.models import BillingCycle, Subscription, SubscriptionCategory


def sub(cost: str, cycle: BillingCycle = BillingCycle.MONTHLY, sub_id: str = "x") -> Subscription:
    return Subscription(
        id=sub_id,
        name=f"Service {sub_id}",
        cost=Decimal(cost),
        billing_cycle=cycle,
        category=SubscriptionCategory.OTHER,
    )


@pytest.fixture
def example():
    """Netflix monthly plus iCloud yearly."""
    return [
        sub("15.99", BillingCycle.MONTHLY, "netflix"),
        sub("2.99", BillingCycle.YEARLY, "icloud"),
    ]


class TestTotals:
    def test_empty(self):
        assert monthly_total([]) == Decimal(0)
        assert yearly_total([]) == Decimal(0)
        assert isinstance(monthly_total([]), Decimal)

    def test_monthly_counts_as_is(self):
        assert monthly_total([sub("9.99"), sub("0.01", sub_id="y")]) == Decimal("10.00")

    def test_yearly_is_divided_by_twelve(self):
        assert monthly_cost(sub("120", BillingCycle.YEARLY)) == Decimal(10)

    def test_example_figures(self, example):
        """Netflix 15.99/mo + iCloud 2.99/yr."""
        assert monthly_total(example).quantize(Decimal("0.0001")) == Decimal("16.2392")
        assert yearly_total(example).quantize(Decimal("0.01")) == Decimal("194.87")

    @pytest.mark.parametrize("costs", [
        [("15.99", BillingCycle.MONTHLY)],
        [("2.99", BillingCycle.YEARLY)],
        [("1", BillingCycle.YEARLY), ("1", BillingCycle.YEARLY), ("1", BillingCycle.YEARLY)],
        [("54.99", BillingCycle.MONTHLY), ("99.99", BillingCycle.YEARLY), ("0.07", BillingCycle.YEARLY)],
    ])
    def test_yearly_is_exactly_twelve_times_monthly(self, costs):
        subs = [sub(cost, cycle, str(i)) for i, (cost, cycle) in enumerate(costs)]
        assert yearly_total(subs) == monthly_total(subs) * 12

    def test_no_rounding(self):
        """Test the aggregator does not round to cents."""
        total = monthly_total([sub("1", BillingCycle.YEARLY)])
        assert total != total.quantize(Decimal("0.01"))

    def test_accepts_generators(self, example):
        assert yearly_total(s for s in example) == yearly_total(example)


class TestSummary:
    def test_summarize(self, example):
        summary = summarize(example)
        assert summary.monthly_total == monthly_total(example)
        assert summary.yearly_total == yearly_total(example)
        assert summary.subscription_count == 2 == subscription_count(example)

    def test_summarize_empty(self):
        summary = summarize([])
        assert summary == CostSummary(
            monthly_total=Decimal(0),
            yearly_total=Decimal(0),
            subscription_count=0,
        )

    def test_summary_is_frozen(self, example):
        summary = summarize(example)
        with pytest.raises(ValidationError):
            summary.subscription_count = 5

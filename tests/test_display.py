"""Tests for the display helpers."""

from decimal import Decimal, getcontext

import pytest

from subscan.aggregation import monthly_cost, summarize
from subscan.display import (
    burn_ratio,
    counter_frames,
    cycle_suffix,
    format_amount,
    frame_interval,
)
from subscan.models import BillingCycle


class TestFormatAmount:
    def test_two_places(self):
        assert format_amount(Decimal("16.2391666")) == "$16.24"
        assert format_amount(Decimal("194.87")) == "$194.87"
        assert format_amount(0) == "$0.00"

    def test_half_up(self):
        assert format_amount(Decimal("0.005")) == "$0.01"

    def test_float_and_symbol(self):
        assert format_amount(2.99, symbol="€") == "€2.99"

    def test_huge_amount(self):
        """Test amounts beyond the default decimal precision still format."""
        assert format_amount(Decimal("1e30")) == "$1" + "0" * 30 + ".00"
        assert getcontext().prec == 28

    def test_huge_stored_cost_renders(self, store):
        sub = store.add("Yacht", "1e30", "yearly", "Other")
        summary = summarize(store.all())

        assert format_amount(sub.cost) == "$1" + "0" * 30 + ".00"
        assert format_amount(summary.yearly_total).endswith(".00")
        assert format_amount(monthly_cost(sub)).startswith("$8333333333")


class TestCounterFrames:
    """The animated monthly total."""

    def test_converges_exactly(self):
        target = Decimal("16.2391666")
        frames = counter_frames(target, steps=60)
        assert frames[-1] == target
        assert len(frames) <= 60

    def test_even_steps(self):
        frames = counter_frames(Decimal(60), steps=60)
        assert len(frames) == 60
        assert frames[0] == Decimal(1)
        assert frames[-1] == Decimal(60)

    def test_monotonic(self):
        frames = counter_frames(Decimal(10), steps=3)
        assert frames == sorted(frames)
        assert frames[-1] == Decimal(10)
        assert len(frames) == 3

    def test_zero_target(self):
        assert counter_frames(0) == [Decimal(0)]

    def test_single_step(self):
        assert counter_frames(Decimal("5.5"), steps=1) == [Decimal("5.5")]

    def test_rejects_zero_steps(self):
        with pytest.raises(ValueError):
            counter_frames(Decimal(1), steps=0)


class TestMisc:
    def test_frame_interval(self):
        assert frame_interval(1000, 60) == pytest.approx(1 / 60)
        assert frame_interval(0, 60) == 0

    def test_burn_ratio(self):
        assert burn_ratio(Decimal(250)) == 0.5
        assert burn_ratio(Decimal(1000)) == 1.0
        assert burn_ratio(0) == 0.0
        assert burn_ratio(Decimal(50), ceiling=100) == 0.5

    def test_burn_ratio_rejects_bad_ceiling(self):
        with pytest.raises(ValueError):
            burn_ratio(1, ceiling=0)

    def test_cycle_suffix(self):
        assert cycle_suffix(BillingCycle.MONTHLY) == "mo"
        assert cycle_suffix(BillingCycle.YEARLY) == "yr"

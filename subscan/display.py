"""
Display Helpers

Pure formatting and animation helpers for the dashboard. Nothing here
feeds back into stored state; the animated counter is cosmetic and
always ends on the authoritative total.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Union

from subscan.models.subscription import BillingCycle


Number = Union[Decimal, int, float]

_CENTS = Decimal("0.01")


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def format_amount(value: Number, symbol: str = "$") -> str:
    """Format an amount to two places, e.g. Decimal('16.2391') -> '$16.24'."""
    amount = _to_decimal(value)
    # Cents of a huge amount can need more digits than the default context holds
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return f"{symbol}{amount.quantize(_CENTS, rounding=ROUND_HALF_UP)}"


def cycle_suffix(cycle: BillingCycle) -> str:
    return "mo" if cycle == BillingCycle.MONTHLY else "yr"


def counter_frames(target: Number, steps: int = 60) -> list[Decimal]:
    """
    Values shown by the animated monthly total.

    The counter climbs from zero by target/steps per frame. The last
    frame is always exactly `target`, so the animation converges in at
    most `steps` frames.
    """
    if steps < 1:
        raise ValueError("steps must be at least 1")

    goal = _to_decimal(target)
    if goal <= 0:
        return [goal]

    increment = goal / steps
    frames = []
    current = Decimal(0)
    for _ in range(steps - 1):
        current += increment
        if current >= goal:
            break
        frames.append(current)
    frames.append(goal)
    return frames


def frame_interval(duration_ms: int, steps: int) -> float:
    """Seconds to wait between counter frames."""
    if steps < 1:
        raise ValueError("steps must be at least 1")
    return max(duration_ms, 0) / steps / 1000


def burn_ratio(monthly: Number, ceiling: Number = 500) -> float:
    """How full the monthly burn bar is, clamped to [0, 1]."""
    limit = _to_decimal(ceiling)
    if limit <= 0:
        raise ValueError("ceiling must be positive")
    ratio = _to_decimal(monthly) / limit
    return float(min(max(ratio, Decimal(0)), Decimal(1)))

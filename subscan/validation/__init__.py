"""Input validation package."""

from subscan.validation.validator import CostInput, SubscriptionValidator

__all__ = ["CostInput", "SubscriptionValidator"]

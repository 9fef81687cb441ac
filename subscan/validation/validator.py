"""
Subscription Input Validation

Turns raw input (as typed into a form or taken from a preset) into a
SubscriptionCandidate, or reports exactly what is wrong with it.

Checks run in two groups:

FIELD CHECKS:
- Name present and non-blank
- Cost numeric, finite and greater than zero
- Billing cycle is monthly or yearly
All field problems are collected and raised together as one
InvalidSubscriptionError.

CATEGORY CHECK:
- Category is one of the fixed set, else UnknownCategoryError
It runs only once the fields are valid.

IMPORTANT: Validation NEVER silently fixes issues beyond trimming
surrounding whitespace. Nothing partial is ever admitted.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from pydantic import ValidationError

from subscan.errors import InvalidSubscriptionError, UnknownCategoryError
from subscan.models.subscription import (
    BillingCycle,
    SubscriptionCandidate,
    SubscriptionCategory,
    ValidationIssue,
)


CostInput = Union[Decimal, int, float, str]


class SubscriptionValidator:
    """Validates subscription input before it reaches the store."""

    def validate(
        self,
        name: object,
        cost: object,
        billing_cycle: object,
        category: object,
    ) -> SubscriptionCandidate:
        """
        Validate raw input.

        Returns:
            A frozen, fully valid SubscriptionCandidate

        Raises:
            InvalidSubscriptionError: If name, cost or billing cycle is bad
            UnknownCategoryError: If the category is not in the fixed set
        """
        issues: list[ValidationIssue] = []

        clean_name = self._check_name(name, issues)
        clean_cost = self._check_cost(cost, issues)
        clean_cycle = self._check_billing_cycle(billing_cycle, issues)

        if issues:
            raise InvalidSubscriptionError(issues)

        clean_category = self.parse_category(category)

        try:
            return SubscriptionCandidate(
                name=clean_name,
                cost=clean_cost,
                billing_cycle=clean_cycle,
                category=clean_category,
            )
        except ValidationError as e:
            raise InvalidSubscriptionError([
                ValidationIssue(
                    field=".".join(str(part) for part in error["loc"]) or "subscription",
                    issue_type=error["type"],
                    message=error["msg"],
                )
                for error in e.errors()
            ]) from e

    @staticmethod
    def parse_category(category: object) -> SubscriptionCategory:
        """Map a category value to the enum. Raises UnknownCategoryError."""
        if isinstance(category, SubscriptionCategory):
            return category
        if isinstance(category, str):
            try:
                return SubscriptionCategory(category.strip())
            except ValueError:
                pass
        raise UnknownCategoryError(category)

    @staticmethod
    def parse_cost(cost: object) -> Optional[Decimal]:
        """
        Parse a cost into a Decimal.

        Floats go through their shortest repr, so 15.99 becomes
        Decimal("15.99") rather than its binary expansion.
        Returns None if the value is not a number.
        """
        if isinstance(cost, bool):
            return None
        if isinstance(cost, Decimal):
            return cost
        if isinstance(cost, int):
            return Decimal(cost)
        if isinstance(cost, float):
            return Decimal(str(cost))
        if isinstance(cost, str):
            try:
                return Decimal(cost.strip())
            except InvalidOperation:
                return None
        return None

    def _check_name(self, name: object, issues: list[ValidationIssue]) -> str:
        if not isinstance(name, str):
            issues.append(ValidationIssue(
                field="name",
                issue_type="invalid_type",
                message="Name must be text",
            ))
            return ""
        clean = name.strip()
        if not clean:
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Name is required",
            ))
        return clean

    def _check_cost(self, cost: object, issues: list[ValidationIssue]) -> Decimal:
        if cost is None or (isinstance(cost, str) and not cost.strip()):
            issues.append(ValidationIssue(
                field="cost",
                issue_type="missing",
                message="Cost is required",
            ))
            return Decimal(0)

        parsed = self.parse_cost(cost)
        if parsed is None or not parsed.is_finite():
            issues.append(ValidationIssue(
                field="cost",
                issue_type="invalid_format",
                message=f"Cost is not a number: {cost!r}",
            ))
            return Decimal(0)

        if parsed <= 0:
            issues.append(ValidationIssue(
                field="cost",
                issue_type="invalid_value",
                message="Cost must be greater than zero",
            ))
        return parsed

    def _check_billing_cycle(
        self,
        billing_cycle: object,
        issues: list[ValidationIssue],
    ) -> BillingCycle:
        if isinstance(billing_cycle, BillingCycle):
            return billing_cycle
        if isinstance(billing_cycle, str):
            try:
                return BillingCycle(billing_cycle.strip().lower())
            except ValueError:
                pass
        issues.append(ValidationIssue(
            field="billing_cycle",
            issue_type="invalid_value",
            message=f"Billing cycle must be 'monthly' or 'yearly', got {billing_cycle!r}",
        ))
        return BillingCycle.MONTHLY

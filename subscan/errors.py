"""
Domain Exceptions

Every error the core raises derives from SubscanError, so the
presentation layer can catch them in one place. None of them is
fatal to the process.
"""

from typing import Optional

from subscan.models.subscription import ValidationIssue


class SubscanError(Exception):
    """Base exception for SubScan."""
    pass


class InvalidSubscriptionError(SubscanError, ValueError):
    """Empty name, non-positive cost, or another malformed input field."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        details = "; ".join(f"{issue.field}: {issue.message}" for issue in issues)
        super().__init__(f"Invalid subscription: {details}")

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]


class UnknownCategoryError(SubscanError, ValueError):
    """Category outside the fixed set."""

    def __init__(self, category: object):
        self.category = category
        super().__init__(f"Unknown category: {category!r}")


class CorruptStateError(SubscanError):
    """
    The persisted collection exists but cannot be parsed.

    The raw payload is kept so the caller can back it up before
    deciding to start over.
    """

    def __init__(self, key: str, reason: str, payload: Optional[bytes] = None):
        self.key = key
        self.reason = reason
        self.payload = payload
        super().__init__(f"Stored state under {key!r} is corrupt: {reason}")


class PersistenceError(SubscanError):
    """Durable storage failed; the mutation was not applied."""
    pass


class StoreNotLoadedError(SubscanError, RuntimeError):
    """A mutation was attempted before the stored state was loaded."""
    pass

"""Subscription store package."""

from subscan.errors import (
    CorruptStateError,
    InvalidSubscriptionError,
    PersistenceError,
    StoreNotLoadedError,
    SubscanError,
    UnknownCategoryError,
)
from subscan.store.codec import decode_state, encode_state
from subscan.store.subscription_store import DEFAULT_STATE_KEY, SubscriptionStore

__all__ = [
    "DEFAULT_STATE_KEY",
    "SubscriptionStore",
    "decode_state",
    "encode_state",
    # Errors
    "CorruptStateError",
    "InvalidSubscriptionError",
    "PersistenceError",
    "StoreNotLoadedError",
    "SubscanError",
    "UnknownCategoryError",
]

"""
Subscription Store

The single owner of the subscription collection.

GUARANTEES:
- Records are admitted only through add() / add_from_preset()
- Records leave only through remove()
- Every successful mutation has written the WHOLE collection to durable
  storage before it returns
- A failed write changes nothing: the new collection is built as a copy,
  persisted, and only then swapped in

DESIGN DECISION: load() does not choose a recovery policy for corrupt
state. It raises CorruptStateError and leaves the store unloaded; the
orchestrator decides whether to reset or abort.

Mutations before load() (or reset()) are refused, otherwise the first
write would overwrite stored state that was never read.
"""

import threading
from typing import Any, Callable, Mapping, Optional, Union
from uuid import uuid4

from subscan.errors import PersistenceError, StoreNotLoadedError
from subscan.log import get_logger
from subscan.models.subscription import (
    BillingCycle,
    PresetSubscription,
    Subscription,
    SubscriptionCandidate,
)
from subscan.services.storage import KeyValueStorageInterface, StorageError
from subscan.store.codec import decode_state, encode_state
from subscan.validation import SubscriptionValidator


DEFAULT_STATE_KEY = "subscriptions"

PresetInput = Union[PresetSubscription, Mapping[str, Any]]


def _new_id() -> str:
    return str(uuid4())


class SubscriptionStore:
    """
    Authoritative in-memory collection, kept in sync with durable storage.

    All operations are synchronous. Load and mutations are serialized
    by a re-entrant lock because the dashboard shares one store across
    its script threads.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        key: str = DEFAULT_STATE_KEY,
        validator: Optional[SubscriptionValidator] = None,
        id_factory: Callable[[], str] = _new_id,
    ):
        """
        Initialize the store. Nothing is read until load() is called.

        Args:
            storage: Durable key-value backend
            key: Namespaced key holding the serialized collection
            validator: Input validator (default: SubscriptionValidator())
            id_factory: Produces candidate ids for new records
        """
        self._storage = storage
        self._key = key
        self._validator = validator or SubscriptionValidator()
        self._id_factory = id_factory
        self._lock = threading.RLock()
        self._logger = get_logger(__name__).bind(state_key=key)

        # Replaced wholesale on every mutation, never modified in place
        self._subscriptions: list[Subscription] = []
        # Every id ever seen by this store; removal does not free an id
        self._used_ids: set[str] = set()
        self._loaded = False

    @property
    def key(self) -> str:
        return self._key

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def load(self) -> tuple[Subscription, ...]:
        """
        Read the persisted collection.

        Returns:
            The restored subscriptions in insertion order (empty if
            nothing was ever stored)

        Raises:
            CorruptStateError: If the stored bytes are malformed
            PersistenceError: If storage cannot be read
        """
        with self._lock:
            self._loaded = False
            self._subscriptions = []

            try:
                raw = self._storage.get(self._key)
            except StorageError as e:
                self._logger.error("load_failed", error=str(e))
                raise PersistenceError(f"Could not read stored subscriptions: {e}") from e

            if raw is None:
                self._loaded = True
                self._logger.info("state_empty")
                return ()

            subscriptions, migrated = decode_state(self._key, raw)

            self._subscriptions = subscriptions
            self._used_ids.update(sub.id for sub in subscriptions)
            self._loaded = True

            if migrated:
                self._logger.info("state_migrated", count=len(subscriptions))
            self._logger.info("state_loaded", count=len(subscriptions))
            return tuple(subscriptions)

    def reset(self) -> None:
        """
        Start over with an empty collection and persist it.

        Raises:
            PersistenceError: If the empty collection cannot be written
        """
        with self._lock:
            self._commit([])
            self._loaded = True
            self._logger.warning("state_reset")

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(
        self,
        name: object,
        cost: object,
        billing_cycle: object,
        category: object,
    ) -> Subscription:
        """
        Validate and append a new subscription.

        Raises:
            InvalidSubscriptionError: Empty name, non-positive cost, bad cycle
            UnknownCategoryError: Category outside the fixed set
            PersistenceError: If the write fails (nothing is added)
            StoreNotLoadedError: If load() has not succeeded yet
        """
        candidate = self._validator.validate(name, cost, billing_cycle, category)
        return self._append(candidate)

    def add_from_preset(self, preset: PresetInput) -> Subscription:
        """
        Same as add(), billed monthly. Duplicate names are allowed.
        """
        if isinstance(preset, PresetSubscription):
            name, cost, category = preset.name, preset.cost, preset.category
        else:
            name, cost, category = preset.get("name"), preset.get("cost"), preset.get("category")
        return self.add(name, cost, BillingCycle.MONTHLY, category)

    def remove(self, subscription_id: str) -> bool:
        """
        Remove the subscription with this id.

        Returns:
            True if a record was removed, False if no record had that id
            (nothing is written in that case)

        Raises:
            PersistenceError: If the write fails (nothing is removed)
            StoreNotLoadedError: If load() has not succeeded yet
        """
        with self._lock:
            self._require_loaded()

            remaining = [sub for sub in self._subscriptions if sub.id != subscription_id]
            if len(remaining) == len(self._subscriptions):
                self._logger.info("remove_missing", subscription_id=subscription_id)
                return False

            self._commit(remaining)
            self._logger.info(
                "subscription_removed",
                subscription_id=subscription_id,
                count=len(remaining),
            )
            return True

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def all(self) -> tuple[Subscription, ...]:
        """Snapshot of the collection in insertion order."""
        return tuple(self._subscriptions)

    def __len__(self) -> int:
        return len(self._subscriptions)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _append(self, candidate: SubscriptionCandidate) -> Subscription:
        with self._lock:
            self._require_loaded()

            subscription = Subscription.from_candidate(candidate, self._fresh_id())
            self._commit([*self._subscriptions, subscription])
            self._used_ids.add(subscription.id)

            self._logger.info(
                "subscription_added",
                subscription_id=subscription.id,
                name=subscription.name,
                cost=str(subscription.cost),
                billing_cycle=subscription.billing_cycle.value,
                category=subscription.category.value,
            )
            return subscription

    def _fresh_id(self) -> str:
        while True:
            candidate = self._id_factory()
            if candidate and candidate not in self._used_ids:
                return candidate

    def _commit(self, subscriptions: list[Subscription]) -> None:
        """Persist `subscriptions`, then make it the current collection."""
        payload = encode_state(subscriptions)
        try:
            self._storage.set(self._key, payload)
        except StorageError as e:
            self._logger.error("persist_failed", error=str(e))
            raise PersistenceError(f"Could not save subscriptions: {e}") from e
        self._subscriptions = subscriptions

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise StoreNotLoadedError(
                "Stored subscriptions have not been loaded; call load() or reset() first"
            )

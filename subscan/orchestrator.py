"""
Main Orchestrator for SubScan

This module ties the components together:
1. Settings -> storage backend
2. Storage -> SubscriptionStore
3. Startup load, with the corrupt-state recovery policy applied

DESIGN DECISION: The store only REPORTS corrupt state. The policy lives
here, is chosen in configuration (AppSettings.on_corrupt_state), and is
logged every time it fires:

- "reset" (default): the unreadable payload is copied to a backup key,
  then the store starts from an empty collection. Nothing is silently
  discarded.
- "abort": CorruptStateError propagates to the caller, which shows it to
  the user. The process keeps running.
"""

from datetime import datetime, timezone
from typing import Literal, Optional

from subscan.config import Settings, StorageSettings, get_settings
from subscan.errors import CorruptStateError, PersistenceError
from subscan.log import configure_logging, get_logger
from subscan.models.subscription import Subscription
from subscan.services.storage import (
    InMemoryStorage,
    KeyValueStorageInterface,
    LocalFileStorage,
    StorageError,
)
from subscan.store import SubscriptionStore


logger = get_logger(__name__)

CorruptStatePolicy = Literal["reset", "abort"]


def build_storage(settings: StorageSettings) -> KeyValueStorageInterface:
    """Create the configured storage backend."""
    if settings.backend == "memory":
        return InMemoryStorage()
    return LocalFileStorage(
        settings.data_dir,
        attempts=settings.write_attempts,
        retry_wait_seconds=settings.retry_wait_seconds,
    )


def backup_key_for(state_key: str, when: Optional[datetime] = None) -> str:
    """Key under which a corrupt payload is preserved."""
    when = when or datetime.now(timezone.utc)
    return f"{state_key}.corrupt-{when:%Y%m%dT%H%M%S%fZ}"


def load_with_policy(
    store: SubscriptionStore,
    storage: KeyValueStorageInterface,
    policy: CorruptStatePolicy = "reset",
) -> tuple[Subscription, ...]:
    """
    Load the store, applying the recovery policy if stored state is corrupt.

    Returns:
        The loaded subscriptions (empty after a reset)

    Raises:
        CorruptStateError: If state is corrupt and the policy is "abort"
        PersistenceError: If storage fails, including while backing up
    """
    try:
        return store.load()
    except CorruptStateError as e:
        if policy == "abort":
            logger.error("corrupt_state_abort", state_key=e.key, reason=e.reason)
            raise

        backup_key = None
        if e.payload is not None:
            backup_key = backup_key_for(store.key)
            try:
                storage.set(backup_key, e.payload)
            except StorageError as storage_error:
                # Without a backup, resetting would destroy the only copy
                raise PersistenceError(
                    f"Could not back up corrupt state to {backup_key!r}: {storage_error}"
                ) from storage_error

        store.reset()
        logger.warning(
            "corrupt_state_reset",
            state_key=e.key,
            reason=e.reason,
            backup_key=backup_key,
        )
        return ()


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
) -> tuple[SubscriptionStore, KeyValueStorageInterface]:
    """
    Factory function to create a loaded store.

    Args:
        settings: Settings to use (default: get_settings())
        storage: Backend override; built from settings when None

    Returns:
        (loaded_store, storage_backend)
    """
    settings = settings or get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    configure_logging(app_settings.log_level)

    storage = storage or build_storage(storage_settings)
    store = SubscriptionStore(storage, key=storage_settings.state_key)
    load_with_policy(store, storage, app_settings.on_corrupt_state)

    return store, storage

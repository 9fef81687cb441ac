"""
Stored-State Codec

Encodes the subscription collection into the bytes kept under the
state key, and decodes them back with full structural validation.

Two layouts are understood:

- Version 1 (current): {"schema_version": 1, "subscriptions": [...]}
  with the cost stored as decimal text.
- Legacy (unversioned): a bare JSON array of records with a numeric
  cost, a camelCase "billingCycle" and an eagerly stored "color".
  These are migrated in memory; the color is dropped because it is
  derived from the category.

Anything else is corrupt.
"""

import json
from decimal import Decimal
from typing import Any, Sequence

from pydantic import ValidationError

from subscan.errors import CorruptStateError
from subscan.models.subscription import PersistedState, Subscription


def encode_state(subscriptions: Sequence[Subscription]) -> bytes:
    """Serialize the whole collection as a current-version envelope."""
    return PersistedState(subscriptions=list(subscriptions)).to_json_bytes()


def decode_state(key: str, raw: bytes) -> tuple[list[Subscription], bool]:
    """
    Parse stored bytes back into subscriptions.

    Returns:
        (subscriptions in stored order, whether a legacy layout was migrated)

    Raises:
        CorruptStateError: If the bytes are not a valid stored collection
    """
    try:
        document = json.loads(raw.decode("utf-8"), parse_float=Decimal)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorruptStateError(key, f"not valid JSON: {e}", raw) from e

    migrated = False
    if isinstance(document, list):
        document = _migrate_legacy(key, raw, document)
        migrated = True

    if not isinstance(document, dict):
        raise CorruptStateError(key, f"unexpected top-level {type(document).__name__}", raw)
    if "schema_version" not in document:
        raise CorruptStateError(key, "missing schema_version", raw)

    try:
        state = PersistedState.model_validate(document)
    except ValidationError as e:
        raise CorruptStateError(key, _summarize(e), raw) from e

    seen: set[str] = set()
    for sub in state.subscriptions:
        if sub.id in seen:
            raise CorruptStateError(key, f"duplicate id {sub.id!r}", raw)
        seen.add(sub.id)

    return state.subscriptions, migrated


def _migrate_legacy(key: str, raw: bytes, records: list[Any]) -> dict[str, Any]:
    migrated = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise CorruptStateError(key, f"record {index} is not an object", raw)
        migrated.append({
            "id": record.get("id"),
            "name": record.get("name"),
            "cost": _legacy_cost(record.get("cost")),
            "billing_cycle": record.get("billingCycle"),
            "category": record.get("category"),
        })
    return {"schema_version": 1, "subscriptions": migrated}


def _legacy_cost(value: Any) -> Any:
    # Legacy costs are JSON numbers; keep their decimal text exactly
    if isinstance(value, (int, Decimal)) and not isinstance(value, bool):
        return str(value)
    return value


def _summarize(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{error.error_count()} validation error(s), first at {location}: {first['msg']}"

"""
Static preset catalog.

Known services the dashboard offers for one-click adding. Presets are
always billed monthly. Never modify at runtime.
"""

from decimal import Decimal
from typing import Iterable

from subscan.models.subscription import (
    PresetSubscription,
    Subscription,
    SubscriptionCategory,
)


PRESET_SUBSCRIPTIONS: tuple[PresetSubscription, ...] = (
    PresetSubscription(name="Netflix", category=SubscriptionCategory.STREAMING, cost=Decimal("15.99")),
    PresetSubscription(name="Spotify", category=SubscriptionCategory.MUSIC, cost=Decimal("10.99")),
    PresetSubscription(name="Disney+", category=SubscriptionCategory.STREAMING, cost=Decimal("13.99")),
    PresetSubscription(name="Adobe CC", category=SubscriptionCategory.SOFTWARE, cost=Decimal("54.99")),
    PresetSubscription(name="iCloud", category=SubscriptionCategory.CLOUD, cost=Decimal("2.99")),
    PresetSubscription(name="Xbox Game Pass", category=SubscriptionCategory.GAMING, cost=Decimal("16.99")),
)


def find_preset(name: str) -> PresetSubscription:
    """Look up a preset by its exact name. Raises KeyError if missing."""
    for preset in PRESET_SUBSCRIPTIONS:
        if preset.name == name:
            return preset
    raise KeyError(name)


def available_presets(subscriptions: Iterable[Subscription]) -> list[PresetSubscription]:
    """
    Presets whose name is not tracked yet.

    This is only a display filter. The store itself accepts duplicates.
    """
    tracked = {sub.name for sub in subscriptions}
    return [preset for preset in PRESET_SUBSCRIPTIONS if preset.name not in tracked]

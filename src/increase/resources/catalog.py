from __future__ import annotations

from increase.resource import Resource
from increase.resources.digital_wallet_tokens import DigitalWalletTokens
from increase.resources.event_subscriptions import EventSubscriptions
from increase.resources.events import Events
from increase.resources.pending_transactions import PendingTransactions

RESOURCES: dict[str, type[Resource]] = {
    cls.RESOURCE_TYPE: cls
    for cls in (DigitalWalletTokens, EventSubscriptions, Events, PendingTransactions)
}


def lookup(resource_type: str) -> type[Resource]:
    """Find a resource class by its type name ("events", "event-subscriptions", ...)."""
    key = resource_type.strip().lower().replace("-", "_")
    try:
        return RESOURCES[key]
    except KeyError:
        raise KeyError(f"Unknown resource {resource_type!r}; expected one of {sorted(RESOURCES)}") from None

"""Checkout engine: zone resolution and the order submission flow."""

from .orchestrator import (
    CheckoutOrchestrator,
    CheckoutOutcome,
    CheckoutState,
    CheckoutStatus,
    LogNotifier,
    Notifier,
)
from .zones import ZoneResolver

__all__ = [
    "CheckoutOrchestrator",
    "CheckoutOutcome",
    "CheckoutState",
    "CheckoutStatus",
    "LogNotifier",
    "Notifier",
    "ZoneResolver",
]

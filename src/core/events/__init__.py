"""
Event System - Synchronous signals.

Provides:
- Signal: Simple observer pattern for sync notifications (collection and selection changes)
- Subscription: Handle returned by Signal.connect(), cancel() to disconnect
- SubscriptionGroup: Several subscriptions torn down together

Usage:
    from src.core.events import Signal

    added = Signal("added")
    sub = added.connect(on_added)
    added.emit(item, collection, 0)
    sub.cancel()
"""
from .observer import Signal, Subscription, SubscriptionGroup


__all__ = ["Signal", "Subscription", "SubscriptionGroup"]

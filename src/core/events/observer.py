from loguru import logger
from typing import Callable, List, Any


class Subscription:
    """
    Handle for a single signal connection.

    Returned by Signal.connect() so owners can tear down exactly what they
    subscribed, without keeping the callback around.
    """
    def __init__(self, signal: "Signal", callback: Callable):
        self.signal = signal
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self):
        """Disconnect the callback. Safe to call more than once."""
        if self._active:
            self.signal.disconnect(self.callback)
            self._active = False


class SubscriptionGroup:
    """A set of subscriptions that are torn down together."""
    def __init__(self, subscriptions: List[Subscription] = None):
        self._subscriptions: List[Subscription] = list(subscriptions or [])

    def add(self, subscription: Subscription) -> Subscription:
        self._subscriptions.append(subscription)
        return subscription

    def __len__(self) -> int:
        return len(self._subscriptions)

    @property
    def active(self) -> bool:
        return any(sub.active for sub in self._subscriptions)

    def cancel(self):
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions.clear()


class Signal:
    """
    A simple observer pattern implementation (Synchronous).
    Allows subscribers to connect to this signal and receive notifications.
    Equivalent to Qt's Signal or C#'s event.
    """
    def __init__(self, name: str = "Signal"):
        self.name = name
        self._subscribers: List[Callable] = []

    def connect(self, callback: Callable) -> Subscription:
        """Connect a callback function to this signal."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)
        return Subscription(self, callback)

    def disconnect(self, callback: Callable):
        """Disconnect a callback function from this signal."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def emit(self, *args: Any, **kwargs: Any):
        """Broadcast arguments to all subscribers synchronously."""
        # Copy: a subscriber may disconnect itself (or others) while handling
        for sub in list(self._subscribers):
            try:
                sub(*args, **kwargs)
            except Exception as e:
                logger.error(f"Signal '{self.name}' error in subscriber '{sub}': {e}")

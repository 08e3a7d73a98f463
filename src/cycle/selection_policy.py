"""
Selection Policy - Automatic selection management for a SelectOneCollection.

Two independent, label-scoped behaviours:
- auto_select: when the collection is populated (initial items, add, reset)
  and a label has no selection yet, select the configured item.
- select_if_removed: when the item selected under a label is removed, select
  a neighbour of the vacated position instead.

Handlers are only subscribed for the behaviours that are active, so a
collection without either pays nothing on its lifecycle events. Silent
mutations are followed through the collection's on_silent_* signals, and
the selections they cause are silent as well.

Event ordering precondition: for a batch add, the collection emits one
on_added per item in insertion order, after the whole batch is in place.
The batch skip-flag (see _select_initial) relies on that order.
"""
from typing import Iterable, Optional, Set, Tuple
from loguru import logger

from src.core.events import SubscriptionGroup
from src.cycle.navigation import looped_offset
from src.cycle.options import CycleOptions
from src.models.collection import DeselectCause, DeselectContext, SelectOneCollection
from src.models.item import SelectableItem


class SelectionPolicy:
    """
    Wires auto_select / select_if_removed to a collection's lifecycle signals.

    Usage:
        options = parse_options("first", "next", default_label=collection.default_label)
        policy = SelectionPolicy(collection, options)
        policy.attach(initial_items)
        ...
        policy.detach()
    """

    def __init__(self, collection: SelectOneCollection, options: CycleOptions):
        self.collection = collection
        self.options = options
        self._skip_flags: Set[str] = set()
        self._subscriptions: Optional[SubscriptionGroup] = None

    @property
    def is_attached(self) -> bool:
        return self._subscriptions is not None

    @property
    def skip_flags(self) -> frozenset:
        """Labels whose auto-selection is deferred for the running batch."""
        return frozenset(self._skip_flags)

    def attach(self, initial_items: Optional[Iterable[SelectableItem]] = None) -> SubscriptionGroup:
        """
        Run the initial selection pass, then subscribe the active handlers.

        Returns:
            The subscriptions, torn down together by detach()
        """
        if self.is_attached:
            raise RuntimeError("SelectionPolicy is already attached")

        group = SubscriptionGroup()
        collection = self.collection

        if self.options.select_if_removed_active:
            group.add(collection.on_deselected.connect(self.on_deselected))
            group.add(collection.on_silent_removed.connect(self.on_silent_removed))

        if self.options.auto_select_active:
            self._select_from_initial_items(list(initial_items or []))
            group.add(collection.on_added.connect(self.on_added))
            group.add(collection.on_reset.connect(self.on_reset))
            group.add(collection.on_updated.connect(self.on_updated))
            group.add(collection.on_silent_added.connect(self.on_silent_added))
            group.add(collection.on_silent_reset.connect(self.on_silent_reset))

        self._subscriptions = group
        logger.debug(f"SelectionPolicy attached to {collection!r} ({len(group)} subscription(s))")
        return group

    def detach(self) -> None:
        """Unsubscribe all handlers. Safe to call more than once."""
        if self._subscriptions is not None:
            self._subscriptions.cancel()
            self._subscriptions = None
            self._skip_flags.clear()
            logger.debug(f"SelectionPolicy detached from {self.collection!r}")

    # --- Signal handlers ---

    def on_added(self, item: SelectableItem, collection: SelectOneCollection, index: int) -> None:
        self._select_initial(is_reset=False)

    def on_reset(self, collection: SelectOneCollection) -> None:
        self._select_initial(is_reset=True)

    def on_silent_added(self, item: SelectableItem, collection: SelectOneCollection, index: int) -> None:
        self._select_initial(is_reset=False, silent=True)

    def on_silent_reset(self, collection: SelectOneCollection) -> None:
        self._select_initial(is_reset=True, silent=True)

    def on_updated(self, collection: SelectOneCollection) -> None:
        # A batch is over; whatever it deferred must not leak into the next one
        if self._skip_flags:
            logger.debug(f"Clearing leftover skip flags {sorted(self._skip_flags)} on {collection!r}")
            self._skip_flags.clear()

    def on_deselected(self, item: SelectableItem, collection: SelectOneCollection, context: DeselectContext) -> None:
        if not context.from_removal:
            return
        self._select_on_remove(context)

    def on_silent_removed(
        self, item: SelectableItem, collection: SelectOneCollection, index: int, labels: Tuple[str, ...]
    ) -> None:
        for label in labels:
            self._select_on_remove(DeselectContext(label, index, DeselectCause.REMOVE), silent=True)

    # --- Auto-select ---

    def _select_from_initial_items(self, items) -> None:
        """Initial pass over the items the collection is created with."""
        if not items:
            return
        collection = self.collection
        for label, target in self.options.auto_select.items():
            if collection.selected_item(label) is not None:
                continue
            if any(isinstance(item, SelectableItem) and item.is_selected(label) for item in items):
                # Pre-selected item: the collection adopts it when it is added
                continue
            index = target.resolve(len(items))
            if not 0 <= index < len(items):
                continue
            item = items[index]
            if not isinstance(item, SelectableItem):
                logger.debug(f"auto_select: skipping non-selectable initial item at {index}")
                continue
            if item in collection:
                collection.select(item, label=label)
            else:
                # Not added yet: the collection adopts the selection when it is
                item.select(label)
            logger.debug(f"auto_select '{label}': initial item {index} selected")

    def _select_initial(self, is_reset: bool, silent: bool = False) -> None:
        collection = self.collection
        for label, target in self.options.auto_select.items():
            if len(collection) and collection.selected_item(label) is None and label not in self._skip_flags:
                index = target.resolve(len(collection))

                if not is_reset and any(item.is_selected(label) for item in collection):
                    # Batch add with a pre-selected item further down the batch.
                    # Its own on_added will make it the selection; don't race it,
                    # and don't repeat this scan for the rest of the batch.
                    self._skip_flags.add(label)
                    logger.debug(f"auto_select '{label}': deferring to a pre-selected item in the batch")

                candidate = collection.at(index)
                if label not in self._skip_flags and candidate is not None:
                    # A reset only stays quiet on this collection; the item and
                    # other collections sharing it still fire
                    collection.select(candidate, label=label, silent=silent, silent_locally=is_reset)
                    logger.debug(f"auto_select '{label}': selected item {index} of {collection!r}")

            if label in self._skip_flags and collection.selected_item(label) is not None:
                self._skip_flags.discard(label)

    # --- Select if removed ---

    def _select_on_remove(self, context: DeselectContext, silent: bool = False) -> None:
        collection = self.collection
        mode = self.options.select_if_removed.get(context.label)
        if mode is None or not len(collection) or context.index is None:
            return

        # The removed item is already gone and the collection has shrunk
        index = context.index if mode.forward else context.index - 1
        if not mode.looped:
            index = max(min(index, len(collection) - 1), 0)
        index = looped_offset(index, 0, len(collection))

        collection.select(collection[index], label=context.label, silent=silent)
        logger.debug(f"select_if_removed '{context.label}' ({mode.value}): selected item {index} of {collection!r}")

"""
SelectOne Collection - Ordered, observable collection with single selection per label.

Provides:
- Ordered membership with stable integer positions (recomputed after every mutation)
- add / remove / reset lifecycle signals
- One "currently selected" item per label, kept in sync with the items' own flags
  across every collection sharing them

Signals (all synchronous, emitted in mutation order):
    on_added(item, collection, index)       once per inserted item, in insertion order
    on_removed(item, collection, index)     once per removed item, index before removal
    on_reset(collection)                    after the content was replaced
    on_updated(collection)                  once at the end of every add/remove/reset batch
    on_selected(item, collection, label)
    on_deselected(item, collection, DeselectContext)

Silent mutations (silent=True) fire none of the above, on the collection or
on the items. Capability layers that must still react to them listen to:
    on_silent_added(item, collection, index)
    on_silent_removed(item, collection, index, labels)   labels the item was selected under here
    on_silent_reset(collection)
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union
from loguru import logger

from src.core.config import ConfigManager, get_config
from src.core.events import Signal
from src.models.item import SelectableItem


class DeselectCause(Enum):
    """Why an item lost its selection in a collection."""
    EXPLICIT = "explicit"
    REMOVE = "remove"


@dataclass(frozen=True)
class DeselectContext:
    """
    Event context delivered with on_deselected.

    Attributes:
        label: Label the item was selected under
        index: Position of the item in the collection when it was deselected
               (for removals: its position before removal)
        cause: Whether a removal or an explicit deselect caused it
    """
    label: str
    index: Optional[int]
    cause: DeselectCause = DeselectCause.EXPLICIT

    @property
    def from_removal(self) -> bool:
        return self.cause is DeselectCause.REMOVE


ItemsArg = Union[SelectableItem, Iterable[SelectableItem], None]


class SelectOneCollection:
    """
    Ordered collection of SelectableItems with one selected item per label.

    Items may be shared with other collections. Selecting an item anywhere
    updates every collection holding it; each collection only tracks the
    labels it does not ignore.

    Usage:
        tracks = SelectOneCollection([a, b, c], ignored_labels=["hidden"])
        tracks.select(b)
        tracks.selected_item()            # b
        tracks.select(c, label="starred")
        tracks.on_deselected.connect(handler)
    """

    def __init__(
        self,
        items: ItemsArg = None,
        default_label: Optional[str] = None,
        ignored_labels: Optional[Iterable[str]] = None,
        config: Optional[ConfigManager] = None,
    ):
        config = config or get_config()
        self.default_label: str = default_label or config.data.cycle.default_label
        self.ignored_labels = frozenset(ignored_labels or ())
        if self.default_label in self.ignored_labels:
            raise ValueError(f'The default label "{self.default_label}" can\'t be ignored')

        self._items: List[SelectableItem] = []
        self._selection: Dict[str, SelectableItem] = {}
        # (item, label) of a pending select() whose events stay off this collection
        self._quiet_selection: Optional[Tuple[SelectableItem, str]] = None

        self.on_added = Signal("added")
        self.on_removed = Signal("removed")
        self.on_reset = Signal("reset")
        self.on_updated = Signal("updated")
        self.on_selected = Signal("select:one")
        self.on_deselected = Signal("deselect:one")

        self.on_silent_added = Signal("added:silent")
        self.on_silent_removed = Signal("removed:silent")
        self.on_silent_reset = Signal("reset:silent")

        if items is not None:
            self.reset(items)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} len={len(self._items)} label={self.default_label!r}>"

    # --- Sequence access ---

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[SelectableItem]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> SelectableItem:
        return self._items[index]

    def __contains__(self, item: object) -> bool:
        return any(existing is item for existing in self._items)

    @property
    def items(self) -> Tuple[SelectableItem, ...]:
        return tuple(self._items)

    def at(self, index: int) -> Optional[SelectableItem]:
        """Item at index, or None outside [0, len). Negative indexes do not wrap."""
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def index(self, item: SelectableItem) -> int:
        """Current position of item. Raises ValueError if it is not a member."""
        for position, existing in enumerate(self._items):
            if existing is item:
                return position
        raise ValueError(f"{item!r} is not in the collection")

    # --- Mutation ---

    def add(self, items: ItemsArg, at: Optional[int] = None, silent: bool = False) -> List[SelectableItem]:
        """
        Insert a batch of items.

        The whole batch is inserted before the first on_added signal fires, so
        handlers always see the complete post-insertion sequence. Items already
        in the collection (or repeated in the batch) are skipped.

        Args:
            items: One item or an iterable of items
            at: Insert position; appended when omitted
            silent: Fire on_silent_added instead of the regular signals

        Returns:
            The items actually inserted, in order
        """
        batch = self._new_members(self._as_list(items))
        if not batch:
            return []

        position = len(self._items) if at is None else max(0, min(at, len(self._items)))
        self._items[position:position] = batch
        for item in batch:
            item._join(self)

        added = self.on_silent_added if silent else self.on_added
        for item in batch:
            self._adopt_selection(item, silent=silent)
            if item in self:
                added.emit(item, self, self.index(item))

        logger.debug(f"Added {len(batch)} item(s) to {self!r}{' (silent)' if silent else ''}")
        if not silent:
            self.on_updated.emit(self)
        return batch

    def remove(self, items: ItemsArg, silent: bool = False) -> List[SelectableItem]:
        """
        Remove items, one at a time.

        A removed item that held a selection here loses it; on_deselected then
        carries a REMOVE context with the item's position before removal.
        A silent removal reports the lost labels through on_silent_removed.
        """
        removed = []
        for item in self._as_list(items):
            if item not in self:
                continue
            index = self.index(item)
            del self._items[index]
            item._leave(self)
            removed.append(item)

            labels = [label for label, selected in self._selection.items() if selected is item]
            for label in labels:
                del self._selection[label]
                if not self._held_elsewhere(item, label):
                    item.deselect(label, silent=silent)

            if silent:
                self.on_silent_removed.emit(item, self, index, tuple(labels))
                continue
            self.on_removed.emit(item, self, index)
            for label in labels:
                self.on_deselected.emit(item, self, DeselectContext(label, index, DeselectCause.REMOVE))

        if removed:
            logger.debug(f"Removed {len(removed)} item(s) from {self!r}{' (silent)' if silent else ''}")
            if not silent:
                self.on_updated.emit(self)
        return removed

    def reset(self, items: ItemsArg = None, silent: bool = False) -> None:
        """
        Replace the whole content.

        Pre-selected incoming items are adopted without a select signal on
        this collection; the items and other collections sharing them still
        fire theirs.
        """
        incoming = self._as_list(items)
        previous_selection = dict(self._selection)
        for item in self._items:
            item._leave(self)

        self._items = []
        self._selection = {}
        batch = self._new_members(incoming)
        self._items = list(batch)
        for item in batch:
            item._join(self)

        for label, item in previous_selection.items():
            if item not in self and not self._held_elsewhere(item, label):
                item.deselect(label, silent=silent)

        for item in batch:
            self._adopt_selection(item, silent=silent, quiet=True)

        logger.debug(f"Reset {self!r}{' (silent)' if silent else ''}")
        if silent:
            self.on_silent_reset.emit(self)
        else:
            self.on_reset.emit(self)
            self.on_updated.emit(self)

    # --- Selection ---

    def selected_item(self, label: Optional[str] = None) -> Optional[SelectableItem]:
        """Item currently selected under label (default label when omitted)."""
        return self._selection.get(self._label(label))

    def select(
        self,
        item: SelectableItem,
        label: Optional[str] = None,
        silent: bool = False,
        silent_locally: bool = False,
    ) -> None:
        """
        Select a member item under label, deselecting the previous holder.

        Args:
            silent: No signal fires anywhere
            silent_locally: This collection's on_selected / on_deselected stay
                quiet for this call; the item and other collections holding it
                fire as usual
        """
        label = self._label(label)
        if label in self.ignored_labels:
            raise ValueError(f'Label "{label}" is ignored in this collection and can\'t be selected')
        if item not in self:
            raise ValueError(f"{item!r} is not in the collection and can't be selected")

        outer = self._quiet_selection
        if silent_locally and not silent:
            self._quiet_selection = (item, label)
        try:
            if item.is_selected(label):
                # Flag already set elsewhere; only this collection's pointer is behind
                self._on_item_selected(item, label, silent=silent)
            else:
                item.select(label, silent=silent)
        finally:
            self._quiet_selection = outer

    def deselect(
        self,
        item: Optional[SelectableItem] = None,
        label: Optional[str] = None,
        silent: bool = False,
    ) -> None:
        """Deselect the item holding label here. A non-holder is ignored."""
        label = self._label(label)
        current = self._selection.get(label)
        if current is None or (item is not None and item is not current):
            return
        if current.is_selected(label):
            current.deselect(label, silent=silent)
        else:
            self._on_item_deselected(current, label, silent=silent)

    # --- Notifications from items ---

    def _on_item_selected(self, item: SelectableItem, label: str, silent: bool = False, quiet: bool = False) -> None:
        if label in self.ignored_labels or item not in self:
            return
        if self._is_quiet_selection(item, label):
            self._quiet_selection = None
            quiet = True
        previous = self._selection.get(label)
        if previous is item:
            return
        self._selection[label] = item
        if previous is not None:
            self._release(previous, label, silent=silent, quiet=quiet)
        if not (silent or quiet):
            self.on_selected.emit(item, self, label)

    def _on_item_deselected(self, item: SelectableItem, label: str, silent: bool = False) -> None:
        if self._selection.get(label) is not item:
            return
        del self._selection[label]
        if not silent:
            self.on_deselected.emit(item, self, DeselectContext(label, self.index(item)))

    # --- Helpers ---

    def _label(self, label: Optional[str]) -> str:
        return label or self.default_label

    def _is_quiet_selection(self, item: SelectableItem, label: str) -> bool:
        pending = self._quiet_selection
        return pending is not None and pending[0] is item and pending[1] == label

    def _release(self, previous: SelectableItem, label: str, silent: bool = False, quiet: bool = False) -> None:
        """Deselect the former holder of label after the pointer has moved on."""
        index = self.index(previous) if previous in self else None
        previous.deselect(label, silent=silent)
        if not (silent or quiet):
            self.on_deselected.emit(previous, self, DeselectContext(label, index))

    def _adopt_selection(self, item: SelectableItem, silent: bool = False, quiet: bool = False) -> None:
        for label in item.selected_labels:
            self._on_item_selected(item, label, silent=silent, quiet=quiet)

    def _held_elsewhere(self, item: SelectableItem, label: str) -> bool:
        return any(
            collection is not self and collection.selected_item(label) is item
            for collection in item.collections
        )

    def _new_members(self, items: List[SelectableItem]) -> List[SelectableItem]:
        batch: List[SelectableItem] = []
        for item in items:
            if not isinstance(item, SelectableItem):
                raise TypeError(f"Only SelectableItem instances can be added, got {type(item).__name__}")
            if item in self or any(queued is item for queued in batch):
                logger.debug(f"Skipping duplicate {item!r}")
                continue
            batch.append(item)
        return batch

    @staticmethod
    def _as_list(items: ItemsArg) -> List[SelectableItem]:
        if items is None:
            return []
        if isinstance(items, SelectableItem):
            return [items]
        return list(items)

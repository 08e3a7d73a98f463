"""
Navigation - Looped and bounded positional traversal.

Two reference points are supported:
- ItemNavigator: relative to an item's position in a given collection
  (its primary collection when none is passed)
- SelectionNavigator: relative to a collection's selected item under a label

Looped variants wrap around the ends of the sequence. The *_no_loop variants
return None past either end instead of wrapping.

Usage:
    nav = ItemNavigator(item)
    nav.next()                        # wraps to the first item after the last
    nav.ahead_no_loop(2, playlist)    # None if fewer than 2 items follow

    sel = SelectionNavigator(collection)
    sel.select_next(label="starred")
"""
from typing import Optional, TYPE_CHECKING
from loguru import logger

from src.cycle.errors import NavigationError

if TYPE_CHECKING:
    from src.models.collection import SelectOneCollection
    from src.models.item import SelectableItem


def looped_offset(reference_index: int, n: int, length: int) -> int:
    """
    (reference_index + n) mod length, always in [0, length).

    Raises:
        NavigationError: if length is not positive
    """
    if length <= 0:
        raise NavigationError("Can't resolve a looped position in an empty sequence")
    # Python's % already yields a non-negative result for a positive modulus
    return (reference_index + n) % length


def bounded_offset(reference_index: int, n: int, length: int) -> Optional[int]:
    """reference_index + n if it lies in [0, length), otherwise None."""
    target = reference_index + n
    if 0 <= target < length:
        return target
    return None


class ItemNavigator:
    """Navigation relative to an item's position within a collection."""

    def __init__(self, item: "SelectableItem"):
        self.item = item

    def _reference(self, collection: Optional["SelectOneCollection"]):
        collection = collection if collection is not None else self.item.collection
        if collection is None:
            raise NavigationError(
                f"Item {self.item.cid} isn't part of any collection, and no collection was passed in."
            )
        try:
            return collection, collection.index(self.item)
        except ValueError as e:
            raise NavigationError(f"Item {self.item.cid} doesn't exist in the collection.") from e

    # --- Looped ---

    def ahead(self, n: int, collection: Optional["SelectOneCollection"] = None) -> "SelectableItem":
        collection, index = self._reference(collection)
        return collection[looped_offset(index, n, len(collection))]

    def behind(self, n: int, collection: Optional["SelectOneCollection"] = None) -> "SelectableItem":
        return self.ahead(-n, collection)

    def next(self, collection: Optional["SelectOneCollection"] = None) -> "SelectableItem":
        return self.ahead(1, collection)

    def prev(self, collection: Optional["SelectOneCollection"] = None) -> "SelectableItem":
        return self.behind(1, collection)

    # --- Bounded ---

    def ahead_no_loop(self, n: int, collection: Optional["SelectOneCollection"] = None) -> Optional["SelectableItem"]:
        collection, index = self._reference(collection)
        target = bounded_offset(index, n, len(collection))
        return None if target is None else collection[target]

    def behind_no_loop(self, n: int, collection: Optional["SelectOneCollection"] = None) -> Optional["SelectableItem"]:
        return self.ahead_no_loop(-n, collection)

    def next_no_loop(self, collection: Optional["SelectOneCollection"] = None) -> Optional["SelectableItem"]:
        return self.ahead_no_loop(1, collection)

    def prev_no_loop(self, collection: Optional["SelectOneCollection"] = None) -> Optional["SelectableItem"]:
        return self.behind_no_loop(1, collection)


class SelectionNavigator:
    """
    Navigation relative to the selected item of a collection.

    Every operation takes an optional label; the collection's default label
    is used when it is omitted. Navigating while nothing is selected under
    the label is an error: there is no reference point.
    """

    def __init__(self, collection: "SelectOneCollection"):
        self.collection = collection

    def _reference(self, label: Optional[str]) -> int:
        label = label or self.collection.default_label
        current = self.collection.selected_item(label)
        if current is None:
            raise NavigationError(
                "Illegal call of a selection navigation method. No item had been "
                f'selected to begin with (using label "{label}").'
            )
        return self.collection.index(current)

    # --- Looped ---

    def ahead(self, n: int, label: Optional[str] = None) -> "SelectableItem":
        index = self._reference(label)
        return self.collection[looped_offset(index, n, len(self.collection))]

    def behind(self, n: int, label: Optional[str] = None) -> "SelectableItem":
        return self.ahead(-n, label)

    def next(self, label: Optional[str] = None) -> "SelectableItem":
        return self.ahead(1, label)

    def prev(self, label: Optional[str] = None) -> "SelectableItem":
        return self.behind(1, label)

    # --- Bounded ---

    def ahead_no_loop(self, n: int, label: Optional[str] = None) -> Optional["SelectableItem"]:
        index = self._reference(label)
        target = bounded_offset(index, n, len(self.collection))
        return None if target is None else self.collection[target]

    def behind_no_loop(self, n: int, label: Optional[str] = None) -> Optional["SelectableItem"]:
        return self.ahead_no_loop(-n, label)

    def next_no_loop(self, label: Optional[str] = None) -> Optional["SelectableItem"]:
        return self.ahead_no_loop(1, label)

    def prev_no_loop(self, label: Optional[str] = None) -> Optional["SelectableItem"]:
        return self.behind_no_loop(1, label)

    # --- Selection shortcuts ---

    def select_at(self, index: int, label: Optional[str] = None) -> "SelectionNavigator":
        """Select the item at index. Indexes outside the collection are an error."""
        item = self.collection.at(index)
        if item is None:
            raise NavigationError(
                f"Item with index {index} doesn't exist in the collection and can't be selected."
            )
        self.collection.select(item, label=label)
        return self

    def select_next(self, label: Optional[str] = None) -> "SelectionNavigator":
        self.collection.select(self.next(label), label=label)
        return self

    def select_prev(self, label: Optional[str] = None) -> "SelectionNavigator":
        self.collection.select(self.prev(label), label=label)
        return self

    def select_next_no_loop(self, label: Optional[str] = None) -> "SelectionNavigator":
        item = self.next_no_loop(label)
        if item is not None:
            self.collection.select(item, label=label)
        else:
            logger.debug(f"select_next_no_loop: already at the end of {self.collection!r}")
        return self

    def select_prev_no_loop(self, label: Optional[str] = None) -> "SelectionNavigator":
        item = self.prev_no_loop(label)
        if item is not None:
            self.collection.select(item, label=label)
        else:
            logger.debug(f"select_prev_no_loop: already at the start of {self.collection!r}")
        return self

"""
Selectable Item - An entity that can sit in several ordered collections.

The item owns its per-label selection flags. It never stores a position:
where it sits is always looked up on a specific collection.
"""
import itertools
from typing import Dict, List, Optional, Tuple, TYPE_CHECKING
from loguru import logger

from src.core.events import Signal

if TYPE_CHECKING:
    from src.models.collection import SelectOneCollection

_cid_counter = itertools.count(1)


class SelectableItem:
    """
    Item with independent selection flags per label.

    Selecting or deselecting the item notifies every collection holding it,
    so each one can update its own "currently selected" pointer for the label.

    Usage:
        item = SelectableItem(name="Track 1")
        item.select("starred")
        item.is_selected("starred")  # True

        item.on_selected.connect(lambda item, label: ...)
    """

    def __init__(self, **attributes):
        self.cid = f"c{next(_cid_counter)}"
        self.attributes: Dict[str, object] = dict(attributes)
        self._flags: Dict[str, bool] = {}
        self._collections: List["SelectOneCollection"] = []

        self.on_selected = Signal("selected")
        self.on_deselected = Signal("deselected")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.cid}>"

    def get(self, key: str, default=None):
        return self.attributes.get(key, default)

    # --- Selection flags ---

    def is_selected(self, label: str) -> bool:
        return self._flags.get(label, False)

    @property
    def selected_labels(self) -> Tuple[str, ...]:
        return tuple(label for label, flag in self._flags.items() if flag)

    def select(self, label: str, silent: bool = False) -> None:
        """
        Flag the item as selected under label and tell its collections.

        With silent=True no signal fires, neither here nor in the collections.
        """
        if self.is_selected(label):
            return
        self._flags[label] = True
        logger.debug(f"{self!r} selected under '{label}'{' (silent)' if silent else ''}")
        if not silent:
            self.on_selected.emit(self, label)
        for collection in list(self._collections):
            collection._on_item_selected(self, label, silent=silent)

    def deselect(self, label: str, silent: bool = False) -> None:
        """Clear the selection flag for label and tell its collections."""
        if not self.is_selected(label):
            return
        self._flags[label] = False
        logger.debug(f"{self!r} deselected under '{label}'{' (silent)' if silent else ''}")
        if not silent:
            self.on_deselected.emit(self, label)
        for collection in list(self._collections):
            collection._on_item_deselected(self, label, silent=silent)

    # --- Membership ---

    @property
    def collections(self) -> Tuple["SelectOneCollection", ...]:
        """Collections holding this item, in the order they were joined."""
        return tuple(self._collections)

    @property
    def collection(self) -> Optional["SelectOneCollection"]:
        """Primary collection: the earliest joined collection still holding the item."""
        return self._collections[0] if self._collections else None

    def _join(self, collection: "SelectOneCollection") -> None:
        if collection not in self._collections:
            self._collections.append(collection)

    def _leave(self, collection: "SelectOneCollection") -> None:
        if collection in self._collections:
            self._collections.remove(collection)

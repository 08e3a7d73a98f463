"""
Ready-made hosts carrying the navigation and selection policy capabilities.

The capabilities are held by composition (host.navigator,
host.selection_policy); the mixins below only forward to them.
"""
from typing import Any, Iterable, Optional

from src.core.config import ConfigManager
from src.cycle.apply import apply_navigation, apply_selection_policy
from src.cycle.options import CycleOptions
from src.models.collection import SelectOneCollection
from src.models.item import SelectableItem


class Navigable:
    """Forwards the navigation methods to self.navigator."""
    navigator = None

    def ahead(self, n: int, *args, **kwargs):
        return self.navigator.ahead(n, *args, **kwargs)

    def behind(self, n: int, *args, **kwargs):
        return self.navigator.behind(n, *args, **kwargs)

    def next(self, *args, **kwargs):
        return self.navigator.next(*args, **kwargs)

    def prev(self, *args, **kwargs):
        return self.navigator.prev(*args, **kwargs)

    def ahead_no_loop(self, n: int, *args, **kwargs):
        return self.navigator.ahead_no_loop(n, *args, **kwargs)

    def behind_no_loop(self, n: int, *args, **kwargs):
        return self.navigator.behind_no_loop(n, *args, **kwargs)

    def next_no_loop(self, *args, **kwargs):
        return self.navigator.next_no_loop(*args, **kwargs)

    def prev_no_loop(self, *args, **kwargs):
        return self.navigator.prev_no_loop(*args, **kwargs)


class SelectionPolicyHost:
    """Exposes the selection policy applied to a collection."""
    selection_policy = None

    @property
    def cycle_options(self) -> Optional[CycleOptions]:
        return self.selection_policy.options if self.selection_policy is not None else None

    def close(self) -> None:
        """Tear down the policy's signal subscriptions."""
        if self.selection_policy is not None:
            self.selection_policy.detach()


class CycleItem(SelectableItem, Navigable):
    """
    Selectable item that can navigate its collections.

    Usage:
        a, b, c = CycleItem(), CycleItem(), CycleItem()
        tracks = CycleCollection([a, b, c])
        a.next()               # b
        c.next()               # a (looped)
        c.next_no_loop()       # None
        a.prev(other_list)     # relative to another collection holding a
    """

    def __init__(self, **attributes):
        super().__init__(**attributes)
        apply_navigation(self)


class CycleCollection(SelectOneCollection, Navigable, SelectionPolicyHost):
    """
    SelectOneCollection with selection navigation and an automatic selection policy.

    Usage:
        tracks = CycleCollection(items, auto_select="first", select_if_removed="next")
        tracks.select_next()
        tracks.next(label="starred")
    """

    def __init__(
        self,
        items: Optional[Iterable[SelectableItem]] = None,
        *,
        auto_select: Any = None,
        select_if_removed: Any = None,
        initial_selection: Any = None,
        default_label: Optional[str] = None,
        ignored_labels: Optional[Iterable[str]] = None,
        config: Optional[ConfigManager] = None,
    ):
        super().__init__(None, default_label=default_label, ignored_labels=ignored_labels, config=config)
        items = list(items) if items is not None else None

        apply_navigation(self)
        apply_selection_policy(
            self,
            items,
            auto_select=auto_select,
            select_if_removed=select_if_removed,
            initial_selection=initial_selection,
        )
        if items:
            self.reset(items)

    def select_at(self, index: int, label: Optional[str] = None) -> "CycleCollection":
        self.navigator.select_at(index, label)
        return self

    def select_next(self, label: Optional[str] = None) -> "CycleCollection":
        self.navigator.select_next(label)
        return self

    def select_prev(self, label: Optional[str] = None) -> "CycleCollection":
        self.navigator.select_prev(label)
        return self

    def select_next_no_loop(self, label: Optional[str] = None) -> "CycleCollection":
        self.navigator.select_next_no_loop(label)
        return self

    def select_prev_no_loop(self, label: Optional[str] = None) -> "CycleCollection":
        self.navigator.select_prev_no_loop(label)
        return self

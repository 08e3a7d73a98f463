"""
Cycle - Looped/bounded navigation and automatic, label-scoped selection.

Usage:
    from src.cycle import CycleCollection, CycleItem

    items = [CycleItem(title=t) for t in ("a", "b", "c")]
    playlist = CycleCollection(items, auto_select="first", select_if_removed="next")
    playlist.select_next()
"""
from src.cycle.apply import apply_navigation, apply_selection_policy
from src.cycle.errors import CycleError, ConfigurationError, MissingArgumentError, NavigationError
from src.cycle.hosts import CycleCollection, CycleItem, Navigable, SelectionPolicyHost
from src.cycle.navigation import ItemNavigator, SelectionNavigator, bounded_offset, looped_offset
from src.cycle.options import AutoSelect, AutoSelectKind, CycleOptions, RemovalRepairMode, parse_options
from src.cycle.selection_policy import SelectionPolicy

__all__ = [
    "apply_navigation",
    "apply_selection_policy",
    "CycleError",
    "ConfigurationError",
    "MissingArgumentError",
    "NavigationError",
    "CycleCollection",
    "CycleItem",
    "Navigable",
    "SelectionPolicyHost",
    "ItemNavigator",
    "SelectionNavigator",
    "bounded_offset",
    "looped_offset",
    "AutoSelect",
    "AutoSelectKind",
    "CycleOptions",
    "RemovalRepairMode",
    "parse_options",
    "SelectionPolicy",
]

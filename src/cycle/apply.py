"""
Setup entry points.

    apply_navigation(host)
        Builds the navigator for an item or a collection.

    apply_selection_policy(collection, initial_items, auto_select=..., select_if_removed=...)
        Validates the options, runs the initial selection pass over
        initial_items and subscribes the policy to the collection's signals.

Both return the capability object. Hosts that declare a slot for it
(a `navigator` / `selection_policy` class attribute, see src.cycle.hosts)
get it assigned as well; plain items and collections are left untouched.
"""
import weakref
from typing import Any, Iterable, Optional, Union
from loguru import logger

from src.cycle.errors import MissingArgumentError
from src.cycle.navigation import ItemNavigator, SelectionNavigator
from src.cycle.options import parse_options
from src.cycle.selection_policy import SelectionPolicy
from src.models.collection import SelectOneCollection
from src.models.item import SelectableItem

_MISSING = object()

# Collections that already carry a selection policy
_policy_collections: "weakref.WeakSet[SelectOneCollection]" = weakref.WeakSet()


def _declares(host: Any, slot: str) -> bool:
    return hasattr(type(host), slot)


def apply_navigation(host: Union[SelectableItem, SelectOneCollection]) -> Union[ItemNavigator, SelectionNavigator]:
    """Build the matching navigator for an item or a collection and return it."""
    if isinstance(host, SelectOneCollection):
        navigator = SelectionNavigator(host)
    elif isinstance(host, SelectableItem):
        navigator = ItemNavigator(host)
    else:
        raise TypeError(f"Can't apply navigation to {type(host).__name__}")
    if _declares(host, "navigator"):
        host.navigator = navigator
    return navigator


def apply_selection_policy(
    collection: SelectOneCollection,
    initial_items: Optional[Iterable[SelectableItem]] = _MISSING,
    *,
    auto_select: Any = None,
    select_if_removed: Any = None,
    initial_selection: Any = None,
) -> SelectionPolicy:
    """
    Apply the auto_select / select_if_removed policy to a collection.

    Args:
        collection: The host collection
        initial_items: Items the collection is being created with. Required,
            but may be None or empty.
        auto_select: See parse_options()
        select_if_removed: See parse_options()
        initial_selection: Deprecated alias of auto_select

    Raises:
        MissingArgumentError: if initial_items is not passed at all
        ConfigurationError: on invalid options; nothing is applied then
        RuntimeError: if the collection already has a selection policy
    """
    if initial_items is _MISSING:
        raise MissingArgumentError(
            "The `initial_items` parameter has not been passed to apply_selection_policy. "
            "Its value can be None if no items are passed in during instantiation, but even so, it must be provided."
        )
    if collection in _policy_collections:
        raise RuntimeError(f"A selection policy has already been applied to {collection!r}")

    options = parse_options(
        auto_select,
        select_if_removed,
        default_label=collection.default_label,
        ignored_labels=collection.ignored_labels,
        initial_selection=initial_selection,
    )

    policy = SelectionPolicy(collection, options)
    policy.attach(initial_items)
    _policy_collections.add(collection)
    if _declares(collection, "selection_policy"):
        collection.selection_policy = policy
    logger.debug(
        f"Selection policy applied to {collection!r}: "
        f"auto_select={sorted(options.auto_select)} select_if_removed={sorted(options.select_if_removed)}"
    )
    return policy

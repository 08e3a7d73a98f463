"""Silent add / remove / reset: the policy still applies, without any signal."""
import pytest
from unittest.mock import MagicMock
from src.cycle import CycleCollection

def spy_all(collection, items):
    spies = {
        "selected": MagicMock(),
        "deselected": MagicMock(),
        "added": MagicMock(),
        "removed": MagicMock(),
        "reset": MagicMock(),
        "updated": MagicMock(),
        "item_selected": MagicMock(),
        "item_deselected": MagicMock(),
    }
    collection.on_selected.connect(spies["selected"])
    collection.on_deselected.connect(spies["deselected"])
    collection.on_added.connect(spies["added"])
    collection.on_removed.connect(spies["removed"])
    collection.on_reset.connect(spies["reset"])
    collection.on_updated.connect(spies["updated"])
    for item in items:
        item.on_selected.connect(spies["item_selected"])
        item.on_deselected.connect(spies["item_deselected"])
    return spies

def assert_nothing_fired(spies):
    fired = [name for name, spy in spies.items() if spy.called]
    assert fired == []

@pytest.mark.parametrize("value,expected", [("first", 0), ("last", 2), (1, 1)])
def test_silent_add_auto_selects(items, value, expected):
    collection = CycleCollection(auto_select=value)
    spies = spy_all(collection, items)

    collection.add(items, silent=True)

    assert collection.selected_item() is items[expected]
    assert items[expected].is_selected("selected")
    assert_nothing_fired(spies)

def test_silent_reset_auto_selects(items):
    collection = CycleCollection(auto_select="last")
    spies = spy_all(collection, items)

    collection.reset(items, silent=True)

    assert collection.selected_item() is items[2]
    assert_nothing_fired(spies)

def test_silent_batch_defers_to_pre_selected_item(items):
    m1, m2, m3 = items
    collection = CycleCollection(auto_select={"x": "first"})
    m2.select("x")

    collection.add(items, silent=True)

    assert collection.selected_item("x") is m2
    assert not m1.is_selected("x")
    assert collection.selection_policy.skip_flags == frozenset()

@pytest.mark.parametrize("policy,position,expected", [
    ("next", 1, "m3"),
    ("next", 2, "m1"),
    ("prev", 0, "m3"),
    ("nextNoLoop", 2, "m2"),
    ("prevNoLoop", 0, "m2"),
])
def test_silent_remove_repairs_selection(items, policy, position, expected):
    collection = CycleCollection(items, select_if_removed=policy)
    removed = items[position]
    collection.select(removed)
    spies = spy_all(collection, items)

    collection.remove(removed, silent=True)

    assert collection.selected_item().get("name") == expected
    assert not removed.is_selected("selected")
    assert_nothing_fired(spies)

def test_silent_remove_repairs_every_label(items):
    m1, m2, m3 = items
    collection = CycleCollection(items, select_if_removed={"selected": "next", "starred": "prev"})
    collection.select(m2)
    collection.select(m2, label="starred")

    collection.remove(m2, silent=True)

    assert collection.selected_item() is m3
    assert collection.selected_item("starred") is m1

def test_silent_remove_of_unselected_item(items):
    m1, m2, m3 = items
    collection = CycleCollection(items, select_if_removed="next")
    collection.select(m1)

    collection.remove(m3, silent=True)

    assert collection.selected_item() is m1

def test_inactive_policy_ignores_silent_signals(items):
    collection = CycleCollection(items)

    assert collection.on_silent_added.subscriber_count == 0
    assert collection.on_silent_removed.subscriber_count == 0
    assert collection.on_silent_reset.subscriber_count == 0

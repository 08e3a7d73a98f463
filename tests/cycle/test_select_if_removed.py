"""select_if_removed: repairing the selection when the selected item is removed."""
import pytest
from unittest.mock import MagicMock
from src.cycle import CycleCollection, CycleItem

# (policy, removed position) -> name of the item selected afterwards, for [m1, m2, m3]
REPAIR_TABLE = [
    ("prev", 0, "m3"),
    ("prev", 1, "m1"),
    ("prev", 2, "m2"),
    ("prevNoLoop", 0, "m2"),
    ("prevNoLoop", 1, "m1"),
    ("prevNoLoop", 2, "m2"),
    ("next", 0, "m2"),
    ("next", 1, "m3"),
    ("next", 2, "m1"),
    ("nextNoLoop", 0, "m2"),
    ("nextNoLoop", 1, "m3"),
    ("nextNoLoop", 2, "m2"),
]

@pytest.mark.parametrize("policy,position,expected", REPAIR_TABLE)
def test_repair_table(items, policy, position, expected):
    collection = CycleCollection(items, select_if_removed=policy)
    removed = items[position]
    collection.select(removed)

    collection.remove(removed)

    assert collection.selected_item().get("name") == expected
    assert not removed.is_selected("selected")
    assert [item.get("name") for item in items if item.is_selected("selected")] == [expected]

@pytest.mark.parametrize("policy", ["prev", "next", "prevNoLoop", "nextNoLoop"])
def test_removing_unselected_item_keeps_selection(items, policy):
    m1, m2, m3 = items
    collection = CycleCollection(items, select_if_removed=policy)
    collection.select(m2)

    collection.remove(m3)

    assert collection.selected_item() is m2

@pytest.mark.parametrize("policy", ["prev", "next", "prevNoLoop", "nextNoLoop"])
def test_removing_last_remaining_item(policy):
    only = CycleItem()
    collection = CycleCollection([only], select_if_removed=policy)
    collection.select(only)

    collection.remove(only)

    assert collection.selected_item() is None
    assert len(collection) == 0

def test_none_leaves_selection_empty(items):
    collection = CycleCollection(items, select_if_removed="none")
    collection.select(items[1])

    collection.remove(items[1])

    assert collection.selected_item() is None

def test_explicit_deselect_is_not_repaired(items):
    collection = CycleCollection(items, select_if_removed="next")
    collection.select(items[1])

    collection.deselect()

    assert collection.selected_item() is None

def test_switching_selection_is_not_repaired(items):
    collection = CycleCollection(items, select_if_removed="next")
    collection.select(items[0])

    collection.select(items[2])

    assert collection.selected_item() is items[2]
    assert not items[1].is_selected("selected")

def test_repair_emits_selection_events(items):
    m1, m2, m3 = items
    collection = CycleCollection(items, select_if_removed="next")
    collection.select(m1)
    on_selected = MagicMock()
    collection.on_selected.connect(on_selected)

    collection.remove(m1)

    on_selected.assert_called_once_with(m2, collection, "selected")

def test_batch_removal_repairs_each_step(items):
    m1, m2, m3 = items
    collection = CycleCollection(items, select_if_removed="next")
    collection.select(m1)

    collection.remove([m1, m2])

    assert collection.selected_item() is m3

def test_combined_with_auto_select(items):
    collection = CycleCollection(items, auto_select="last", select_if_removed="prevNoLoop")
    assert collection.selected_item() is items[2]

    collection.remove(items[2])

    assert collection.selected_item() is items[1]

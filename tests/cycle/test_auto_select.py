"""auto_select: selection when a collection is populated."""
import pytest
from unittest.mock import MagicMock
from src.cycle import CycleCollection, CycleItem, ConfigurationError, MissingArgumentError, apply_selection_policy
from src.models import SelectOneCollection

class TestInitialItems:
    @pytest.mark.parametrize("value,expected", [("first", 0), ("last", 2), (1, 1), ("1", 1)])
    def test_selects_configured_item(self, items, value, expected):
        collection = CycleCollection(items, auto_select=value)

        assert collection.selected_item() is items[expected]
        assert [item.is_selected("selected") for item in items] == [i == expected for i in range(3)]

    @pytest.mark.parametrize("value", [3, 10, -1])
    def test_out_of_range_index_selects_nothing(self, items, value):
        collection = CycleCollection(items, auto_select=value)
        assert collection.selected_item() is None

    def test_none_selects_nothing(self, items):
        collection = CycleCollection(items, auto_select="none")
        assert collection.selected_item() is None
        assert not any(item.is_selected("selected") for item in items)

    def test_selected_event_on_item(self, items):
        on_selected = MagicMock()
        items[0].on_selected.connect(on_selected)

        CycleCollection(items, auto_select="first")

        on_selected.assert_called_once_with(items[0], "selected")

    def test_pre_selected_item_is_kept(self, items):
        m1, m2, m3 = items
        m2.select("selected")
        on_m1_selected = MagicMock()
        m1.on_selected.connect(on_m1_selected)

        collection = CycleCollection(items, auto_select="first")

        assert collection.selected_item() is m2
        on_m1_selected.assert_not_called()

    def test_policy_applied_to_populated_collection(self, items):
        collection = SelectOneCollection(items)

        apply_selection_policy(collection, collection.items, auto_select="last")

        assert collection.selected_item() is items[2]

class TestBatchAdd:
    def test_first_of_batch_is_selected(self, items):
        collection = CycleCollection(auto_select="first")
        on_selected = MagicMock()
        collection.on_selected.connect(on_selected)

        collection.add(items)

        assert collection.selected_item() is items[0]
        on_selected.assert_called_once_with(items[0], collection, "selected")

    def test_last_of_batch_is_selected(self, items):
        collection = CycleCollection(auto_select="last")
        collection.add(items)
        assert collection.selected_item() is items[2]

    def test_defers_to_pre_selected_item_later_in_batch(self, items):
        m1, m2, m3 = items
        collection = CycleCollection(auto_select={"x": "first"})
        m2.select("x")
        on_m1_selected = MagicMock()
        m1.on_selected.connect(on_m1_selected)

        collection.add(items)

        assert collection.selected_item("x") is m2
        assert [item.is_selected("x") for item in items] == [False, True, False]
        on_m1_selected.assert_not_called()
        assert collection.selection_policy.skip_flags == frozenset()

    def test_batch_losing_its_pre_selected_item(self, items):
        m1, m2, m3 = items
        collection = CycleCollection(auto_select={"x": "first"})
        m2.select("x")

        def drop_m2(item, coll, index):
            if m2 in coll:
                coll.remove(m2)

        collection.on_added.connect(drop_m2)
        collection.add(items)

        assert list(collection) == [m1, m3]
        assert collection.selected_item("x") is m1
        assert collection.selection_policy.skip_flags == frozenset()

    def test_items_added_to_end_of_unselected_collection(self, items):
        m1, m2, m3 = items
        collection = CycleCollection([m1], auto_select="first")
        collection.deselect()

        collection.add([m2, m3])

        assert collection.selected_item() is m1

    def test_items_added_at_front(self, items):
        m1, m2, m3 = items
        collection = CycleCollection([m3], auto_select="first")
        collection.deselect()

        collection.add([m1, m2], at=0)

        assert collection.selected_item() is m1

    def test_existing_selection_is_kept(self, items):
        m1, m2, m3 = items
        collection = CycleCollection([m1], auto_select="last")

        collection.add([m2, m3])

        assert collection.selected_item() is m1

    def test_index_beyond_end_waits_for_collection_to_grow(self, items):
        collection = CycleCollection(items, auto_select=4)
        assert collection.selected_item() is None

        extra = [CycleItem(), CycleItem()]
        collection.add(extra)

        assert collection.selected_item() is extra[1]

class TestReset:
    def test_first_is_selected(self, items):
        collection = CycleCollection(auto_select="first")
        collection.reset(items)
        assert collection.selected_item() is items[0]

    def test_pre_selected_item_is_kept(self, items):
        collection = CycleCollection(auto_select="last")
        items[0].select("selected")

        collection.reset(items)

        assert collection.selected_item() is items[0]
        assert not items[2].is_selected("selected")

    def test_reset_to_new_items_selects_again(self, items):
        m1, m2, m3 = items
        collection = CycleCollection([m1], auto_select="first")

        collection.reset([m2, m3])

        assert collection.selected_item() is m2
        assert not m1.is_selected("selected")

    def test_auto_selection_is_quiet_on_the_reset_collection(self, items):
        collection = CycleCollection(auto_select="first")
        other = SelectOneCollection(items)
        on_selected = MagicMock()
        on_other_selected = MagicMock()
        on_item_selected = MagicMock()
        collection.on_selected.connect(on_selected)
        other.on_selected.connect(on_other_selected)
        items[0].on_selected.connect(on_item_selected)

        collection.reset(items)

        assert collection.selected_item() is items[0]
        on_selected.assert_not_called()
        on_item_selected.assert_called_once_with(items[0], "selected")
        on_other_selected.assert_called_once_with(items[0], other, "selected")

    def test_selection_after_reset_is_announced(self, items):
        collection = CycleCollection(auto_select="first")
        collection.reset(items)
        on_selected = MagicMock()
        collection.on_selected.connect(on_selected)

        collection.select_next()

        on_selected.assert_called_once_with(items[1], collection, "selected")

    def test_reset_to_empty(self, items):
        collection = CycleCollection(items, auto_select="first")
        collection.reset([])
        assert collection.selected_item() is None

class TestIdempotence:
    def test_no_op_lifecycle_events_keep_selection(self, items):
        m1, m2, m3 = items
        collection = CycleCollection(items, auto_select="first")
        collection.select(m3)
        on_selected = MagicMock()
        collection.on_selected.connect(on_selected)

        collection.reset(list(collection))
        collection.add(m1)
        collection.on_updated.emit(collection)

        assert collection.selected_item() is m3
        on_selected.assert_not_called()

    def test_repeated_reset_with_first(self, items):
        collection = CycleCollection(items, auto_select="first")
        collection.reset(items)
        collection.reset(items)
        assert collection.selected_item() is items[0]
        assert [item.is_selected("selected") for item in items] == [True, False, False]

class TestSetup:
    def test_invalid_option_fails_before_subscribing(self, items):
        collection = SelectOneCollection(items)

        with pytest.raises(ConfigurationError, match='Invalid value "middle"'):
            apply_selection_policy(collection, items, auto_select="middle")

        assert collection.on_added.subscriber_count == 0
        assert collection.on_reset.subscriber_count == 0
        assert collection.on_deselected.subscriber_count == 0
        assert getattr(collection, "selection_policy", None) is None
        assert collection.selected_item() is None

    def test_invalid_option_on_host(self, items):
        with pytest.raises(ConfigurationError):
            CycleCollection(items, auto_select="middle")
        assert not any(item.is_selected("selected") for item in items)

    def test_valid_auto_select_with_invalid_select_if_removed_applies_nothing(self, items):
        collection = SelectOneCollection()
        with pytest.raises(ConfigurationError):
            apply_selection_policy(collection, items, auto_select="first", select_if_removed="sideways")
        assert not items[0].is_selected("selected")

    def test_missing_initial_items(self):
        with pytest.raises(MissingArgumentError, match="initial_items"):
            apply_selection_policy(SelectOneCollection(), auto_select="first")

    @pytest.mark.parametrize("initial_items", [None, []])
    def test_empty_initial_items_are_fine(self, initial_items):
        collection = SelectOneCollection()
        policy = apply_selection_policy(collection, initial_items, auto_select="first")
        assert policy.is_attached
        assert policy.collection is collection

    def test_plain_collection_is_not_given_attributes(self, items):
        collection = SelectOneCollection()
        policy = apply_selection_policy(collection, None, auto_select="first")

        collection.add(items)

        assert not hasattr(collection, "selection_policy")
        assert collection.selected_item() is items[0]
        assert policy.options.auto_select_active

    def test_applying_twice_is_an_error(self, items):
        collection = CycleCollection(items)
        with pytest.raises(RuntimeError):
            apply_selection_policy(collection, None, auto_select="first")

    def test_applying_twice_to_plain_collection_is_an_error(self):
        collection = SelectOneCollection()
        apply_selection_policy(collection, None, select_if_removed="next")
        with pytest.raises(RuntimeError):
            apply_selection_policy(collection, None, auto_select="first")

    def test_inactive_policy_does_not_subscribe(self, items):
        collection = CycleCollection(items)

        assert collection.on_added.subscriber_count == 0
        assert collection.on_reset.subscriber_count == 0
        assert collection.on_updated.subscriber_count == 0
        assert collection.on_deselected.subscriber_count == 0

    def test_deprecated_initial_selection(self, items):
        with pytest.warns(DeprecationWarning):
            collection = CycleCollection(items, initial_selection="last")
        assert collection.selected_item() is items[2]
        assert collection.cycle_options.auto_select_active

    def test_close_detaches_handlers(self, items):
        collection = CycleCollection(auto_select="first")
        collection.close()
        collection.close()

        collection.add(items)

        assert collection.selected_item() is None
        assert not collection.selection_policy.is_attached

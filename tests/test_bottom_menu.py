# tests/test_bottom_menu.py
import gc
import random
import shutil
import tempfile
import unittest
import weakref
from pathlib import Path

from navtemplate.bottom_menu import (
    SELECT_ANIMATION, MenuSelection, ViewWithBottomMenu, find_widget, menu_button_id,
)
from navtemplate.defaults import DefaultsStore
from navtemplate.events import PanUpdateDetails
from navtemplate.menu import MenuBarItem, MenuModel
from navtemplate.widgets import Text


def make_items(*names):
    return [
        MenuBarItem(i, name, name.lower(), f"{name.lower()}.fill", Text(f"{name} page"))
        for i, name in enumerate(names)
    ]


class TestMenuSelection(unittest.TestCase):
    def test_initial_state(self):
        selection = MenuSelection(3)
        self.assertEqual(selection.snapshot(), {"selected_index": 0, "bounce_values": [0, 0, 0]})

    def test_tap_sequence_scenario(self):
        selection = MenuSelection(3)
        for index in [0, 0, 2, 1]:
            self.assertTrue(selection.tap(index))
        self.assertEqual(selection.selected_index, 1)
        self.assertEqual(selection.bounce_values, [2, 1, 1])

    def test_retap_still_counts(self):
        selection = MenuSelection(2)
        selection.tap(1)
        selection.tap(1)
        self.assertEqual(selection.selected_index, 1)
        self.assertEqual(selection.bounce_value(1), 2)

    def test_out_of_range_tap_is_rejected(self):
        selection = MenuSelection(3)
        selection.tap(2)
        before = selection.snapshot()
        for index in (3, 10, 42, -1):
            self.assertFalse(selection.tap(index))
        self.assertEqual(selection.snapshot(), before)

    def test_more_than_ten_items(self):
        selection = MenuSelection(12)
        self.assertTrue(selection.tap(11))
        self.assertEqual(selection.bounce_value(11), 1)

    def test_empty_menu(self):
        selection = MenuSelection(0)
        self.assertFalse(selection.tap(0))
        self.assertEqual(selection.selected_index, 0)
        self.assertFalse(selection.has_selection)
        self.assertFalse(selection.is_selected(0))

    def test_random_sequences(self):
        rng = random.Random(1234)
        for _ in range(50):
            count = rng.randint(1, 8)
            selection = MenuSelection(count)
            taps = [rng.randrange(count) for _ in range(rng.randint(1, 30))]
            for index in taps:
                selection.tap(index)
            self.assertEqual(selection.selected_index, taps[-1])
            self.assertEqual(selection.bounce_values, [taps.count(i) for i in range(count)])

    def test_shrink_resets_out_of_bounds_selection(self):
        selection = MenuSelection(4)
        selection.tap(3)
        selection.tap(1)
        selection.tap(3)
        selection.resize(2)
        self.assertEqual(selection.selected_index, 0)
        self.assertEqual(selection.bounce_values, [0, 1])

    def test_shrink_keeps_selection_in_bounds(self):
        selection = MenuSelection(4)
        selection.tap(1)
        selection.resize(3)
        self.assertEqual(selection.selected_index, 1)

    def test_grow_adds_zero_counters(self):
        selection = MenuSelection(1)
        selection.tap(0)
        selection.resize(3)
        self.assertEqual(selection.bounce_values, [1, 0, 0])


class BottomMenuTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())
        self.store = DefaultsStore(self.tmp / "defaults.yaml")
        self.model = MenuModel(self.store)

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def make_view(self, items):
        view = ViewWithBottomMenu(items, self.model)
        self.addCleanup(view.dispose)
        return view


class TestViewWithBottomMenu(BottomMenuTestCase):
    def test_tap_commits_once_with_animation(self):
        view = self.make_view(make_items("A", "B", "C"))
        state = view.get_state()
        commits = []
        state.add_listener(lambda s: commits.append(s.selection.snapshot()))

        self.assertTrue(view.tap(2))

        self.assertEqual(commits, [{"selected_index": 2, "bounce_values": [0, 0, 1]}])
        self.assertEqual(state.last_transaction.animation, SELECT_ANIMATION)

    def test_rejected_tap_does_not_commit(self):
        view = self.make_view(make_items("A", "B"))
        state = view.get_state()
        self.assertFalse(view.tap(5))
        self.assertEqual(state.commit_count, 0)

    def test_scenario_through_view(self):
        view = self.make_view(make_items("A", "B", "C"))
        for index in [0, 0, 2, 1]:
            view.tap(index)
        self.assertEqual(view.selection.selected_index, 1)
        self.assertEqual(view.selection.bounce_values, [2, 1, 1])

    def test_render_marks_only_selected_item(self):
        view = self.make_view(make_items("A", "B", "C"))
        view.tap(1)
        html = view.render()
        self.assertIn('data-symbol="b.fill"', html)
        self.assertIn('data-symbol="a"', html)
        self.assertIn('data-symbol="c"', html)
        self.assertNotIn('data-symbol="a.fill"', html)
        self.assertNotIn('data-symbol="b"', html)
        self.assertEqual(html.count("scale(1.15)"), 1)
        self.assertIn("B page", html)
        self.assertNotIn("A page", html)

    def test_render_carries_bounce_counters(self):
        view = self.make_view(make_items("A", "B"))
        view.tap(0)
        view.tap(0)
        self.assertIn('data-bounce="2"', view.render())

    def test_empty_menu_renders_placeholder(self):
        view = self.make_view([])
        self.assertFalse(view.tap(0))
        html = view.render()
        self.assertIn("No menu items", html)
        self.assertNotIn("nt-menu-button", html)
        self.assertEqual(view.selection.selected_index, 0)

    def test_display_order_follows_model(self):
        items = make_items("A", "B", "C")
        self.model.save_menu_order([items[2].with_sort_order(0), items[0].with_sort_order(1),
                                    items[1].with_sort_order(2)])
        view = self.make_view(items)
        html = view.render()
        self.assertLess(html.index('data-name="C"'), html.index('data-name="A"'))
        self.assertLess(html.index('data-name="A"'), html.index('data-name="B"'))
        # Slot 0 is C, so C's page shows first.
        self.assertIn("C page", html)

    def test_reorder_is_picked_up_without_new_view(self):
        items = make_items("A", "B", "C")
        view = self.make_view(items)
        state = view.get_state()
        self.assertEqual([i.name for i in state.sorted_items()], ["A", "B", "C"])

        self.model.move_item(state.sorted_items(), 2, 0)

        self.assertEqual([i.name for i in state.sorted_items()], ["C", "A", "B"])
        self.assertGreaterEqual(state.commit_count, 1)
        html = view.render()
        self.assertLess(html.index('data-name="C"'), html.index('data-name="A"'))

    def test_update_items_resizes_selection(self):
        view = self.make_view(make_items("A", "B", "C", "D"))
        view.tap(3)
        view.update_items(make_items("A", "B"))
        self.assertEqual(view.selection.selected_index, 0)
        self.assertEqual(view.selection.item_count, 2)
        self.assertIn("A page", view.render())

    def test_items_swapped_without_update_never_render_out_of_bounds(self):
        view = self.make_view(make_items("A", "B", "C"))
        view.tap(2)
        view.items = make_items("A")
        self.assertIn("A page", view.render())
        self.assertEqual(view.selection.selected_index, 0)

    def test_tap_past_end_of_reassigned_items_is_rejected(self):
        view = self.make_view(make_items("A", "B", "C"))
        view.items = make_items("A")
        self.assertFalse(view.tap(2))
        self.assertEqual(view.get_state().commit_count, 0)
        self.assertEqual(view.selection.bounce_values, [0])

    def test_tap_on_grown_items_is_accepted(self):
        view = self.make_view(make_items("A"))
        view.items = make_items("A", "B", "C")
        self.assertTrue(view.tap(2))
        self.assertEqual(view.selection.snapshot(), {"selected_index": 2, "bounce_values": [0, 0, 1]})
        self.assertIn("C page", view.render())

    def test_dropped_view_is_released_by_model(self):
        view = ViewWithBottomMenu(make_items("A", "B"), self.model)
        state = weakref.ref(view.get_state())
        del view
        gc.collect()
        self.assertIsNone(state())

        self.model.reset_menu_order()
        self.assertEqual(self.model._listeners, [])

    def test_dispatch_tap_routes_to_button(self):
        items = make_items("A", "B", "C")
        view = self.make_view(items)
        self.assertTrue(view.dispatch_tap(str(menu_button_id(items[2].id))))
        self.assertEqual(view.selection.selected_index, 2)
        self.assertEqual(view.selection.bounce_values, [0, 0, 1])

    def test_dispatch_ignores_unknown_and_non_tap(self):
        items = make_items("A", "B")
        view = self.make_view(items)
        self.assertFalse(view.dispatch_tap("not-a-widget"))
        self.assertFalse(view.dispatch_tap(menu_button_id(items[1].id), PanUpdateDetails(dx=50, dy=0)))
        self.assertEqual(view.get_state().commit_count, 0)

    def test_buttons_are_erased_widgets_with_gestures(self):
        items = make_items("A", "B")
        view = self.make_view(items)
        tree = view.get_state().build()
        button = find_widget(tree, menu_button_id(items[0].id))
        self.assertIsNotNone(button)
        self.assertEqual(button.id, menu_button_id(items[0].id))
        self.assertIsNotNone(button.gesture_wrapper)

    def test_dispose_unsubscribes_from_model(self):
        view = ViewWithBottomMenu(make_items("A", "B"), self.model)
        view.dispose()
        self.model.reset_menu_order()
        self.assertEqual(view.get_state().commit_count, 0)


if __name__ == '__main__':
    unittest.main()

# tests/test_widgets.py
import unittest
import uuid

from navtemplate.base import Key, Widget
from navtemplate.events import LongPressDetails, PanUpdateDetails, TapDetails
from navtemplate.gestures import AnyGesture, DragGesture, LongPressGesture, TapGesture
from navtemplate.widgets import (
    AnyWidget, Column, EmptyView, Icon, Placeholder, Text, WidgetWithGesture, WidgetWithGestureType,
)


class CountingWidget(Widget):
    """Records how often its gesture capability is read."""
    def __init__(self, gesture=None):
        super().__init__()
        self.reads = 0
        self._gesture = gesture

    @property
    def gesture_wrapper(self):
        self.reads += 1
        return self._gesture

    def render(self):
        return "<b>counting</b>"


class TestWidgetIdentity(unittest.TestCase):
    def test_id_is_generated_once(self):
        text = Text("hello")
        self.assertIsInstance(text.id, uuid.UUID)
        self.assertEqual(text.id, text.id)

    def test_id_can_be_supplied(self):
        fixed = uuid.uuid4()
        self.assertEqual(Text("hello", id=fixed).id, fixed)

    def test_id_is_read_only(self):
        with self.assertRaises(AttributeError):
            Text("hello").id = uuid.uuid4()

    def test_unique_id_prefers_key(self):
        self.assertEqual(Text("a", key=Key("title")).get_unique_id(), Key("title"))
        text = Text("a")
        self.assertEqual(text.get_unique_id(), str(text.id))


class TestAnyWidget(unittest.TestCase):
    def test_preserves_identity(self):
        for widget in (Text("a"), Icon("star"), Placeholder("empty"), EmptyView(),
                       WidgetWithGesture(Text("b"), TapGesture())):
            erased = AnyWidget(widget)
            self.assertIs(erased.id, widget.id)

    def test_render_is_unchanged(self):
        widget = Column(children=[Text("a <b>"), Icon("star", scale=1.15)])
        self.assertEqual(AnyWidget(widget).render(), widget.render())

    def test_render_props_are_unchanged(self):
        for widget in (Text("a"), Icon("star", scale=1.15, bounce=2),
                       Column(children=[Text("a")], style="gap: 4px;"),
                       WidgetWithGesture(Icon("tap"), TapGesture())):
            self.assertEqual(AnyWidget(widget).render_props(), widget.render_props())
        icon = Icon("star", bounce=3)
        self.assertEqual(WidgetWithGesture(icon, TapGesture()).render_props()["bounce"], 3)

    def test_plain_widget_has_no_gesture(self):
        erased = AnyWidget(Text("plain"))
        self.assertIsNone(erased.gesture_wrapper)
        self.assertFalse(erased.has_gesture)

    def test_gesture_widget_keeps_gesture(self):
        widget = WidgetWithGesture(Text("tap me"), TapGesture())
        erased = AnyWidget(widget)
        self.assertTrue(erased.has_gesture)
        self.assertIs(erased.gesture_wrapper, widget.gesture_wrapper)

    def test_explicit_gesture_wins(self):
        explicit = AnyGesture(LongPressGesture())
        erased = AnyWidget(Text("plain"), gesture_wrapper=explicit)
        self.assertIs(erased.gesture_wrapper, explicit)

    def test_explicit_none_forces_absence(self):
        erased = AnyWidget(WidgetWithGesture(Text("tap"), TapGesture()), gesture_wrapper=None)
        self.assertIsNone(erased.gesture_wrapper)

    def test_capability_is_read_once(self):
        widget = CountingWidget(AnyGesture(TapGesture()))
        erased = AnyWidget(widget)
        widget._gesture = None
        for _ in range(3):
            self.assertTrue(erased.has_gesture)
            erased.render()
        self.assertEqual(widget.reads, 1)

    def test_erasing_twice_keeps_everything(self):
        inner = AnyWidget(WidgetWithGesture(Text("x"), TapGesture()))
        outer = AnyWidget(inner)
        self.assertIs(outer.id, inner.id)
        self.assertIs(outer.gesture_wrapper, inner.gesture_wrapper)
        self.assertEqual(outer.render(), inner.render())

    def test_heterogeneous_collection(self):
        widgets = [Text("a"), WidgetWithGesture(Icon("star"), DragGesture()), Placeholder("p")]
        erased = [AnyWidget(w) for w in widgets]
        self.assertEqual([e.id for e in erased], [w.id for w in widgets])
        self.assertEqual([e.has_gesture for e in erased], [False, True, False])
        column = Column(children=erased)
        html = column.render()
        for widget in widgets:
            self.assertIn(widget.render(), html)


class TestWidgetWithGesture(unittest.TestCase):
    def test_satisfies_gesture_capability(self):
        widget = WidgetWithGesture(Text("a"), TapGesture())
        self.assertIsInstance(widget, WidgetWithGestureType)
        self.assertIsInstance(widget.gesture_wrapper, AnyGesture)

    def test_keeps_identity_and_rendering(self):
        text = Text("a", key=Key("k"))
        widget = WidgetWithGesture(text, TapGesture())
        self.assertEqual(widget.id, text.id)
        self.assertEqual(widget.key, Key("k"))
        self.assertEqual(widget.render(), text.render())

    def test_payload_is_discarded(self):
        drags = []
        ended = []
        widget = WidgetWithGesture(Text("drag"), DragGesture(minimum_distance=10, action=drags.append))
        gesture = widget.gesture_wrapper.on_ended(lambda *args: ended.append(args))

        self.assertFalse(gesture.handle(PanUpdateDetails(dx=3, dy=4)))
        self.assertTrue(gesture.handle(PanUpdateDetails(dx=30, dy=40)))

        self.assertEqual(drags, [PanUpdateDetails(dx=30, dy=40)])
        self.assertEqual(ended, [()])

    def test_wrapping_does_not_fire(self):
        fired = []
        WidgetWithGesture(Text("a"), TapGesture(action=fired.append))
        self.assertEqual(fired, [])

    def test_other_events_do_not_fire(self):
        widget = WidgetWithGesture(Text("a"), LongPressGesture(minimum_duration=0.5))
        self.assertFalse(widget.gesture_wrapper.handle(TapDetails()))
        self.assertFalse(widget.gesture_wrapper.handle(LongPressDetails(duration=0.2)))
        self.assertTrue(widget.gesture_wrapper.handle(LongPressDetails(duration=0.8)))


class TestBasicWidgets(unittest.TestCase):
    def test_text_is_escaped(self):
        self.assertIn("&lt;script&gt;", Text("<script>").render())

    def test_icon_carries_bounce_and_scale(self):
        html = Icon("checklist.checked", scale=1.15, bounce=3).render()
        self.assertIn('data-symbol="checklist.checked"', html)
        self.assertIn('data-bounce="3"', html)
        self.assertIn("scale(1.15)", html)

    def test_empty_view_renders_nothing(self):
        self.assertEqual(EmptyView().render(), "")

    def test_required_css_classes_are_collected(self):
        column = Column(children=[Text("a"), Icon("b")])
        self.assertEqual(column.get_required_css_classes(), {"nt-column", "nt-text", "nt-icon"})


if __name__ == '__main__':
    unittest.main()

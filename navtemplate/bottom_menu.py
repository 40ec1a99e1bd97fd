# navtemplate/bottom_menu.py
"""
The bottom menu: a page area showing the selected entry's view and a bar of
icons underneath it.

Selection is a tiny state machine (`MenuSelection`): the selected index plus
one activation counter per entry. Re-tapping the selected entry still bumps
its counter so the icon replays its wiggle.
"""
import logging
import uuid
import weakref
from typing import Dict, List, Optional

from .animation import Animation
from .base import Key, Widget
from .colors import Colors
from .events import TapDetails
from .gestures import TapGesture
from .menu import MenuBarItem, MenuModel
from .state import State, StatefulWidget
from .widgets import AnyWidget, Container, Icon, Placeholder, Row, Spacer, Stack, WidgetWithGesture

logger = logging.getLogger(__name__)

SELECT_ANIMATION = Animation.spring(response=0.3, damping_fraction=0.6, blend_duration=0.6)
PAGE_ANIMATION = Animation.ease_in_out(duration=0.1)

SELECTED_SCALE = 1.15
UNSELECTED_SCALE = 1.0
ICON_SIZE = 20
DEFAULT_BAR_HEIGHT = 90

# Bar buttons keep the same id across rebuilds so taps can be routed to them.
_MENU_NAMESPACE = uuid.UUID("5b0f8f46-8d3c-4d53-9a0c-2f6f1c8a7e21")


def menu_button_id(item_id: int) -> uuid.UUID:
    return uuid.uuid5(_MENU_NAMESPACE, f"menu-item-{item_id}")


class MenuSelection:
    """
    Selected index and per-entry activation counters for a menu of ``item_count`` entries.

    :param item_count: Number of entries currently displayed.
    """
    def __init__(self, item_count: int = 0):
        self.selected_index = 0
        self.bounce_values: List[int] = [0] * max(item_count, 0)

    @property
    def item_count(self) -> int:
        return len(self.bounce_values)

    @property
    def has_selection(self) -> bool:
        return self.item_count > 0

    def can_tap(self, index: int) -> bool:
        return 0 <= index < self.item_count

    def tap(self, index: int) -> bool:
        """
        Select ``index`` and bump its counter, even if it was already selected.

        Out-of-range indexes are rejected and leave the state untouched.
        """
        if not self.can_tap(index):
            return False
        self.selected_index = index
        self.bounce_values[index] += 1
        return True

    def resize(self, item_count: int) -> None:
        """
        Follow a change in the number of entries.

        Counters of surviving slots are kept, new slots start at zero. A
        selection that no longer fits resets to the first entry.
        """
        item_count = max(item_count, 0)
        if item_count == self.item_count:
            return
        if item_count < self.item_count:
            self.bounce_values = self.bounce_values[:item_count]
        else:
            self.bounce_values = self.bounce_values + [0] * (item_count - self.item_count)
        if self.selected_index >= item_count:
            self.selected_index = 0

    def is_selected(self, index: int) -> bool:
        return self.has_selection and index == self.selected_index

    def bounce_value(self, index: int) -> int:
        if 0 <= index < self.item_count:
            return self.bounce_values[index]
        return 0

    def snapshot(self) -> Dict[str, object]:
        return {"selected_index": self.selected_index, "bounce_values": list(self.bounce_values)}

    def __repr__(self):
        return f"MenuSelection(selected_index={self.selected_index}, bounce_values={self.bounce_values})"


class _ViewWithBottomMenuState(State):
    def initState(self):
        widget = self.get_widget()
        self.selection = MenuSelection(len(widget.items))
        self._menu_model = widget.menu_model
        # The model outlives views; it only holds this state weakly.
        on_change = weakref.WeakMethod(self._on_menu_order_changed)
        model = self._menu_model

        def listener():
            method = on_change()
            if method is None:
                model.remove_listener(listener)
            else:
                method()

        self._menu_listener = listener
        model.add_listener(listener)

    def dispose(self):
        self._menu_model.remove_listener(self._menu_listener)
        super().dispose()

    def _on_menu_order_changed(self):
        self.setState()

    def sorted_items(self) -> List[MenuBarItem]:
        """The entries in display order. Recomputed on every call."""
        widget = self.get_widget()
        return widget.menu_model.sort_menu_items(widget.items)

    def on_item_tapped(self, index: int) -> bool:
        # widget.items may have been reassigned since the last build.
        self.selection.resize(len(self.get_widget().items))
        if not self.selection.can_tap(index):
            logger.debug("Ignoring tap on menu slot %s (%s items)", index, self.selection.item_count)
            return False
        self.setState(lambda: self.selection.tap(index), animation=SELECT_ANIMATION)
        return True

    def items_changed(self) -> None:
        self.setState(lambda: self.selection.resize(len(self.get_widget().items)))

    # --- Rendering ---
    def _build_button(self, index: int, item: MenuBarItem) -> AnyWidget:
        selected = self.selection.is_selected(index)
        icon = Icon(
            item.selected_icon if selected else item.unselected_icon,
            color=Colors.accent if selected else Colors.tertiary,
            size=ICON_SIZE,
            scale=SELECTED_SCALE if selected else UNSELECTED_SCALE,
            bounce=self.selection.bounce_value(index),
        )
        layers: List[Widget] = [icon]
        if selected:
            glow = Container(css_class="nt-menu-glow", style=(
                f"background: radial-gradient(circle, {Colors.accent.with_opacity(0.2).to_css()} 5px, "
                "transparent 20px);"
            ))
            layers.insert(0, glow)
        button = Container(
            Stack(children=layers),
            css_class="nt-menu-button selected" if selected else "nt-menu-button",
            attrs={"data-index": index, "data-name": item.name},
        )
        tap = TapGesture(action=lambda _payload, i=index: self.on_item_tapped(i))
        return AnyWidget(WidgetWithGesture(_Identified(button, menu_button_id(item.id)), tap))

    def build(self) -> Widget:
        widget = self.get_widget()
        items = self.sorted_items()
        # Items may have been swapped without update_items(); never render out of bounds.
        self.selection.resize(len(items))

        if not items:
            return Stack(key=Key("bottom_menu_empty"), children=[Placeholder("No menu items")])

        page = Container(
            items[self.selection.selected_index].target_view,
            css_class="nt-menu-page",
            style=f"transition: {PAGE_ANIMATION.to_css()};",
        )

        slots: List[Widget] = []
        for index, item in enumerate(items):
            slots.extend([Spacer(), self._build_button(index, item), Spacer()])

        bar = Container(
            Row(children=slots),
            css_class="nt-bottom-menu",
            style=(f"height: {widget.bar_height}px; "
                   f"background: {Colors.side_sheet_bg.with_opacity(0.2).to_css()};"),
        )
        return Stack(key=Key("bottom_menu"), children=[page, bar])


class _Identified(Widget):
    """Gives a built subtree a caller-chosen identity."""
    def __init__(self, child: Widget, id: uuid.UUID):
        super().__init__(children=[child], id=id)
        self.child = child

    def render(self) -> str:
        html = self.child.render()
        # Tag the outer element so the window can map DOM clicks back to this id.
        return html.replace("<div", f'<div data-widget-id="{self.id}"', 1)


class ViewWithBottomMenu(StatefulWidget):
    """
    Shows the selected entry's page above a bar of menu icons.

    :param items: The entries, in any order. Display order comes from ``menu_model``.
    :param menu_model: Supplies the user's ordering.
    :param bar_height: Height of the bar in points.
    """
    def __init__(self, items: List[MenuBarItem], menu_model: MenuModel,
                 key: Optional[Key] = None, bar_height: int = DEFAULT_BAR_HEIGHT):
        self.items = list(items)
        self.menu_model = menu_model
        self.bar_height = bar_height
        super().__init__(key=key)

    def createState(self) -> _ViewWithBottomMenuState:
        return _ViewWithBottomMenuState()

    @property
    def selection(self) -> MenuSelection:
        return self._state.selection

    def update_items(self, items: List[MenuBarItem]) -> None:
        """Replace the entries and rebuild."""
        self.items = list(items)
        self._state.items_changed()

    def tap(self, index: int) -> bool:
        """Tap the entry at ``index`` of the displayed order."""
        return self._state.on_item_tapped(index)

    def dispatch_tap(self, widget_id, details: Optional[TapDetails] = None) -> bool:
        """
        Route a tap on the widget with ``widget_id`` to its gesture.

        :return: True if a gesture fired.
        """
        target = find_widget(self._state.build(), widget_id)
        if target is None or target.gesture_wrapper is None:
            return False
        return target.gesture_wrapper.handle(details or TapDetails())


def find_widget(root: Optional[Widget], widget_id) -> Optional[Widget]:
    """Depth-first search for the outermost widget whose id matches ``widget_id``."""
    if root is None:
        return None
    if str(root.id) == str(widget_id):
        return root
    for child in root.get_children():
        found = find_widget(child, widget_id)
        if found is not None:
            return found
    return None

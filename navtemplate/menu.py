# navtemplate/menu.py
import dataclasses
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .base import Widget
from .defaults import DefaultsStore
from .errors import MenuOrderError
from .widgets import EmptyView

logger = logging.getLogger(__name__)

MENU_ORDER_KEY = "MenuItemOrder"


@dataclass(frozen=True)
class MenuBarItem:
    """
    One entry of the bottom menu.

    :param id: Stable identity used to persist the user's ordering.
    :param name: Display name, shown on the ordering screen.
    :param unselected_icon: Symbol shown while the entry is not selected.
    :param selected_icon: Symbol shown while the entry is selected.
    :param target_view: The page displayed when the entry is selected.
    :param sort_order: Position assigned by MenuModel.
    """
    id: int
    name: str
    unselected_icon: str
    selected_icon: str
    target_view: Widget = dataclasses.field(default_factory=EmptyView, compare=False)
    sort_order: int = 0

    def with_sort_order(self, sort_order: int) -> 'MenuBarItem':
        return dataclasses.replace(self, sort_order=sort_order)


class MenuModel:
    """
    Owns the user's preferred ordering of the bottom menu.

    The ordering is persisted in the shared defaults as ``{str(id): position}``.
    Construct one per app and hand it to the views that need it.

    :param store: Shared defaults the ordering is read from and written to.
    :param order_key: Defaults key holding the ordering.
    """
    def __init__(self, store: DefaultsStore, order_key: str = MENU_ORDER_KEY):
        self.store = store
        self.order_key = order_key
        self.menu_order: Dict[int, int] = {}
        self.menu_items: List[MenuBarItem] = []
        self._listeners: List[Callable[[], None]] = []
        self.load_menu_order()

    # --- Listeners ---
    def add_listener(self, listener: Callable[[], None]):
        """Register a closure to be called when the items or their order change."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[], None]):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_listeners(self):
        for listener in list(self._listeners):
            listener()

    # --- Items ---
    def set_menu_items(self, items: List[MenuBarItem]):
        """
        Remember the app's menu entries for the ordering screen.

        Target views are dropped: the settings screen only lists names and icons.
        """
        self.menu_items = [dataclasses.replace(item, target_view=EmptyView()) for item in items]
        self._notify_listeners()

    # --- Ordering ---
    def load_menu_order(self):
        saved = self.store.get_dict(self.order_key) or {}
        order: Dict[int, int] = {}
        for key, value in saved.items():
            try:
                order[int(key)] = int(value)
            except (TypeError, ValueError):
                logger.warning("Ignoring malformed menu order entry %r: %r", key, value)
        self.menu_order = order

    def sort_menu_items(self, items: List[MenuBarItem]) -> List[MenuBarItem]:
        """
        Order ``items`` by the saved ordering.

        Items with a saved position come first, by that position. Items without
        one follow in the order they were given. The result is a permutation of
        ``items``; each item carries its effective ``sort_order``.
        """
        def sort_key(indexed):
            index, item = indexed
            saved = self.menu_order.get(item.id)
            if saved is not None:
                return (0, saved, index)
            return (1, 0, index)

        ordered = sorted(enumerate(items), key=sort_key)
        return [item.with_sort_order(self.menu_order.get(item.id, index)) for index, item in ordered]

    def save_menu_order(self, items: List[MenuBarItem]):
        order_dict = {str(item.id): item.sort_order for item in items}
        logger.info("Saving menu order: %s", order_dict)
        self.store.set(self.order_key, order_dict)
        self.load_menu_order()
        self._notify_listeners()

    def move_item(self, items: List[MenuBarItem], from_index: int, to_index: int) -> List[MenuBarItem]:
        """
        Move one entry of the (already sorted) list and save the result.

        :return: The reordered list with sort orders renumbered by position.
        """
        if not 0 <= from_index < len(items):
            raise MenuOrderError(f"Cannot move item {from_index}: menu has {len(items)} items")
        if not 0 <= to_index < len(items):
            raise MenuOrderError(f"Cannot move item to {to_index}: menu has {len(items)} items")
        reordered = list(items)
        reordered.insert(to_index, reordered.pop(from_index))
        updated = [item.with_sort_order(position) for position, item in enumerate(reordered)]
        self.save_menu_order(updated)
        return updated

    def reset_menu_order(self):
        """Forget the saved ordering; menus fall back to their declared order."""
        self.store.remove(self.order_key)
        self.load_menu_order()
        self._notify_listeners()

    def saved_position(self, item_id: int) -> Optional[int]:
        return self.menu_order.get(item_id)

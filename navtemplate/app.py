# navtemplate/app.py
"""
Composition root: builds the services once and hands them to the views.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from .bottom_menu import ViewWithBottomMenu
from .config import Config
from .defaults import DefaultsStore
from .image_cache import ImageCache
from .logging_setup import LogBook, setup_logging
from .menu import MenuBarItem, MenuModel
from .state import StatelessWidget
from .widgets import Column, Text, Widget

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    config: Config
    store: DefaultsStore
    menu_model: MenuModel
    image_cache: ImageCache
    log_book: LogBook


def create_services(config: Optional[Config] = None, target: Optional[str] = None,
                    console_logging: bool = True) -> AppServices:
    """Build every shared service from ``config`` and set up logging for ``target``."""
    config = config or Config()
    data_dir = config.get_path("data_dir")
    store = DefaultsStore(data_dir / f"{config.get('app_group')}.yaml")
    setup_logging(
        target or config.get_nested("logging.target", "NavTemplate"),
        store,
        level=config.get_nested("logging.level", "INFO"),
        max_lines=int(config.get_nested("logging.max_lines", 1000)),
        console=console_logging,
    )
    menu_model = MenuModel(store, order_key=config.get_nested("menu.order_key", "MenuItemOrder"))
    image_cache = ImageCache(
        store,
        icon_dir=config.get_path("image_cache.icon_dir"),
        memory_limit=int(config.get_nested("image_cache.memory_limit", 100)),
    )
    logger.debug("Services created (data dir %s)", data_dir)
    return AppServices(config, store, menu_model, image_cache, LogBook(store))


class PageView(StatelessWidget):
    """A titled page with a few lines of body text."""
    def __init__(self, title: str, lines: Optional[List[str]] = None):
        super().__init__()
        self.title = title
        self.lines = lines or []

    def build(self) -> Widget:
        return Column(css_class="nt-page",
                      children=[Text(self.title)] + [Text(line) for line in self.lines])


class MaintenancePage(StatelessWidget):
    """Shows the shared log history grouped by target."""
    def __init__(self, log_book: LogBook):
        super().__init__()
        self.log_book = log_book

    def build(self) -> Widget:
        children: List[Widget] = [Text("Maintenance")]
        for entry in self.log_book.get_log_list():
            children.append(Text(f"{entry.target} ({len(entry.logs)})"))
        return Column(css_class="nt-page", children=children)


def home_menu_items(services: AppServices) -> List[MenuBarItem]:
    """The home screen's menu, in declaration order."""
    return [
        MenuBarItem(0, "Maintenance", "wrench.and.screwdriver", "wrench.and.screwdriver.fill",
                    MaintenancePage(services.log_book)),
        MenuBarItem(1, "Tasks", "checklist", "checklist.checked", PageView("Tasks")),
        MenuBarItem(2, "Activities", "sun.horizon", "sun.horizon.fill", PageView("Activities")),
        MenuBarItem(3, "Calendar", "calendar", "calendar.badge.clock", PageView("Calendar")),
        MenuBarItem(4, "Year", "square.grid.3x3", "square.grid.3x3.fill", PageView("Year")),
        MenuBarItem(5, "Test", "testtube.2", "testtube.2", PageView("Test")),
    ]


def build_home(services: AppServices) -> ViewWithBottomMenu:
    items = home_menu_items(services)
    services.menu_model.set_menu_items(items)
    return ViewWithBottomMenu(
        items,
        services.menu_model,
        bar_height=int(services.config.get_nested("menu.bar_height", 90)),
    )

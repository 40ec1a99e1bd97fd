# navtemplate/__init__.py

"""
NavTemplate

A small declarative widget toolkit for a bottom-menu navigation app:
identity-preserving widget erasure with optional gestures, a bottom menu with
user-defined ordering, shared defaults, logging and an image cache.
"""

# --- Base Widget and State Management ---
from .base import Key, Widget
from .state import State, StatefulWidget, StatelessWidget
from .animation import Animation, Transaction
from .events import LongPressDetails, PanUpdateDetails, TapDetails
from .errors import ConfigError, DefaultsError, MenuOrderError, NavTemplateError

# --- Gestures and erasure ---
from .gestures import AnyGesture, DragGesture, Gesture, LongPressGesture, NOT_RECOGNIZED, TapGesture
from .widgets import (
    AnyWidget,
    Column,
    Container,
    EmptyView,
    Icon,
    Placeholder,
    Row,
    Spacer,
    Stack,
    Text,
    WidgetWithGesture,
    WidgetWithGestureType,
)

# --- Menu ---
from .menu import MenuBarItem, MenuModel
from .bottom_menu import MenuSelection, ViewWithBottomMenu

# --- Services ---
from .colors import Color, Colors
from .config import Config
from .defaults import DefaultsStore
from .logging_setup import LogBook, LogListEntry, setup_logging
from .image_cache import ImageCache
from .cached_image import CachedAsyncImage, ImageSource

__all__ = [
    'Key', 'Widget', 'State', 'StatefulWidget', 'StatelessWidget',
    'Animation', 'Transaction',
    'TapDetails', 'LongPressDetails', 'PanUpdateDetails',
    'NavTemplateError', 'ConfigError', 'DefaultsError', 'MenuOrderError',
    'Gesture', 'TapGesture', 'LongPressGesture', 'DragGesture', 'AnyGesture', 'NOT_RECOGNIZED',
    'AnyWidget', 'WidgetWithGesture', 'WidgetWithGestureType',
    'Text', 'Icon', 'EmptyView', 'Placeholder', 'Container', 'Column', 'Row', 'Stack', 'Spacer',
    'MenuBarItem', 'MenuModel', 'MenuSelection', 'ViewWithBottomMenu',
    'Color', 'Colors', 'Config', 'DefaultsStore',
    'LogBook', 'LogListEntry', 'setup_logging',
    'ImageCache', 'CachedAsyncImage', 'ImageSource',
]

__version__ = "0.1.0"

# navtemplate/state.py
import logging
import weakref
from typing import Callable, List, Optional

from .animation import Animation, Transaction
from .base import Key, Widget

logger = logging.getLogger(__name__)


# --- StatefulWidget Class ---
class StatefulWidget(Widget):
    """
    A widget that has mutable state managed by a State object.

    The state is created once, in the constructor, and lives as long as the
    widget instance. `render()` asks the state to build a widget tree and
    renders that.
    """
    def __init__(self, key: Optional[Key] = None):
        super().__init__(key=key)
        self._state = self.createState()
        self._state._set_widget(self)
        self._state.initState()

    def createState(self) -> 'State':
        """Create the mutable state for this widget."""
        raise NotImplementedError(f"{self.__class__.__name__} must implement createState()")

    def get_state(self) -> 'State':
        """Returns the associated State object."""
        return self._state

    def get_children(self) -> List[Widget]:
        built = self._state.build()
        return [built] if built is not None else []

    def render(self) -> str:
        built = self._state.build()
        return built.render() if built is not None else ""

    def dispose(self):
        """Tear down the state. The widget must not be rendered afterwards."""
        self._state.dispose()


class StatelessWidget(Widget):
    """
    A widget that describes part of the user interface by building a constellation
    of other widgets that describe the user interface more concretely.
    """
    def __init__(self, key: Optional[Key] = None):
        super().__init__(key=key)

    def build(self) -> Widget:
        """
        Describes the part of the user interface represented by this widget.
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement the build() method."
        )

    def get_children(self) -> List[Widget]:
        return [self.build()]

    def render(self) -> str:
        return self.build().render()


# --- State Class ---
class State:
    """
    Manages the mutable state for a StatefulWidget.

    Mutations go through `setState`, which applies them as one commit and then
    notifies listeners (a window, a test) that a rebuild is due.
    """
    def __init__(self):
        self._widget_ref: Optional[weakref.ref] = None
        self._listeners: List[Callable[['State'], None]] = []
        self.last_transaction: Optional[Transaction] = None
        self.commit_count = 0
        self.mounted = False

    def _set_widget(self, widget: 'StatefulWidget'):
        """Internal method to link State to its StatefulWidget."""
        self._widget_ref = weakref.ref(widget)
        self.mounted = True

    def initState(self):
        """
        Called once when this state object is created.

        This is the right place for one-time initialization, such as
        subscribing to controllers or models.
        """
        pass

    def dispose(self):
        """
        Called when this state object is removed permanently.

        Subclasses should override this method to release any resources,
        such as unsubscribing from models, and call super().
        """
        self.mounted = False
        self._listeners.clear()

    def get_widget(self) -> Optional['StatefulWidget']:
        """Safely retrieves the associated StatefulWidget instance."""
        return self._widget_ref() if self._widget_ref else None

    def build(self) -> Optional[Widget]:
        """Describes the part of the user interface represented by this state."""
        raise NotImplementedError(f"{self.__class__.__name__} must implement build()")

    def add_listener(self, listener: Callable[['State'], None]):
        """Register a closure to be called after every commit."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable[['State'], None]):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def setState(self, update: Optional[Callable[[], None]] = None,
                 animation: Optional[Animation] = None):
        """
        Apply ``update`` and notify listeners that the state has changed.

        Everything ``update`` mutates is observed together: listeners run once,
        after it returns. ``animation`` is recorded on `last_transaction` for
        renderers that want to ease the change.
        """
        if not self.mounted:
            logger.warning("setState called on %s after dispose", self.__class__.__name__)
            return
        if update is not None:
            update()
        self.last_transaction = Transaction(animation)
        self.commit_count += 1
        widget = self.get_widget()
        logger.debug("setState committed for %s (widget key: %s)",
                     self.__class__.__name__, getattr(widget, 'key', None))
        for listener in list(self._listeners):
            listener(self)

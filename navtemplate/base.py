# navtemplate/base.py
import html
import uuid
from typing import Any, Dict, List, Optional, Set, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .gestures import AnyGesture


# --- Key Class ---
class Key:
    """
    A unique identifier for a widget to help distinguish it across rebuilds.

    :param value: Any hashable value to uniquely represent the widget.
    """
    def __init__(self, value):
        self.value = value

    def __eq__(self, other):
        return isinstance(other, Key) and self.value == other.value

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"Key({self.value!r})"


def render_attrs(attrs: Dict[str, Any]) -> str:
    """
    Turn a dict of HTML attributes into an attribute string.

    ``None`` and ``False`` values are skipped, ``True`` renders a bare attribute.
    """
    parts = []
    for name, value in attrs.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(name)
        else:
            parts.append(f'{name}="{html.escape(str(value), quote=True)}"')
    return (" " + " ".join(parts)) if parts else ""


# --- Base Widget ---
class Widget:
    """
    The base class for all widgets in the toolkit.

    Every visual element inherits from `Widget` and implements its rendering logic.
    A widget's identity (`id`) is a UUID fixed at construction time.

    :param key: Optional Key to uniquely identify this widget in the widget tree.
    :param children: Optional list of child widgets (used for layout and nesting).
    :param id: Optional UUID to adopt as this widget's identity.

    :attr _children: List of child widgets.
    :attr _id: Identity token, generated if not provided.
    """
    def __init__(self,
                 key: Optional[Key] = None,
                 children: Optional[List['Widget']] = None,
                 id: Optional[uuid.UUID] = None):
        self.key = key
        self._children: List['Widget'] = children if children is not None else []
        self._id: uuid.UUID = id if id is not None else uuid.uuid4()

    @property
    def id(self) -> uuid.UUID:
        """The widget's identity. Immutable once created."""
        return self._id

    @property
    def gesture_wrapper(self) -> Optional['AnyGesture']:
        """
        The erased gesture this widget responds to, or None.

        Plain widgets have no gesture. Widgets that carry one override this.
        """
        return None

    def get_unique_id(self) -> Union[Key, str]:
        """
        Returns a unique identifier for the widget (Key if set, else the id as a string).

        :return: Key or string UUID
        """
        return self.key if self.key is not None else str(self._id)

    def get_children(self) -> List['Widget']:
        """
        Returns the list of child widgets.

        :return: List of widgets
        """
        return self._children

    def render_props(self) -> Dict[str, Any]:
        """
        Return a dictionary of properties relevant for rendering.

        Subclasses override this to return the values their HTML depends on.

        :return: Dict of render properties
        """
        return {}

    def get_required_css_classes(self) -> Set[str]:
        """
        Return a set of required CSS class names for this widget and its children.

        :return: Set of class names as strings
        """
        classes: Set[str] = set()
        for child in self.get_children():
            classes |= child.get_required_css_classes()
        return classes

    def render_children(self) -> str:
        return "".join(child.render() for child in self.get_children())

    def render(self) -> str:
        """
        Return the HTML for this widget.

        The default renders the children inside a plain div.
        """
        return f'<div{render_attrs({"data-id": str(self._id)})}>{self.render_children()}</div>'

    def __repr__(self):
        return f"{self.__class__.__name__}(id={self._id}, key={self.key})"

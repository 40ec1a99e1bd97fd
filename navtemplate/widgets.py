# navtemplate/widgets.py
import html
import uuid
from typing import Any, Dict, List, Optional, Set

from .base import Key, Widget, render_attrs
from .colors import Color
from .gestures import AnyGesture, Gesture


# Sentinel meaning "no gesture argument was passed to AnyWidget".
_UNSET = object()


# --- Gesture capable widgets ---
class WidgetWithGestureType(Widget):
    """
    A widget that always carries an erased gesture.

    Subclasses must return an `AnyGesture` from `gesture_wrapper`, never None.
    """
    @property
    def gesture_wrapper(self) -> AnyGesture:
        raise NotImplementedError(f"{self.__class__.__name__} must provide gesture_wrapper")


class WidgetWithGesture(WidgetWithGestureType):
    """
    Attaches a gesture to a widget.

    The result keeps the wrapped widget's identity and rendering. The gesture's
    payload is discarded: holders only learn that it fired.

    :param widget: The widget to decorate.
    :param gesture: Any recognizer (tap, drag, long press...).
    """
    def __init__(self, widget: Widget, gesture: Gesture):
        super().__init__(key=widget.key, children=[widget], id=widget.id)
        self.widget = widget
        self._gesture_wrapper = AnyGesture(gesture)

    @property
    def gesture_wrapper(self) -> AnyGesture:
        return self._gesture_wrapper

    def render_props(self) -> Dict[str, Any]:
        return self.widget.render_props()

    def render(self) -> str:
        return self.widget.render()


class AnyWidget(Widget):
    """
    Erases a concrete widget behind a uniform handle.

    Keeps the wrapped widget's `id` and rendering untouched and captures its
    optional gesture once, here. Pass ``gesture_wrapper`` to supply the
    capability explicitly (None forces "no gesture"); otherwise the widget's
    own `gesture_wrapper` is read.

    :param widget: The widget to erase.
    :param gesture_wrapper: Optional explicit gesture capability.
    """
    def __init__(self, widget: Widget, gesture_wrapper: Any = _UNSET):
        super().__init__(key=widget.key, id=widget.id)
        self._widget = widget
        if gesture_wrapper is _UNSET:
            gesture_wrapper = widget.gesture_wrapper
        self._gesture_wrapper: Optional[AnyGesture] = gesture_wrapper

    @property
    def gesture_wrapper(self) -> Optional[AnyGesture]:
        return self._gesture_wrapper

    @property
    def has_gesture(self) -> bool:
        return self._gesture_wrapper is not None

    def get_children(self) -> List[Widget]:
        return self._widget.get_children()

    def get_required_css_classes(self) -> Set[str]:
        return self._widget.get_required_css_classes()

    def render_props(self) -> Dict[str, Any]:
        return self._widget.render_props()

    def render(self) -> str:
        return self._widget.render()

    def __repr__(self):
        return f"AnyWidget({self._widget!r}, gesture={self._gesture_wrapper!r})"


# --- Basic Elements ---
class Text(Widget):
    """A run of text. Content is escaped on render."""
    def __init__(self, data: str, key: Optional[Key] = None,
                 color: Optional[Color] = None, id: Optional[uuid.UUID] = None):
        super().__init__(key=key, id=id)
        self.data = data
        self.color = color

    def render_props(self) -> Dict[str, Any]:
        return {"data": self.data, "color": self.color.to_css() if self.color else None}

    def get_required_css_classes(self) -> Set[str]:
        return {"nt-text"}

    def render(self) -> str:
        style = f"color: {self.color.to_css()};" if self.color else None
        attrs = render_attrs({"class": "nt-text", "data-id": str(self.id), "style": style})
        return f"<span{attrs}>{html.escape(self.data)}</span>"


class Icon(Widget):
    """
    A symbol from the icon font, e.g. ``"checklist.checked"``.

    ``bounce`` is an activation counter: each new value asks the renderer to
    replay the wiggle animation.
    """
    def __init__(self, name: str, key: Optional[Key] = None,
                 color: Optional[Color] = None, size: int = 20,
                 scale: float = 1.0, bounce: int = 0,
                 id: Optional[uuid.UUID] = None):
        super().__init__(key=key, id=id)
        self.name = name
        self.color = color
        self.size = size
        self.scale = scale
        self.bounce = bounce

    def render_props(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "color": self.color.to_css() if self.color else None,
            "size": self.size,
            "scale": self.scale,
            "bounce": self.bounce,
        }

    def get_required_css_classes(self) -> Set[str]:
        return {"nt-icon"}

    def render(self) -> str:
        style = f"font-size: {self.size}px; transform: scale({self.scale});"
        if self.color:
            style += f" color: {self.color.to_css()};"
        attrs = render_attrs({
            "class": "nt-icon",
            "data-id": str(self.id),
            "data-symbol": self.name,
            "data-bounce": self.bounce,
            "style": style,
        })
        return f"<i{attrs}></i>"


class EmptyView(Widget):
    """Renders nothing."""
    def render(self) -> str:
        return ""


class Placeholder(Widget):
    """A labelled empty state."""
    def __init__(self, label: str = "", key: Optional[Key] = None):
        super().__init__(key=key)
        self.label = label

    def get_required_css_classes(self) -> Set[str]:
        return {"nt-placeholder"}

    def render(self) -> str:
        attrs = render_attrs({"class": "nt-placeholder", "data-id": str(self.id)})
        return f"<div{attrs}>{html.escape(self.label)}</div>"


# --- Layout ---
class _Layout(Widget):
    css_class = "nt-layout"

    def __init__(self, children: Optional[List[Widget]] = None, key: Optional[Key] = None,
                 css_class: Optional[str] = None, style: Optional[str] = None,
                 attrs: Optional[Dict[str, Any]] = None):
        super().__init__(key=key, children=children)
        self.extra_class = css_class
        self.style = style
        self.attrs = attrs or {}

    def render_props(self) -> Dict[str, Any]:
        return {"css_class": self.extra_class, "style": self.style, **self.attrs}

    def get_required_css_classes(self) -> Set[str]:
        return {self.css_class} | super().get_required_css_classes()

    def render(self) -> str:
        classes = " ".join(c for c in (self.css_class, self.extra_class) if c)
        attrs = render_attrs({"class": classes, "data-id": str(self.id),
                              "style": self.style, **self.attrs})
        return f"<div{attrs}>{self.render_children()}</div>"


class Container(_Layout):
    css_class = "nt-container"

    def __init__(self, child: Optional[Widget] = None, key: Optional[Key] = None, **kwargs):
        super().__init__(children=[child] if child is not None else [], key=key, **kwargs)


class Column(_Layout):
    css_class = "nt-column"


class Row(_Layout):
    css_class = "nt-row"


class Stack(_Layout):
    css_class = "nt-stack"


class Spacer(Widget):
    def get_required_css_classes(self) -> Set[str]:
        return {"nt-spacer"}

    def render(self) -> str:
        return '<div class="nt-spacer"></div>'


# Static CSS for the classes above, collected by the preview window.
CSS_RULES: Dict[str, str] = {
    "nt-text": ".nt-text { font-family: -apple-system, 'Segoe UI', sans-serif; }",
    "nt-icon": ".nt-icon { display: inline-block; font-style: normal; transition: transform 0.3s; }",
    "nt-placeholder": ".nt-placeholder { display: flex; align-items: center; justify-content: center; opacity: 0.6; height: 100%; }",
    "nt-container": ".nt-container { display: block; }",
    "nt-column": ".nt-column { display: flex; flex-direction: column; }",
    "nt-row": ".nt-row { display: flex; flex-direction: row; align-items: center; }",
    "nt-stack": ".nt-stack { position: relative; width: 100%; height: 100%; }",
    "nt-spacer": ".nt-spacer { flex: 1; }",
}
